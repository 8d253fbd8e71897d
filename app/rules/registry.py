# app/rules/registry.py
"""
Static registry of the four madhab profiles and the heir name catalogue.

The tables live in madhabs.json; the engine never reads them directly, it
receives a RuleSet from the caller (or from `get_rule_set`).
"""

from functools import lru_cache
from typing import Dict, List, Tuple, Union

from errors import UnknownMadhabError
from schemas import HeirKind, Madhab, MadhabProfile, RuleSet

from .loader import load_json

DATA_FILE = "madhabs.json"


@lru_cache(maxsize=1)
def _table() -> Dict:
    return load_json(DATA_FILE)


@lru_cache(maxsize=1)
def _profiles() -> Dict[Madhab, MadhabProfile]:
    raw = _table()["madhabs"]
    return {Madhab(key): MadhabProfile.model_validate(value) for key, value in raw.items()}


def _as_madhab(madhab: Union[Madhab, str]) -> Madhab:
    try:
        return Madhab(madhab)
    except ValueError:
        raise UnknownMadhabError(str(madhab)) from None


def get_madhab(madhab: Union[Madhab, str]) -> MadhabProfile:
    return _profiles()[_as_madhab(madhab)]


def get_rule_set(madhab: Union[Madhab, str]) -> RuleSet:
    return get_madhab(madhab).rules


def list_madhabs() -> List[MadhabProfile]:
    profiles = _profiles()
    return [profiles[m] for m in Madhab]


def heir_display_name(kind: Union[HeirKind, str], count: int = 1) -> str:
    names = _table()["heir_names"][HeirKind(kind).value]
    if count > 1 and kind not in (HeirKind.MATERNAL_SIBLINGS, HeirKind.TREASURY, HeirKind.SISTER_CHILDREN):
        return f"{names['en']} ({count})"
    return names["en"]


def heir_catalogue() -> Dict[str, Dict[str, str]]:
    return dict(_table()["heir_names"])


def blood_kin_classes() -> List[Tuple[HeirKind, ...]]:
    return [tuple(HeirKind(k) for k in group) for group in _table()["blood_kin_classes"]]
