# app/rules/asabah.py

from __future__ import annotations

from fractions import Fraction
from typing import List, NamedTuple, Optional, Tuple

from errors import CalculationError
from schemas import (
    HeirCensus,
    HeirKind,
    HeirShare,
    RuleSet,
    ShareType,
    SpecialCase,
    SpecialCaseKind,
)

from .hijab import DISTANT_AGNATES
from .registry import heir_display_name

K = HeirKind

# (jenis, bobot per kepala): laki-laki 2, perempuan 1
Member = Tuple[HeirKind, int]


class AsabahOutcome(NamedTuple):
    awards: List[HeirShare]
    group_name: Optional[str]
    special_cases: List[SpecialCase]


def _members(census: HeirCensus, *pairs: Member) -> List[Member]:
    return [(kind, weight) for kind, weight in pairs if census.count(kind) > 0]


def select_asabah_group(census: HeirCensus, rules: RuleSet) -> Tuple[Optional[str], List[Member]]:
    """
    Tentukan satu kelompok ‘ashabah menurut urutan tetap; berhenti di kelompok
    pertama yang tidak kosong.
    """
    h = census

    # 1) Anak laki-laki (+ anak perempuan, 2:1)
    if h.son > 0:
        return "sons with daughters", _members(h, (K.SON, 2), (K.DAUGHTER, 1))
    # 2) Cucu laki-laki (+ cucu perempuan, 2:1)
    if h.grandson > 0:
        return "son's sons with son's daughters", _members(h, (K.GRANDSON, 2), (K.GRANDDAUGHTER, 1))
    # 3) Ayah
    if h.father > 0:
        return "father", [(K.FATHER, 1)]
    # 4) Kakek (bersama saudara bila madzhab membolehkan muqasamah)
    if h.grandfather > 0:
        siblings = h.full_sibling_count() + h.paternal_sibling_count()
        if siblings > 0 and rules.grandfather_with_siblings == "shares":
            return "grandfather with siblings", _members(
                h,
                (K.GRANDFATHER, 2),
                (K.FULL_BROTHER, 2),
                (K.FULL_SISTER, 1),
                (K.PATERNAL_BROTHER, 2),
                (K.PATERNAL_SISTER, 1),
            )
        if siblings == 0:
            return "grandfather", [(K.GRANDFATHER, 1)]
    # 5) Saudara lk kandung (+ saudari kandung, 2:1)
    if h.full_brother > 0:
        return "full brothers with full sisters", _members(h, (K.FULL_BROTHER, 2), (K.FULL_SISTER, 1))
    # 5b) Saudari kandung ‘ashabah ma‘a al-ghair
    if h.full_sister > 0 and h.has_female_descendants():
        return "full sisters with female descendants", [(K.FULL_SISTER, 1)]
    # 6) Saudara lk seayah (+ saudari seayah, 2:1)
    if h.paternal_brother > 0:
        return "paternal brothers with paternal sisters", _members(
            h, (K.PATERNAL_BROTHER, 2), (K.PATERNAL_SISTER, 1))
    # 6b) Saudari seayah ‘ashabah ma‘a al-ghair
    if h.paternal_sister > 0 and h.has_female_descendants():
        return "paternal sisters with female descendants", [(K.PATERNAL_SISTER, 1)]
    # 7-12) Keponakan → paman → sepupu
    for kind in DISTANT_AGNATES:
        if h.count(kind) > 0:
            return heir_display_name(kind).lower(), [(kind, 1)]
    return None, []


def distribute_asabah(census: HeirCensus, rules: RuleSet, remainder: Fraction) -> AsabahOutcome:
    """
    Bagi sisa ke kelompok ‘ashabah terpilih:
    award = sisa × (bobot kelompok jenis / total bobot).
    Sisa <= 0 (masalah adil atau 'aul) berarti tidak ada bagian ‘ashabah.
    """
    if remainder <= 0:
        return AsabahOutcome(awards=[], group_name=None, special_cases=[])

    group_name, members = select_asabah_group(census, rules)
    if not members:
        return AsabahOutcome(awards=[], group_name=None, special_cases=[])

    weights = [(kind, weight * census.count(kind)) for kind, weight in members]
    total_weight = sum(w for _, w in weights)
    if total_weight <= 0:
        raise CalculationError("Residuary group has no positive weight", context={"group": group_name})

    special: List[SpecialCase] = []
    if group_name == "grandfather with siblings":
        special.append(SpecialCase(
            kind=SpecialCaseKind.GRANDFATHER_WITH_SIBLINGS,
            name="Grandfather with siblings",
            description="The grandfather shares the residue with the siblings as a brother (2:1)",
        ))

    mixed = len(weights) > 1
    awards = []
    for kind, weight in weights:
        count = census.count(kind)
        if mixed:
            reason = f"Residuary ({group_name}), weight {weight} of {total_weight}"
        else:
            reason = f"Residuary ({group_name}), takes the remainder"
        awards.append(HeirShare(
            kind=kind,
            display_name=heir_display_name(kind, count),
            share_type=ShareType.RESIDUAL,
            type_label="residuary",
            fraction=remainder * Fraction(weight, total_weight),
            count=count,
            justification=reason,
        ))
    return AsabahOutcome(awards=awards, group_name=group_name, special_cases=special)
