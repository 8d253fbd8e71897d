# app/rules/dhawil_arham.py

from __future__ import annotations

from fractions import Fraction
from typing import List, NamedTuple, Optional

from schemas import (
    CalculationWarning,
    HeirCensus,
    HeirKind,
    HeirShare,
    RuleSet,
    ShareType,
    SpecialCase,
    SpecialCaseKind,
)

from .registry import blood_kin_classes, heir_display_name


class DhawilArhamOutcome(NamedTuple):
    awards: List[HeirShare]
    blood_kin_applied: bool
    treasury_applied: bool
    special_case: Optional[SpecialCase]
    notes: List[str]
    warnings: List[CalculationWarning]


def distribute_dhawil_arham(census: HeirCensus, rules: RuleSet, remainder: Fraction) -> DhawilArhamOutcome:
    """
    Sisa terakhir: kelas dzawil arham pertama yang ada mengambil seluruh sisa,
    dibagi menurut jumlah orang. Bila tidak ada (atau madzhab tidak mewariskan
    dzawil arham) sisa ke baitul mal, atau dibiarkan dengan peringatan.
    """
    notes: List[str] = []
    if remainder <= 0:
        return DhawilArhamOutcome([], False, False, None, notes, [])

    if rules.blood_kin_enabled:
        for group in blood_kin_classes():
            members = [(kind, census.count(kind)) for kind in group if census.count(kind) > 0]
            if not members:
                continue
            heads = sum(n for _, n in members)
            awards = [
                HeirShare(
                    kind=kind,
                    display_name=heir_display_name(kind, n),
                    share_type=ShareType.BLOOD_KIN,
                    type_label="blood kin",
                    fraction=remainder * Fraction(n, heads),
                    count=n,
                    justification="Distant kin (dhawil arham): the remainder after the fixed shares",
                )
                for kind, n in members
            ]
            special = SpecialCase(
                kind=SpecialCaseKind.BLOOD_KIN,
                name="Dhawil arham",
                description="Distant kin inherit because no residuary heir or radd recipient exists",
            )
            return DhawilArhamOutcome(awards, True, False, special, notes, [])
    else:
        notes.append("Distant kin (dhawil arham) do not inherit in this madhab")

    if rules.treasury_fallback:
        notes.append("The remainder goes to the public treasury (bayt al-mal)")
        treasury = HeirShare(
            kind=HeirKind.TREASURY,
            display_name=heir_display_name(HeirKind.TREASURY),
            share_type=ShareType.TREASURY,
            type_label="treasury",
            fraction=remainder,
            count=1,
            justification="Remainder with no residuary, radd recipient or distant kin",
        )
        return DhawilArhamOutcome([treasury], False, True, None, notes, [])

    warning = CalculationWarning(
        level="warning",
        message="A remainder is left unassigned: no residuary, radd recipient, distant kin or treasury fallback",
    )
    return DhawilArhamOutcome([], False, False, None, notes, [warning])
