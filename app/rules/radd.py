# app/rules/radd.py

from __future__ import annotations

from fractions import Fraction
from typing import List, NamedTuple, Optional

from app.math.rational import ZERO, safe_divide
from schemas import (
    SPOUSES,
    HeirCensus,
    HeirShare,
    RuleSet,
    ShareType,
    SpecialCase,
    SpecialCaseKind,
    merge_share,
)


class RaddOutcome(NamedTuple):
    shares: List[HeirShare]
    applied: bool
    special_case: Optional[SpecialCase]
    notes: List[str]


def apply_radd(shares: List[HeirShare], remainder: Fraction, census: HeirCensus, rules: RuleSet) -> RaddOutcome:
    """
    Terapkan radd: sisa dikembalikan ke dzawil furudh (bukan زوج/زوجة)
    sebanding dengan bagian masing-masing.
      - Tanpa penerima selain pasangan: bila madzhab membolehkan radd ke pasangan
        dan pasangan satu-satunya ahli waris, seluruh sisa untuk pasangan.
      - Selain itu sisa tetap (diteruskan ke dzawil arham / baitul mal).
    """
    if remainder <= 0:
        return RaddOutcome(shares=list(shares), applied=False, special_case=None, notes=[])

    notes: List[str] = []
    eligible = [s for s in shares if s.kind not in SPOUSES and s.share_type == ShareType.FIXED]

    if not eligible and rules.radd_to_spouse:
        spouse_only = set(census.present()) <= SPOUSES
        spouse = next((s for s in shares if s.kind in SPOUSES), None)
        if spouse is not None and spouse_only:
            notes.append("The remainder returns to the spouse because no other heir exists")
            eligible = [spouse]

    if not eligible:
        return RaddOutcome(shares=list(shares), applied=False, special_case=None, notes=notes)

    base = sum((s.fraction for s in eligible), ZERO)
    eligible_kinds = {s.kind for s in eligible}
    updated: List[HeirShare] = []
    for s in shares:
        if s.kind not in eligible_kinds:
            updated.append(s)
            continue
        portion = safe_divide(remainder * s.fraction, base)
        award = s.model_copy(update={"fraction": portion, "justification": "radd in proportion to the fixed share"})
        updated.append(merge_share(s, award, "radd", share_type=ShareType.REDISTRIBUTED))

    special = SpecialCase(
        kind=SpecialCaseKind.RADD,
        name="Radd",
        description="The surplus is returned to the fixed-share heirs in proportion to their shares",
    )
    return RaddOutcome(shares=updated, applied=True, special_case=special, notes=notes)
