# Di dalam file: madhab_comparison.py
"""
Perbandingan hasil keempat madzhab untuk estate dan ahli waris yang sama.
Hasil hanafi dipakai sebagai pembanding.
"""

import logging
from typing import Any, Dict, List, Mapping, NamedTuple, Union

from app.math.rational import to_decimal
from app.rules.registry import get_madhab
from calculator import calculate_inheritance
from schemas import (
    CalculationResult,
    EstateInput,
    HeirCensus,
    HeirKind,
    Madhab,
    MadhabComparison,
    MadhabDifference,
)

logger = logging.getLogger(__name__)

BASELINE = Madhab.HANAFI


class AmountDifference(NamedTuple):
    first: float
    second: float
    difference: float


def _amounts(result: CalculationResult) -> Dict[HeirKind, float]:
    return {s.kind: s.amount for s in result.shares}


def compare_all_madhabs(
    estate: Union[EstateInput, Mapping[str, Any]],
    heirs: Union[HeirCensus, Mapping[str, Any]],
) -> MadhabComparison:
    results = {m: calculate_inheritance(m, estate, heirs) for m in Madhab}
    all_successful = all(r.success for r in results.values())

    differences: List[MadhabDifference] = []
    if all_successful:
        amounts = {m: _amounts(r) for m, r in results.items()}
        kinds: List[HeirKind] = []
        for m in Madhab:
            for kind in amounts[m]:
                if kind not in kinds:
                    kinds.append(kind)

        for kind in kinds:
            base = amounts[BASELINE].get(kind, 0.0)
            for m in Madhab:
                if m == BASELINE:
                    continue
                other = amounts[m].get(kind, 0.0)
                if other == base:
                    continue
                gap = abs(other - base)
                differences.append(MadhabDifference(
                    madhab=m,
                    madhab_name=get_madhab(m).name,
                    kind=kind,
                    amount=round(gap, 2),
                    percentage=gap / base if base > 0 else 0.0,
                ))

    logger.debug("Madhab comparison: %d differences", len(differences))
    return MadhabComparison(
        results=results,
        consistent=all_successful and not differences,
        differences=differences,
    )


def get_madhab_differences(comparison: MadhabComparison, first: Madhab,
                           second: Madhab) -> Dict[HeirKind, AmountDifference]:
    """Selisih nominal per jenis ahli waris antara dua madzhab (berdasarkan ahli waris madzhab pertama)."""
    r1 = comparison.results[Madhab(first)]
    r2 = comparison.results[Madhab(second)]
    if not r1.success or not r2.success:
        return {}

    other = _amounts(r2)
    out: Dict[HeirKind, AmountDifference] = {}
    for share in r1.shares:
        a2 = other.get(share.kind, 0.0)
        if share.amount != a2:
            out[share.kind] = AmountDifference(share.amount, a2, round(abs(share.amount - a2), 2))
    return out


def get_madhab_percentages(comparison: MadhabComparison) -> Dict[Madhab, Dict[HeirKind, float]]:
    percentages: Dict[Madhab, Dict[HeirKind, float]] = {m: {} for m in Madhab}
    for m, result in comparison.results.items():
        if result.success:
            percentages[m] = {s.kind: to_decimal(s.fraction) * 100 for s in result.shares}
    return percentages


def get_madhab_summary(comparison: MadhabComparison) -> Dict[Madhab, Dict[str, float]]:
    summary: Dict[Madhab, Dict[str, float]] = {}
    for m in Madhab:
        result = comparison.results[m]
        if result.success:
            summary[m] = {
                "net_estate": result.net_estate,
                "total_distributed": round(sum(s.amount for s in result.shares), 2),
                "heir_count": len(result.shares),
            }
        else:
            summary[m] = {"net_estate": 0.0, "total_distributed": 0.0, "heir_count": 0}
    return summary
