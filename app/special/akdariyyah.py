# app/special/akdariyyah.py
from fractions import Fraction
from typing import List

from app.math.rational import HALF, SIXTH
from app.rules.registry import heir_display_name
from schemas import HeirCensus, HeirKind, HeirShare, ShareType

K = HeirKind


def is_akdariyyah(census: HeirCensus) -> bool:
    # syarat: suami, ibu, kakek, tepat satu saudari kandung; tanpa keturunan, ayah & saudara lain
    return (
        census.husband > 0
        and census.mother > 0
        and census.grandfather > 0
        and census.father == 0
        and census.full_sister == 1
        and census.full_brother == 0
        and census.paternal_sibling_count() == 0
        and census.maternal_sibling_count() == 0
        and not census.has_descendants()
    )


def _upsert(lst: List[HeirShare], kind: HeirKind, fraction: Fraction, reason: str) -> List[HeirShare]:
    lst = [x for x in lst if x.kind != kind]
    lst.append(HeirShare(
        kind=kind,
        display_name=heir_display_name(kind),
        share_type=ShareType.FIXED,
        type_label="fixed",
        fraction=fraction,
        count=1,
        justification=reason,
    ))
    return lst


def apply_akdariyyah(furudh: List[HeirShare]) -> List[HeirShare]:
    """
    Langkah pertama Akdariyyah: Suami 1/2, Ibu 1/3, Kakek 1/6, Ukht 1/2
    (masalah 'aul dari 6 ke 9). Pembagian ulang kakek & ukht dilakukan setelah 'aul.
    """
    out = _upsert(furudh, K.GRANDFATHER, SIXTH, "Akdariyya: 1/6 before sharing with the sister")
    out = _upsert(out, K.FULL_SISTER, HALF, "Akdariyya: 1/2 before sharing with the grandfather")
    return out


def redistribute_after_awl(shares: List[HeirShare]) -> List[HeirShare]:
    """Kakek dan ukht menggabungkan bagian mereka lalu muqasamah 2:1."""
    pool = sum(s.fraction for s in shares if s.kind in (K.GRANDFATHER, K.FULL_SISTER))
    out = []
    for s in shares:
        if s.kind == K.GRANDFATHER:
            s = s.model_copy(update={
                "fraction": pool * Fraction(2, 3),
                "justification": "Akdariyya: two thirds of the pooled grandfather and sister shares",
            })
        elif s.kind == K.FULL_SISTER:
            s = s.model_copy(update={
                "fraction": pool * Fraction(1, 3),
                "justification": "Akdariyya: one third of the pooled grandfather and sister shares",
            })
        out.append(s)
    return out
