# app/special/umariyyah.py
from typing import List

from app.math.rational import ONE, THIRD
from schemas import SPOUSES, HeirCensus, HeirKind, HeirShare


def is_umariyyah(census: HeirCensus) -> bool:
    # syarat: pasangan + ayah + ibu, tanpa keturunan, saudara < 2
    return (
        census.has_spouse()
        and census.father > 0
        and census.mother > 0
        and not census.has_descendants()
        and census.sibling_count() < 2
    )


def apply_umariyyah(furudh: List[HeirShare]) -> List[HeirShare]:
    """
    Ibu mendapat 1/3 dari sisa setelah bagian pasangan (bukan 1/3 harta):
    1/6 bersama suami, 1/4 bersama istri. Ayah mengambil sisanya sebagai ‘ashabah.
    """
    spouse = next(s for s in furudh if s.kind in SPOUSES)
    mother_fraction = (ONE - spouse.fraction) * THIRD
    out = []
    for s in furudh:
        if s.kind == HeirKind.MOTHER:
            s = s.model_copy(update={
                "fraction": mother_fraction,
                "justification": "Umariyyah: one third of what remains after the spouse's share",
            })
        out.append(s)
    return out
