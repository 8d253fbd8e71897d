# app/special/musharraka.py
from fractions import Fraction
from typing import List

from app.math.rational import THIRD
from app.rules.registry import heir_display_name
from schemas import HeirCensus, HeirKind, HeirShare, ShareType

K = HeirKind


def is_musharraka(census: HeirCensus) -> bool:
    """
    Suami, ibu/nenek, ≥2 saudara seibu, ≥1 saudara lk kandung,
    tanpa keturunan dan tanpa ayah/kakek: ‘ashabah kandung tidak kebagian sisa.
    """
    has_mother_line = census.mother > 0 or census.grandmother_mother > 0 or census.grandmother_father > 0
    return (
        census.husband > 0
        and has_mother_line
        and census.maternal_sibling_count() >= 2
        and census.full_brother > 0
        and not census.has_descendants()
        and not census.has_male_ascendant()
    )


def apply_musharraka(furudh: List[HeirShare], census: HeirCensus) -> List[HeirShare]:
    """
    Saudara kandung ikut berserikat dalam 1/3 saudara seibu, dibagi rata per kepala
    (laki-laki sama dengan perempuan), seolah-olah semuanya saudara seibu.
    """
    maternal = census.maternal_sibling_count()
    heads = maternal + census.full_brother + census.full_sister
    out = []
    for s in furudh:
        if s.kind == K.MATERNAL_SIBLINGS:
            s = s.model_copy(update={
                "fraction": THIRD * Fraction(maternal, heads),
                "justification": f"Musharraka: the maternal third shared per head among {heads} siblings",
            })
        out.append(s)
    for kind in (K.FULL_BROTHER, K.FULL_SISTER):
        n = census.count(kind)
        if n == 0:
            continue
        out.append(HeirShare(
            kind=kind,
            display_name=heir_display_name(kind, n),
            share_type=ShareType.FIXED,
            type_label="fixed",
            fraction=THIRD * Fraction(n, heads),
            count=n,
            justification="Musharraka: shares the maternal siblings' third as if a maternal sibling",
        ))
    return out
