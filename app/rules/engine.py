# app/rules/engine.py

from __future__ import annotations

from fractions import Fraction
from typing import List

from app.math.rational import EIGHTH, HALF, QUARTER, SIXTH, THIRD, TWO_THIRDS
from schemas import HeirCensus, HeirKind, HeirShare, ShareType

from .registry import heir_display_name

K = HeirKind


# =========================
# Helper buat HeirShare furūḍ
# =========================
def _fi(kind: HeirKind, count: int, fraction: Fraction, reason: str) -> HeirShare:
    return HeirShare(
        kind=kind,
        display_name=heir_display_name(kind, count),
        share_type=ShareType.FIXED,
        type_label="fixed",
        fraction=fraction,
        count=count,
        justification=reason,
    )


# =========================
# Mesin penentu furūḍ
# =========================
def determine_furudh(census: HeirCensus) -> List[HeirShare]:
    """
    Menghasilkan daftar bagian furūḍ (fixed) untuk sensus yang sudah difilter hijāb.
    Saudara yang sudah mahjūb tidak lagi mengurangi bagian ibu.
    Bagian ‘ashabah, ‘aul, radd dan kasus khusus ditangani di tahap berikutnya.
    """
    items: List[HeirShare] = []
    h = census
    has_desc = h.has_descendants()
    has_male_asc = h.has_male_ascendant()

    # -----------------------
    # 1) Suami / Istri
    # -----------------------
    if h.husband > 0:
        if has_desc:
            items.append(_fi(K.HUSBAND, h.husband, QUARTER, "1/4 because the deceased has descendants"))
        else:
            items.append(_fi(K.HUSBAND, h.husband, HALF, "1/2 because the deceased has no descendants"))

    if h.wife > 0:
        reason_tail = "shared equally among the wives" if h.wife > 1 else ""
        if has_desc:
            reason = "1/8 because the deceased has descendants"
            frac = EIGHTH
        else:
            reason = "1/4 because the deceased has no descendants"
            frac = QUARTER
        items.append(_fi(K.WIFE, h.wife, frac, f"{reason}, {reason_tail}" if reason_tail else reason))

    # -----------------------
    # 2) Ayah (1/6 hanya bila ada keturunan; tanpa keturunan ia ‘ashabah murni)
    # -----------------------
    if h.father > 0 and has_desc:
        items.append(_fi(K.FATHER, h.father, SIXTH, "1/6 because the deceased has descendants"))

    # -----------------------
    # 3) Ibu
    # -----------------------
    if h.mother > 0:
        if has_desc:
            items.append(_fi(K.MOTHER, h.mother, SIXTH, "1/6 because the deceased has descendants"))
        elif h.sibling_count() >= 2:
            items.append(_fi(K.MOTHER, h.mother, SIXTH, "1/6 because the deceased has two or more siblings"))
        else:
            items.append(_fi(K.MOTHER, h.mother, THIRD, "1/3 with no descendants and fewer than two siblings"))

    # -----------------------
    # 4) Kakek (hanya bila ayah tiada)
    # -----------------------
    if h.grandfather > 0 and h.father == 0 and has_desc:
        items.append(_fi(K.GRANDFATHER, h.grandfather, SIXTH,
                         "1/6 in place of the father because the deceased has descendants"))

    # -----------------------
    # 5) Nenek (terhalang oleh ibu / ayah)
    # -----------------------
    maternal_gm = h.grandmother_mother > 0 and h.mother == 0
    paternal_gm = h.grandmother_father > 0 and h.mother == 0 and h.father == 0
    if maternal_gm and paternal_gm:
        # kedua nenek berbagi satu 1/6
        items.append(_fi(K.GRANDMOTHER_MOTHER, h.grandmother_mother, SIXTH / 2,
                         "Half of 1/6, shared with the paternal grandmother"))
        items.append(_fi(K.GRANDMOTHER_FATHER, h.grandmother_father, SIXTH / 2,
                         "Half of 1/6, shared with the maternal grandmother"))
    elif maternal_gm:
        items.append(_fi(K.GRANDMOTHER_MOTHER, h.grandmother_mother, SIXTH,
                         "1/6 because the mother is absent"))
    elif paternal_gm:
        items.append(_fi(K.GRANDMOTHER_FATHER, h.grandmother_father, SIXTH,
                         "1/6 because the mother and the father are absent"))

    # -----------------------
    # 6) Anak perempuan (tanpa anak laki-laki)
    # -----------------------
    if h.daughter > 0 and h.son == 0:
        if h.daughter == 1:
            items.append(_fi(K.DAUGHTER, 1, HALF, "1/2 for a single daughter with no son"))
        else:
            items.append(_fi(K.DAUGHTER, h.daughter, TWO_THIRDS,
                             "2/3 shared equally by two or more daughters with no son"))

    # -----------------------
    # 7) Cucu perempuan (dari anak laki-laki)
    # -----------------------
    if h.granddaughter > 0 and h.grandson == 0 and h.son == 0:
        if h.daughter == 0:
            if h.granddaughter == 1:
                items.append(_fi(K.GRANDDAUGHTER, 1, HALF,
                                 "1/2 for a single son's daughter with no son, daughter or son's son"))
            else:
                items.append(_fi(K.GRANDDAUGHTER, h.granddaughter, TWO_THIRDS,
                                 "2/3 shared by the son's daughters with no son, daughter or son's son"))
        elif h.daughter == 1:
            # Tamām al-thuluthayn
            items.append(_fi(K.GRANDDAUGHTER, h.granddaughter, SIXTH,
                             "1/6 completing two thirds together with the single daughter"))

    # -----------------------
    # 8) Saudari kandung
    # -----------------------
    if h.full_sister > 0 and h.full_brother == 0:
        with_daughters = h.has_female_descendants()
        if not with_daughters and not has_desc and not has_male_asc:
            if h.full_sister == 1:
                items.append(_fi(K.FULL_SISTER, 1, HALF,
                                 "1/2 for a single full sister with no descendants, father or grandfather"))
            else:
                items.append(_fi(K.FULL_SISTER, h.full_sister, TWO_THIRDS,
                                 "2/3 shared by the full sisters with no descendants, father or grandfather"))

    # -----------------------
    # 9) Saudari seayah
    # -----------------------
    if h.paternal_sister > 0 and h.paternal_brother == 0 and h.full_brother == 0:
        with_daughters = h.has_female_descendants() and h.full_sister == 0
        if not with_daughters and not has_desc and not has_male_asc:
            if h.full_sister == 0:
                if h.paternal_sister == 1:
                    items.append(_fi(K.PATERNAL_SISTER, 1, HALF,
                                     "1/2 for a single paternal sister with no full sister"))
                else:
                    items.append(_fi(K.PATERNAL_SISTER, h.paternal_sister, TWO_THIRDS,
                                     "2/3 shared by the paternal sisters with no full sister"))
            elif h.full_sister == 1:
                items.append(_fi(K.PATERNAL_SISTER, h.paternal_sister, SIXTH,
                                 "1/6 completing two thirds together with the single full sister"))

    # -----------------------
    # 10) Saudara seibu – lintas gender, dibagi rata
    # -----------------------
    maternal = h.maternal_sibling_count()
    if maternal > 0 and not has_desc and not has_male_asc:
        if maternal == 1:
            items.append(_fi(K.MATERNAL_SIBLINGS, 1, SIXTH, "1/6 for a single maternal sibling"))
        else:
            items.append(_fi(K.MATERNAL_SIBLINGS, maternal, THIRD,
                             "1/3 shared equally by the maternal siblings, male and female alike"))

    return items
