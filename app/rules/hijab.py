# app/rules/hijab.py

from __future__ import annotations

from typing import Dict, List, NamedTuple

from schemas import BlockedHeir, HeirCensus, HeirKind, RuleSet

from .registry import heir_display_name

K = HeirKind

FULL_AND_PATERNAL_SIBLINGS = [K.FULL_BROTHER, K.FULL_SISTER, K.PATERNAL_BROTHER, K.PATERNAL_SISTER]
MATERNAL_SIBLINGS = [K.MATERNAL_BROTHER, K.MATERNAL_SISTER]

# Urutan ‘ashabah jauh: yang lebih dekat menghalangi yang sesudahnya
DISTANT_AGNATES = [
    K.FULL_NEPHEW,
    K.PATERNAL_NEPHEW,
    K.FULL_UNCLE,
    K.PATERNAL_UNCLE,
    K.FULL_COUSIN,
    K.PATERNAL_COUSIN,
]


class HijabOutcome(NamedTuple):
    census: HeirCensus
    blocked: List[BlockedHeir]
    notes: List[str]


class _Blocker:
    """Working copy of the counts plus the append-only blocking log."""

    def __init__(self, census: HeirCensus):
        self.counts: Dict[HeirKind, int] = {k: census.count(k) for k in census.present()}
        self.log: List[BlockedHeir] = []

    def q(self, kind: HeirKind) -> int:
        return self.counts.get(kind, 0)

    def block(self, kind: HeirKind, by: str, reason: str) -> None:
        if self.q(kind) > 0:
            self.log.append(BlockedHeir(kind=kind, blocking_kind=by, reason=reason))
            self.counts[kind] = 0

    def has_descendants(self) -> bool:
        return self.q(K.SON) + self.q(K.DAUGHTER) + self.q(K.GRANDSON) + self.q(K.GRANDDAUGHTER) > 0

    def has_male_descendants(self) -> bool:
        return self.q(K.SON) + self.q(K.GRANDSON) > 0

    def has_female_descendants(self) -> bool:
        return self.q(K.DAUGHTER) + self.q(K.GRANDDAUGHTER) > 0


def block_heirs(census: HeirCensus, rules: RuleSet) -> HijabOutcome:
    """
    Terapkan kaidah hijāb (hajb hirmān) dengan urutan tetap.
    Aturan yang belakangan bergantung pada hasil aturan sebelumnya,
    jadi urutan di bawah tidak boleh diubah.
    Mengembalikan sensus baru; `census` pemanggil tidak diubah.
    """
    b = _Blocker(census)
    notes: List[str] = []

    # 1) Ayah menghalangi kakek
    if b.q(K.FATHER) > 0:
        b.block(K.GRANDFATHER, K.FATHER.value, "The grandfather is excluded by the father")

    # 2) Ibu menghalangi kedua nenek; ayah menghalangi nenek dari ayah
    if b.q(K.MOTHER) > 0:
        b.block(K.GRANDMOTHER_MOTHER, K.MOTHER.value, "The maternal grandmother is excluded by the mother")
        b.block(K.GRANDMOTHER_FATHER, K.MOTHER.value, "The paternal grandmother is excluded by the mother")
    if b.q(K.FATHER) > 0:
        b.block(K.GRANDMOTHER_FATHER, K.FATHER.value, "The paternal grandmother is excluded by the father")

    # 3) Anak laki-laki menghalangi cucu (dari anak laki-laki)
    if b.q(K.SON) > 0:
        b.block(K.GRANDSON, K.SON.value, "The son's son is excluded by the nearer son")
        b.block(K.GRANDDAUGHTER, K.SON.value, "The son's daughter is excluded by the son")

    # 4) ≥2 anak perempuan menghabiskan 2/3, cucu pr tanpa mu‘ashshib gugur
    if b.q(K.DAUGHTER) >= 2 and b.q(K.GRANDSON) == 0:
        b.block(
            K.GRANDDAUGHTER, K.DAUGHTER.value,
            "The son's daughter is excluded by two or more daughters who complete two thirds, "
            "and no son's son makes her residuary",
        )

    # 5) Keturunan laki-laki atau ayah menghalangi saudara kandung/seayah
    if b.has_male_descendants() or b.q(K.FATHER) > 0:
        by = K.FATHER.value if b.q(K.FATHER) > 0 else "male_descendant"
        label = "the father" if b.q(K.FATHER) > 0 else "a male descendant"
        for kind in FULL_AND_PATERNAL_SIBLINGS:
            b.block(kind, by, f"The {heir_display_name(kind).lower()} is excluded by {label}")

    # 6) Kakek menghalangi saudara bila madzhab berpendapat demikian
    if b.q(K.GRANDFATHER) > 0 and rules.grandfather_with_siblings == "blocks":
        before = len(b.log)
        for kind in FULL_AND_PATERNAL_SIBLINGS:
            b.block(kind, K.GRANDFATHER.value,
                    f"The {heir_display_name(kind).lower()} is excluded by the grandfather")
        if len(b.log) > before:
            notes.append("The grandfather takes the place of the father and excludes full and paternal siblings")

    # 7) Saudara seibu gugur oleh keturunan atau leluhur laki-laki
    if b.has_descendants() or b.q(K.FATHER) > 0 or b.q(K.GRANDFATHER) > 0:
        by = "descendant" if b.has_descendants() else "male_ascendant"
        label = "a descendant" if b.has_descendants() else "a male ascendant"
        for kind in MATERNAL_SIBLINGS:
            b.block(kind, by, f"The {heir_display_name(kind).lower()} is excluded by {label}")

    # 8) Saudara lk kandung menghalangi saudara lk seayah
    if b.q(K.FULL_BROTHER) > 0:
        b.block(K.PATERNAL_BROTHER, K.FULL_BROTHER.value,
                "The paternal half-brother is excluded by the full brother, whose tie is stronger")
        b.block(K.PATERNAL_SISTER, K.FULL_BROTHER.value,
                "The paternal half-sister is excluded by the full brother, whose tie is stronger")

    if b.q(K.FULL_SISTER) >= 2 and b.q(K.PATERNAL_BROTHER) == 0 and not b.has_female_descendants():
        b.block(
            K.PATERNAL_SISTER, K.FULL_SISTER.value,
            "The paternal half-sister is excluded by two or more full sisters who complete two thirds, "
            "and no paternal brother makes her residuary",
        )

    # 8b) Saudari kandung yang menjadi ‘ashabah ma‘a al-ghair berkedudukan seperti saudara lk kandung
    if b.q(K.FULL_SISTER) > 0 and b.q(K.FULL_BROTHER) == 0 and b.has_female_descendants():
        for kind in (K.PATERNAL_BROTHER, K.PATERNAL_SISTER):
            b.block(kind, K.FULL_SISTER.value,
                    f"The {heir_display_name(kind).lower()} is excluded by the full sister, "
                    "residuary together with the female descendants")

    # 9) ‘Ashabah jauh: gugur oleh ‘ashabah kelas yang lebih dekat ...
    closer_class = (
        b.has_male_descendants()
        or b.q(K.FATHER) > 0
        or b.q(K.GRANDFATHER) > 0
        or b.q(K.FULL_BROTHER) > 0
        or b.q(K.PATERNAL_BROTHER) > 0
        or (b.has_female_descendants() and (b.q(K.FULL_SISTER) + b.q(K.PATERNAL_SISTER)) > 0)
    )
    if closer_class:
        for kind in DISTANT_AGNATES:
            b.block(kind, "nearer_agnate",
                    f"The {heir_display_name(kind).lower()} is excluded by a nearer residuary heir")
    else:
        # ... atau oleh yang paling dekat di antara mereka sendiri
        for i, nearer in enumerate(DISTANT_AGNATES):
            if b.q(nearer) > 0:
                for kind in DISTANT_AGNATES[i + 1:]:
                    b.block(kind, nearer.value,
                            f"The {heir_display_name(kind).lower()} is excluded by the "
                            f"{heir_display_name(nearer).lower()}")
                break

    updates = {k: 0 for k in census.present() if b.q(k) == 0}
    return HijabOutcome(census=census.with_counts(updates), blocked=b.log, notes=notes)
