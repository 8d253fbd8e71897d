# Di dalam file: test_hijab.py

import pytest

from app.rules.hijab import block_heirs
from app.rules.registry import get_rule_set
from schemas import HeirCensus, HeirKind

K = HeirKind
BLOCKS = get_rule_set("shafii")
SHARES = get_rule_set("maliki")


def run_hijab(rules=BLOCKS, **counts):
    """Fungsi pembantu: jalankan hijab dan kembalikan (sensus, {jenis: penghalang})."""
    outcome = block_heirs(HeirCensus(**counts), rules)
    return outcome, {b.kind: b.blocking_kind for b in outcome.blocked}


class TestHajb:

    def test_hajb_kakek_oleh_ayah(self):
        outcome, blocked = run_hijab(father=1, grandfather=1)
        assert blocked == {K.GRANDFATHER: "father"}
        assert outcome.census.grandfather == 0

    def test_hajb_nenek_oleh_ibu(self):
        _, blocked = run_hijab(mother=1, grandmother_mother=1, grandmother_father=1)
        assert blocked == {K.GRANDMOTHER_MOTHER: "mother", K.GRANDMOTHER_FATHER: "mother"}

    def test_hajb_nenek_dari_ayah_oleh_ayah(self):
        _, blocked = run_hijab(father=1, grandmother_mother=1, grandmother_father=1)
        assert blocked == {K.GRANDMOTHER_FATHER: "father"}

    def test_hajb_cucu_oleh_anak_laki(self):
        _, blocked = run_hijab(son=1, grandson=2, granddaughter=1)
        assert blocked[K.GRANDSON] == "son"
        assert blocked[K.GRANDDAUGHTER] == "son"

    def test_cucu_perempuan_gugur_oleh_dua_anak_perempuan(self):
        _, blocked = run_hijab(daughter=2, granddaughter=1)
        assert blocked[K.GRANDDAUGHTER] == "daughter"

    def test_cucu_perempuan_tidak_gugur_bila_ada_cucu_laki(self):
        _, blocked = run_hijab(daughter=2, granddaughter=1, grandson=1)
        assert K.GRANDDAUGHTER not in blocked

    def test_hajb_saudara_oleh_ayah(self):
        _, blocked = run_hijab(father=1, full_brother=1, full_sister=1, paternal_brother=1, paternal_sister=1)
        for kind in (K.FULL_BROTHER, K.FULL_SISTER, K.PATERNAL_BROTHER, K.PATERNAL_SISTER):
            assert blocked[kind] == "father"

    def test_hajb_saudara_oleh_keturunan_laki(self):
        _, blocked = run_hijab(grandson=1, full_brother=1)
        assert blocked[K.FULL_BROTHER] == "male_descendant"

    def test_kakek_menghalangi_saudara(self):
        outcome, blocked = run_hijab(BLOCKS, grandfather=1, full_brother=1, paternal_sister=1)
        assert blocked[K.FULL_BROTHER] == "grandfather"
        assert blocked[K.PATERNAL_SISTER] == "grandfather"
        assert any("grandfather" in n for n in outcome.notes)

    def test_kakek_bersama_saudara(self):
        outcome, blocked = run_hijab(SHARES, grandfather=1, full_brother=1)
        assert blocked == {}
        assert outcome.census.full_brother == 1
        assert outcome.notes == []

    def test_hajb_saudara_seibu_oleh_keturunan(self):
        _, blocked = run_hijab(daughter=1, maternal_brother=1, maternal_sister=1)
        assert blocked[K.MATERNAL_BROTHER] == "descendant"
        assert blocked[K.MATERNAL_SISTER] == "descendant"

    def test_hajb_saudara_seibu_oleh_kakek(self):
        _, blocked = run_hijab(SHARES, grandfather=1, maternal_sister=2)
        assert blocked[K.MATERNAL_SISTER] == "male_ascendant"

    def test_hajb_saudara_seayah_oleh_saudara_kandung(self):
        _, blocked = run_hijab(full_brother=1, paternal_brother=1, paternal_sister=1)
        assert blocked[K.PATERNAL_BROTHER] == "full_brother"
        assert blocked[K.PATERNAL_SISTER] == "full_brother"

    def test_hajb_saudari_seayah_oleh_dua_saudari_kandung(self):
        _, blocked = run_hijab(full_sister=2, paternal_sister=1)
        assert blocked[K.PATERNAL_SISTER] == "full_sister"

    def test_saudari_seayah_diashabahkan_saudara_seayah(self):
        _, blocked = run_hijab(full_sister=2, paternal_sister=1, paternal_brother=1)
        assert K.PATERNAL_SISTER not in blocked

    def test_saudari_kandung_maal_ghair_menghalangi_seayah(self):
        _, blocked = run_hijab(daughter=1, full_sister=1, paternal_brother=1, paternal_sister=1)
        assert blocked[K.PATERNAL_BROTHER] == "full_sister"
        assert blocked[K.PATERNAL_SISTER] == "full_sister"


class TestHajbAshobahJauh:

    def test_saudara_menghalangi_paman_dan_sepupu(self):
        _, blocked = run_hijab(full_brother=1, full_uncle=1, full_cousin=2)
        assert blocked[K.FULL_UNCLE] == "nearer_agnate"
        assert blocked[K.FULL_COUSIN] == "nearer_agnate"

    def test_yang_terdekat_menghalangi_yang_lain(self):
        _, blocked = run_hijab(full_nephew=1, full_uncle=1, paternal_cousin=1)
        assert K.FULL_NEPHEW not in blocked
        assert blocked[K.FULL_UNCLE] == "full_nephew"
        assert blocked[K.PATERNAL_COUSIN] == "full_nephew"

    def test_paman_kandung_menghalangi_paman_seayah(self):
        _, blocked = run_hijab(full_uncle=1, paternal_uncle=1)
        assert blocked == {K.PATERNAL_UNCLE: "full_uncle"}

    def test_anak_perempuan_saja_tidak_menghalangi_paman(self):
        _, blocked = run_hijab(daughter=1, full_uncle=1)
        assert blocked == {}


class TestSifatHijab:

    @pytest.mark.parametrize("rules", [BLOCKS, SHARES])
    @pytest.mark.parametrize("counts", [
        {"father": 1, "grandfather": 1, "son": 1, "grandson": 1, "full_brother": 2},
        {"grandfather": 1, "full_sister": 2, "paternal_sister": 1, "maternal_brother": 1, "full_uncle": 1},
        {"mother": 1, "grandmother_mother": 1, "daughter": 2, "granddaughter": 1, "full_sister": 1,
         "paternal_brother": 1, "full_nephew": 1, "paternal_cousin": 1},
    ])
    def test_idempoten(self, rules, counts):
        first = block_heirs(HeirCensus(**counts), rules)
        second = block_heirs(first.census, rules)
        assert second.blocked == []
        assert second.census == first.census

    def test_sensus_asli_tidak_diubah(self):
        census = HeirCensus(father=1, grandfather=1, full_brother=2)
        outcome = block_heirs(census, BLOCKS)
        assert census.grandfather == 1
        assert census.full_brother == 2
        assert outcome.census.grandfather == 0
        assert outcome.census.full_brother == 0

    def test_satu_entri_per_jenis(self):
        # nenek dari ayah memenuhi dua kaidah, tetap satu entri
        outcome, _ = run_hijab(mother=1, father=1, grandmother_father=1)
        kinds = [b.kind for b in outcome.blocked]
        assert kinds.count(K.GRANDMOTHER_FATHER) == 1
