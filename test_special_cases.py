# Di dalam file: test_special_cases.py

from fractions import Fraction

import pytest

from app.rules.hijab import block_heirs
from app.rules.registry import get_rule_set
from app.special.router import detect_special_case
from calculator import calculate_inheritance
from schemas import HeirCensus, HeirKind, SpecialCaseKind

AKDARIYYA_HEIRS = {"husband": 1, "mother": 1, "grandfather": 1, "full_sister": 1}
MUSHARRAKA_HEIRS = {"husband": 1, "mother": 1, "maternal_brother": 2, "full_brother": 1}


def detect(madhab, **counts):
    rules = get_rule_set(madhab)
    return detect_special_case(block_heirs(HeirCensus(**counts), rules).census, rules)


def calc(madhab, heirs):
    result = calculate_inheritance(madhab, {"total": 2700}, heirs)
    assert result.success, result.error
    return result


def kinds(result):
    return [c.kind for c in result.special_cases]


# ========== DETEKSI ==========
class TestDeteksi:

    def test_umariyyah(self):
        assert detect("hanafi", husband=1, father=1, mother=1) == SpecialCaseKind.UMARIYYAH

    def test_umariyyah_walau_saudara_mahjub(self):
        # Saudara terhalang ayah, jadi tidak dihitung
        assert detect("hanafi", husband=1, father=1, mother=1, full_brother=2) == SpecialCaseKind.UMARIYYAH

    def test_bukan_umariyyah_bila_ada_anak(self):
        assert detect("hanafi", husband=1, father=1, mother=1, son=1) is None

    def test_akdariyya_hanya_bila_kakek_bersama_saudara(self):
        assert detect("maliki", **AKDARIYYA_HEIRS) == SpecialCaseKind.AKDARIYYA
        assert detect("hanbali", **AKDARIYYA_HEIRS) == SpecialCaseKind.AKDARIYYA
        assert detect("shafii", **AKDARIYYA_HEIRS) is None
        assert detect("hanafi", **AKDARIYYA_HEIRS) is None

    def test_bukan_akdariyya_dengan_dua_saudari(self):
        assert detect("maliki", husband=1, mother=1, grandfather=1, full_sister=2) is None

    def test_musharraka(self):
        assert detect("shafii", **MUSHARRAKA_HEIRS) == SpecialCaseKind.MUSHARRAKA

    def test_musharraka_dengan_nenek(self):
        assert detect("maliki", husband=1, grandmother_mother=1, maternal_sister=2, full_brother=1) \
            == SpecialCaseKind.MUSHARRAKA

    def test_bukan_musharraka_tanpa_saudara_kandung(self):
        assert detect("shafii", husband=1, mother=1, maternal_brother=2) is None


# ========== UMARIYYAH ==========
class TestUmariyyah:

    @pytest.mark.parametrize("madhab", ["hanafi", "maliki", "shafii", "hanbali"])
    def test_dengan_suami(self, madhab):
        result = calc(madhab, {"husband": 1, "father": 1, "mother": 1})
        assert result.share_for("husband").fraction == Fraction(1, 2)
        assert result.share_for("mother").fraction == Fraction(1, 6)
        assert result.share_for("father").fraction == Fraction(1, 3)
        assert SpecialCaseKind.UMARIYYAH in kinds(result)

    def test_dengan_istri(self):
        result = calc("shafii", {"wife": 1, "father": 1, "mother": 1})
        assert result.share_for("wife").fraction == Fraction(1, 4)
        assert result.share_for("mother").fraction == Fraction(1, 4)
        assert result.share_for("father").fraction == Fraction(1, 2)

    def test_dengan_saudara_mahjub(self):
        result = calc("shafii", {"husband": 1, "father": 1, "mother": 1, "full_brother": 2})
        assert result.share_for("husband").fraction == Fraction(1, 2)
        assert result.share_for("mother").fraction == Fraction(1, 6)
        assert result.share_for("father").fraction == Fraction(1, 3)
        assert result.share_for("full_brother") is None
        assert SpecialCaseKind.UMARIYYAH in kinds(result)


# ========== MUSHARRAKA ==========
class TestMusharraka:

    @pytest.mark.parametrize("madhab", ["shafii", "maliki"])
    def test_saudara_kandung_berserikat(self, madhab):
        result = calc(madhab, MUSHARRAKA_HEIRS)
        assert result.share_for("husband").fraction == Fraction(1, 2)
        assert result.share_for("mother").fraction == Fraction(1, 6)
        assert result.share_for("maternal_siblings").fraction == Fraction(2, 9)
        assert result.share_for("full_brother").fraction == Fraction(1, 9)
        assert result.corrected_base == 18
        assert SpecialCaseKind.MUSHARRAKA in kinds(result)

    def test_saudari_kandung_ikut_dihitung_per_kepala(self):
        result = calc("shafii", {"husband": 1, "mother": 1, "maternal_brother": 2,
                                 "full_brother": 1, "full_sister": 1})
        assert result.share_for("maternal_siblings").fraction == Fraction(1, 6)
        assert result.share_for("full_brother").fraction == Fraction(1, 12)
        assert result.share_for("full_sister").fraction == Fraction(1, 12)

    @pytest.mark.parametrize("madhab", ["hanafi", "hanbali"])
    def test_tanpa_musharraka_saudara_kandung_tidak_dapat(self, madhab):
        result = calc(madhab, MUSHARRAKA_HEIRS)
        assert result.share_for("maternal_siblings").fraction == Fraction(1, 3)
        assert result.share_for("full_brother") is None
        assert SpecialCaseKind.MUSHARRAKA not in kinds(result)
        assert any("Musharraka is not applied" in n for n in result.notes)


# ========== AKDARIYYA ==========
class TestAkdariyya:

    @pytest.mark.parametrize("madhab", ["maliki", "hanbali"])
    def test_akdariyya(self, madhab):
        result = calc(madhab, AKDARIYYA_HEIRS)
        assert result.asl == 6
        assert result.final_base == 27
        assert result.awl_applied
        assert result.share_for("husband").fraction == Fraction(1, 3)
        assert result.share_for("mother").fraction == Fraction(2, 9)
        assert result.share_for("grandfather").fraction == Fraction(8, 27)
        assert result.share_for("full_sister").fraction == Fraction(4, 27)
        assert result.share_for("grandfather").amount == 800
        assert result.share_for(HeirKind.FULL_SISTER).saham == 4
        assert kinds(result) == [SpecialCaseKind.AKDARIYYA, SpecialCaseKind.AWL]

    @pytest.mark.parametrize("madhab", ["shafii", "hanafi"])
    def test_kakek_menghalangi_saudari(self, madhab):
        result = calc(madhab, AKDARIYYA_HEIRS)
        assert result.share_for("full_sister") is None
        assert result.share_for("grandfather").fraction == Fraction(1, 6)
        assert not result.awl_applied
