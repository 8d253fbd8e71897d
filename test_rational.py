# Di dalam file: test_rational.py

from fractions import Fraction

import pytest

from app.math.ashl import apply_awl, bandingkan
from app.math.rational import (
    HALF,
    SIXTH,
    ZERO,
    format_fraction,
    is_zero,
    lcm_of_denominators,
    parse_fraction,
    safe_divide,
    to_decimal,
)
from errors import CalculationError
from schemas import HeirKind, HeirShare, ShareType, merge_share


def _share(kind, fraction, label="fixed"):
    return HeirShare(kind=kind, display_name=kind.value, share_type=ShareType.FIXED,
                     type_label=label, fraction=Fraction(fraction), justification=label)


class TestRational:

    def test_kpk_penyebut(self):
        assert lcm_of_denominators([Fraction(1, 4), Fraction(2, 3), SIXTH]) == 12

    def test_kpk_kosong(self):
        assert lcm_of_denominators([]) == 1

    def test_kpk_abaikan_nol(self):
        assert lcm_of_denominators([ZERO, HALF]) == 2

    def test_bagi_nol(self):
        with pytest.raises(CalculationError):
            safe_divide(HALF, ZERO)

    def test_bagi(self):
        assert safe_divide(Fraction(1, 12), Fraction(2, 3)) == Fraction(1, 8)

    def test_format(self):
        assert format_fraction(Fraction(3, 13)) == "3/13"
        assert format_fraction(Fraction(4, 4)) == "1"

    def test_parse(self):
        assert parse_fraction("2/3") == Fraction(2, 3)
        assert parse_fraction(1) == 1
        with pytest.raises(ValueError):
            parse_fraction("abc")
        with pytest.raises(ValueError):
            parse_fraction(True)
        with pytest.raises(ValueError):
            parse_fraction(0.5)

    def test_nol_dan_desimal(self):
        assert is_zero(Fraction(0, 5))
        assert to_decimal(Fraction(1, 4)) == 0.25


class TestAwl:

    def test_bandingkan(self):
        assert bandingkan(6, 6) == "mumatsalah"
        assert bandingkan(3, 6) == "mudakholah"
        assert bandingkan(4, 6) == "muwafaqoh"
        assert bandingkan(3, 4) == "mubayanah"

    def test_tanpa_furudh(self):
        outcome = apply_awl([])
        assert outcome.asl == 1
        assert outcome.final_base == 1
        assert not outcome.applied

    def test_aul(self):
        outcome = apply_awl([
            _share(HeirKind.HUSBAND, "1/2"),
            _share(HeirKind.FULL_SISTER, "2/3"),
        ])
        assert (outcome.asl, outcome.final_base, outcome.applied) == (6, 7, True)
        assert [s.fraction for s in outcome.shares] == [Fraction(3, 7), Fraction(4, 7)]
        assert [s.original_fraction for s in outcome.shares] == [HALF, Fraction(2, 3)]


class TestMergeShare:

    def test_gabung(self):
        merged = merge_share(_share(HeirKind.FATHER, "1/6"), _share(HeirKind.FATHER, "1/3", "residuary"),
                             "residuary")
        assert merged.fraction == HALF
        assert merged.type_label == "fixed + residuary"
        assert merged.share_type == ShareType.COMBINED

    def test_jenis_berbeda(self):
        with pytest.raises(ValueError):
            merge_share(_share(HeirKind.FATHER, "1/6"), _share(HeirKind.MOTHER, "1/6"), "radd")

    def test_serialisasi_pecahan(self):
        data = _share(HeirKind.MOTHER, "1/6").model_dump(mode="json")
        assert data["fraction"] == "1/6"
        assert data["original_fraction"] is None
