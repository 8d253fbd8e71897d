# app/math/ashl.py

from fractions import Fraction
from typing import List, NamedTuple, Tuple
import math

from schemas import HeirShare

from .rational import is_zero, lcm_of_denominators


def bandingkan(a: int, b: int) -> str:
    """
    Bandingkan dua penyebut furudh:
    - mumatsalah (sama)
    - mudakholah (salah satu masuk ke lainnya)
    - muwafaqoh (ada faktor persekutuan)
    - mubayanah (berbeda total)
    """
    if a == b:
        return "mumatsalah"
    if a % b == 0 or b % a == 0:
        return "mudakholah"
    if math.gcd(a, b) > 1:
        return "muwafaqoh"
    return "mubayanah"


class AwlOutcome(NamedTuple):
    shares: List[HeirShare]
    asl: int                  # Ashlul Mas'alah (KPK penyebut)
    final_base: int           # AM setelah 'aul (sama dengan asl bila tidak 'aul)
    total_raw: int            # jumlah saham atas asl
    applied: bool
    comparisons: List[Tuple[int, int, str]]


def compute_ashl(shares: List[HeirShare]) -> Tuple[int, List[Tuple[int, int, str]]]:
    """KPK semua penyebut furudh bukan nol; 1 bila tidak ada furudh."""
    dens = sorted({s.fraction.denominator for s in shares if not is_zero(s.fraction)})
    comparisons = [
        (dens[i], dens[j], bandingkan(dens[i], dens[j]))
        for i in range(len(dens))
        for j in range(i + 1, len(dens))
    ]
    return lcm_of_denominators(s.fraction for s in shares), comparisons


def apply_awl(shares: List[HeirShare]) -> AwlOutcome:
    """
    Ubah tiap furudh menjadi saham atas asl. Bila jumlah saham > asl terjadi 'aul:
    setiap bagian menjadi saham / total_saham (bukan / asl) dan AM akhir = total_saham.
    Perbandingan antar ahli waris tidak berubah.
    """
    asl, comparisons = compute_ashl(shares)
    raw = [s.fraction.numerator * (asl // s.fraction.denominator) for s in shares]
    total_raw = sum(raw)

    if total_raw <= asl:
        return AwlOutcome(shares=list(shares), asl=asl, final_base=asl,
                          total_raw=total_raw, applied=False, comparisons=comparisons)

    reduced = [
        s.model_copy(update={
            "original_fraction": s.fraction,
            "fraction": Fraction(units, total_raw),
        })
        for s, units in zip(shares, raw)
    ]
    return AwlOutcome(shares=reduced, asl=asl, final_base=total_raw,
                      total_raw=total_raw, applied=True, comparisons=comparisons)
