# app/math/inkisar.py

from math import gcd, lcm
from typing import Dict, List, NamedTuple

from schemas import HeirKind, HeirShare

from .rational import lcm_of_denominators


def _relation(a: int, b: int) -> str:
    """
    Menentukan hubungan perbandingan dua bilangan sesuai istilah kitab:
    - mumatsalah  : a == b
    - mudakholah  : salah satunya membagi yang lain
    - mubayanah   : gcd(a,b) == 1
    - muwafaqoh   : selain itu
    """
    if a == b:
        return "mumatsalah"
    if a % b == 0 or b % a == 0:
        return "mudakholah"
    if gcd(a, b) == 1:
        return "mubayanah"
    return "muwafaqoh"


class TashihOutcome(NamedTuple):
    base: int                  # AM sebelum tashih
    multiplier: int
    corrected_base: int
    saham: Dict[HeirKind, int]
    notes: List[str]


def compute_tashih(shares: List[HeirShare]) -> TashihOutcome:
    """
    Cari AM terkecil agar saham setiap kelompok habis dibagi jumlah kepalanya
    (عدد الرؤوس), lalu kembalikan saham kelompok atas AM hasil tashih.
    Faktor per kelompok = ruus / gcd(ruus, saham); faktor gabungan = KPK-nya.
    """
    notes: List[str] = []
    base = lcm_of_denominators(s.fraction for s in shares)

    multiplier = 1
    for s in shares:
        saham_kelompok = s.fraction.numerator * (base // s.fraction.denominator)
        ruus = s.count
        if ruus <= 1 or saham_kelompok == 0 or saham_kelompok % ruus == 0:
            continue
        rel = _relation(saham_kelompok, ruus)
        factor = ruus // gcd(saham_kelompok, ruus)
        notes.append(
            f"Inkisar {s.display_name}: {ruus} heads, {saham_kelompok} shares → {rel} (factor {factor})"
        )
        multiplier = lcm(multiplier, factor)

    corrected = base * multiplier
    if multiplier > 1:
        notes.append(f"Tashih: base {base} × {multiplier} = {corrected}")

    saham = {
        s.kind: s.fraction.numerator * (corrected // s.fraction.denominator)
        for s in shares
    }
    return TashihOutcome(base=base, multiplier=multiplier, corrected_base=corrected,
                         saham=saham, notes=notes)
