# app/math/rational.py

from fractions import Fraction
from functools import reduce
from math import lcm
from typing import Iterable, Union

from errors import CalculationError

ZERO = Fraction(0)
ONE = Fraction(1)
HALF = Fraction(1, 2)
THIRD = Fraction(1, 3)
QUARTER = Fraction(1, 4)
SIXTH = Fraction(1, 6)
EIGHTH = Fraction(1, 8)
TWO_THIRDS = Fraction(2, 3)


def is_zero(value: Fraction) -> bool:
    return value.numerator == 0


def to_decimal(value: Fraction) -> float:
    return value.numerator / value.denominator


def safe_divide(a: Fraction, b: Fraction) -> Fraction:
    """Division where a zero divisor is an engine fault, not a ZeroDivisionError."""
    if is_zero(b):
        raise CalculationError("Division by a zero fraction", context={"dividend": format_fraction(a)})
    return a / b


def lcm_of_denominators(values: Iterable[Fraction]) -> int:
    """
    KPK of the denominators of all non-zero fractions.
    Empty input (no fixed shares) gives 1.
    """
    dens = [v.denominator for v in values if not is_zero(v)]
    return reduce(lcm, dens, 1)


def format_fraction(value: Fraction) -> str:
    if value.denominator == 1:
        return str(value.numerator)
    return f"{value.numerator}/{value.denominator}"


def parse_fraction(value: Union[Fraction, int, str]) -> Fraction:
    """Accepts Fraction, int or text like "2/3" / "1"."""
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise ValueError("boolean is not a fraction")
    if isinstance(value, int):
        return Fraction(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return Fraction(text)
        except (ValueError, ZeroDivisionError) as exc:
            raise ValueError(f"invalid fraction '{value}'") from exc
    raise ValueError(f"cannot read {type(value).__name__} as a fraction")
