# calculator.py

from __future__ import annotations

import logging
import time
from fractions import Fraction
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from app.math.ashl import apply_awl
from app.math.inkisar import compute_tashih
from app.math.rational import ONE, format_fraction, is_zero, lcm_of_denominators, to_decimal
from app.rules.asabah import distribute_asabah
from app.rules.dhawil_arham import distribute_dhawil_arham
from app.rules.engine import determine_furudh
from app.rules.hijab import block_heirs
from app.rules.radd import apply_radd
from app.rules.registry import get_madhab
from app.special.router import apply_post_awl, apply_special_cases
from errors import ERROR_MESSAGES, InheritanceError, InputValidationError
from schemas import (
    CalculationResult,
    CalculationTrace,
    CalculationWarning,
    EstateInput,
    HeirCensus,
    HeirShare,
    Madhab,
    MadhabProfile,
    RuleSet,
    SpecialCase,
    SpecialCaseKind,
    merge_share,
    total_fraction,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# --------------------------
# Konstanta skor keyakinan
# --------------------------
AWL_PENALTY = 0.98
RADD_PENALTY = 0.97
BLOOD_KIN_PENALTY = 0.95
MANY_SPECIAL_CASES_PENALTY = 0.96
DRIFT_PENALTY = 0.9
DRIFT_TOLERANCE = 0.001
MIN_CONFIDENCE = 0.8


# --------------------------
# Helper umum
# --------------------------
def _readable(exc: ValidationError) -> str:
    """Pesan pydantic → satu kalimat yang bisa dibaca pengguna."""
    parts = []
    for err in exc.errors():
        msg = err.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid input"


def _coerce(model: Type[M], value: Any) -> M:
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        raise InputValidationError(_readable(exc), context={"model": model.__name__}) from exc


def _merge_awards(shares: List[HeirShare], awards: List[HeirShare], label: str) -> List[HeirShare]:
    """Tambahkan bagian baru; jenis yang sudah ada digabung (misal "fixed + residuary")."""
    out = list(shares)
    for award in awards:
        idx = next((i for i, s in enumerate(out) if s.kind == award.kind), None)
        if idx is None:
            out.append(award)
        else:
            out[idx] = merge_share(out[idx], award, label)
    return out


def _confidence_level(score: float) -> str:
    if score > 0.95:
        return "very high"
    if score > 0.9:
        return "high"
    return "good"


def _fractions(shares: List[HeirShare]) -> dict:
    return {s.kind.value: format_fraction(s.fraction) for s in shares}


def _failure(madhab: str, message: str, estate: Optional[EstateInput] = None) -> CalculationResult:
    return CalculationResult(
        success=False,
        error=message,
        madhab=madhab,
        estate=estate,
        confidence=0.0,
        confidence_level="failed",
    )


# ============================================================
#                    PIPELINE
# ============================================================
def _run(profile: MadhabProfile, rules: RuleSet, estate: EstateInput, census: HeirCensus) -> CalculationResult:
    notes: List[str] = []
    warnings: List[CalculationWarning] = []
    steps: List[CalculationTrace] = []
    special_cases: List[SpecialCase] = []
    net = estate.net_estate

    steps.append(CalculationTrace(
        step="Validation",
        description=f"Net estate {net:.2f} after funeral costs, debts and will; {census.total()} heirs declared",
        data={"net_estate": net, "heirs": {k.value: census.count(k) for k in census.present()}},
    ))

    # 1) Hijab
    hijab = block_heirs(census, rules)
    filtered = hijab.census
    notes.extend(hijab.notes)
    logger.debug("%s: %d heir kinds blocked", profile.id.value, len(hijab.blocked))
    steps.append(CalculationTrace(
        step="Hijab",
        description=f"{len(hijab.blocked)} heir kinds excluded",
        data={"blocked": [b.kind.value for b in hijab.blocked]},
    ))

    # 2) Furudh
    shares = determine_furudh(filtered)
    steps.append(CalculationTrace(
        step="Furudh",
        description="Fixed Qur'anic shares assigned",
        data={"fixed": _fractions(shares)},
    ))

    # 3) Kasus khusus (sebelum 'aul)
    special = apply_special_cases(shares, filtered, rules)
    shares = special.shares
    special_cases.extend(special.special_cases)
    notes.extend(special.notes)
    if special.special_cases:
        steps.append(CalculationTrace(
            step="Special case",
            description=", ".join(c.name for c in special.special_cases),
            data={"fixed": _fractions(shares)},
        ))

    # 4) 'Aul
    awl = apply_awl(shares)
    shares = awl.shares
    asl, final_base = awl.asl, awl.final_base
    for a, b, rel in awl.comparisons:
        notes.append(f"Denominators {a} and {b}: {rel}")
    if awl.applied:
        notes.append(f"Awl: the fixed shares total {awl.total_raw}/{asl}, the base rises from {asl} to {final_base}")
        special_cases.append(SpecialCase(
            kind=SpecialCaseKind.AWL,
            name="Awl",
            description=f"Fixed shares exceed the estate; every share is reduced proportionally ({asl} → {final_base})",
        ))
    shares = apply_post_awl(shares, special.kind)
    if special.kind == SpecialCaseKind.AKDARIYYA:
        final_base = lcm_of_denominators(s.fraction for s in shares)
        notes.append(f"Akdariyya: the grandfather and the sister split their pooled share 2:1, base {final_base}")
    logger.debug("%s: asl=%d final_base=%d awl=%s", profile.id.value, asl, final_base, awl.applied)
    steps.append(CalculationTrace(
        step="Awl",
        description=f"Base {asl}" + (f" raised to {final_base}" if final_base != asl else ""),
        data={"asl": asl, "final_base": final_base, "applied": awl.applied},
    ))

    # 5) ‘Ashabah
    remainder = ONE - total_fraction(shares)
    logger.debug("%s: remainder after fixed shares %s", profile.id.value, remainder)
    asabah = distribute_asabah(filtered, rules, remainder)
    shares = _merge_awards(shares, asabah.awards, "residuary")
    special_cases.extend(asabah.special_cases)
    if asabah.group_name:
        notes.append(f"Residuary: {asabah.group_name} take the remainder {format_fraction(remainder)}")
        steps.append(CalculationTrace(
            step="Asaba",
            description=f"Remainder {format_fraction(remainder)} to {asabah.group_name}",
            data={"remainder": format_fraction(remainder), "group": asabah.group_name},
        ))

    # 6) Radd (hanya bila tidak ada ‘ashabah)
    remainder = ONE - total_fraction(shares)
    radd_applied = False
    if remainder > 0 and asabah.group_name is None:
        radd = apply_radd(shares, remainder, filtered, rules)
        shares = radd.shares
        notes.extend(radd.notes)
        radd_applied = radd.applied
        if radd.special_case:
            special_cases.append(radd.special_case)
            steps.append(CalculationTrace(
                step="Radd",
                description=f"Surplus {format_fraction(remainder)} returned to the fixed-share heirs",
                data={"remainder": format_fraction(remainder)},
            ))

    # 7) Dzawil arham / baitul mal
    remainder = ONE - total_fraction(shares)
    blood_kin_applied = treasury_applied = False
    if remainder > 0:
        dhawil = distribute_dhawil_arham(filtered, rules, remainder)
        shares = _merge_awards(shares, dhawil.awards, "blood kin")
        notes.extend(dhawil.notes)
        warnings.extend(dhawil.warnings)
        blood_kin_applied = dhawil.blood_kin_applied
        treasury_applied = dhawil.treasury_applied
        if dhawil.special_case:
            special_cases.append(dhawil.special_case)
        steps.append(CalculationTrace(
            step="Dhawil arham",
            description=f"Remainder {format_fraction(remainder)} after radd",
            data={"blood_kin": blood_kin_applied, "treasury": treasury_applied},
        ))

    # 8) Nominal, tashih & skor keyakinan
    shares = [s for s in shares if not is_zero(s.fraction)]
    tashih = compute_tashih(shares)
    notes.extend(tashih.notes)
    final_shares = []
    for s in shares:
        amount = round(to_decimal(s.fraction) * net, 2)
        final_shares.append(s.model_copy(update={
            "saham": tashih.saham[s.kind],
            "amount": amount,
            "amount_per_person": round(amount / s.count, 2) if s.count else amount,
        }))
    steps.append(CalculationTrace(
        step="Assembly",
        description=f"Corrected base {tashih.corrected_base}",
        data={"corrected_base": tashih.corrected_base, "shares": _fractions(final_shares)},
    ))

    confidence = 1.0
    if awl.applied:
        confidence *= AWL_PENALTY
    if radd_applied:
        confidence *= RADD_PENALTY
    if blood_kin_applied:
        confidence *= BLOOD_KIN_PENALTY
    if len(special_cases) > 2:
        confidence *= MANY_SPECIAL_CASES_PENALTY
    allocated: Fraction = total_fraction(final_shares)
    if abs(to_decimal(allocated) - 1) > DRIFT_TOLERANCE:
        confidence *= DRIFT_PENALTY
        warnings.append(CalculationWarning(
            level="warning",
            message=f"Allocated shares total {format_fraction(allocated)} instead of 1",
        ))
    confidence = max(confidence, MIN_CONFIDENCE)

    return CalculationResult(
        success=True,
        madhab=profile.id.value,
        madhab_name=profile.name,
        estate=estate,
        net_estate=net,
        asl=asl,
        final_base=final_base,
        corrected_base=tashih.corrected_base,
        awl_applied=awl.applied,
        radd_applied=radd_applied,
        blood_kin_applied=blood_kin_applied,
        treasury_applied=treasury_applied,
        shares=final_shares,
        blocked_heirs=hijab.blocked,
        special_cases=special_cases,
        notes=notes,
        warnings=warnings,
        steps=steps,
        confidence=round(confidence, 4),
        confidence_level=_confidence_level(confidence),
    )


# ============================================================
#                    FUNGSI UTAMA
# ============================================================
def calculate_inheritance(
    madhab: Union[Madhab, str],
    estate: Union[EstateInput, Mapping[str, Any]],
    heirs: Union[HeirCensus, Mapping[str, Any]],
    rules: Optional[Union[RuleSet, Mapping[str, Any]]] = None,
) -> CalculationResult:
    """
    Hitung pembagian waris untuk satu madzhab.

    Tidak pernah melempar exception: input yang tidak valid atau kesalahan
    internal dikembalikan sebagai CalculationResult dengan success=False.
    `rules` bisa dipakai untuk menyuntikkan RuleSet lain selain tabel madzhab.
    """
    started = time.perf_counter()
    madhab_id = madhab.value if isinstance(madhab, Madhab) else str(madhab)
    estate_model: Optional[EstateInput] = estate if isinstance(estate, EstateInput) else None

    try:
        profile = get_madhab(madhab)
        estate_model = _coerce(EstateInput, estate)
        census = _coerce(HeirCensus, heirs)
        rule_set = profile.rules if rules is None else _coerce(RuleSet, rules)
        result = _run(profile, rule_set, estate_model, census)
    except InheritanceError as exc:
        logger.info("Calculation rejected (%s): %s", exc.code, exc.message)
        result = _failure(madhab_id, exc.message, estate_model)
    except Exception:
        logger.exception("Unexpected failure while calculating for madhab %s", madhab_id)
        result = _failure(madhab_id, ERROR_MESSAGES["UNKNOWN_ERROR"], estate_model)

    elapsed = (time.perf_counter() - started) * 1000
    return result.model_copy(update={"calculation_time_ms": round(elapsed, 3)})
