# app/special/router.py
import logging
from typing import List, NamedTuple, Optional

from schemas import HeirCensus, HeirShare, RuleSet, SpecialCase, SpecialCaseKind

from .akdariyyah import apply_akdariyyah, is_akdariyyah, redistribute_after_awl
from .musharraka import apply_musharraka, is_musharraka
from .umariyyah import apply_umariyyah, is_umariyyah

logger = logging.getLogger(__name__)


class SpecialOutcome(NamedTuple):
    shares: List[HeirShare]
    kind: Optional[SpecialCaseKind]     # kasus yang butuh langkah lanjutan setelah 'aul
    special_cases: List[SpecialCase]
    notes: List[str]


def detect_special_case(census: HeirCensus, rules: RuleSet) -> Optional[SpecialCaseKind]:
    """
    Urutan cek: paling spesifik duluan.
    Akdariyyah hanya mungkin bila kakek tidak menghalangi saudari (mode "shares").
    """
    if rules.akdariyya_enabled and is_akdariyyah(census):
        return SpecialCaseKind.AKDARIYYA
    if is_musharraka(census):
        return SpecialCaseKind.MUSHARRAKA
    if is_umariyyah(census):
        return SpecialCaseKind.UMARIYYAH
    return None


def apply_special_cases(furudh: List[HeirShare], census: HeirCensus, rules: RuleSet) -> SpecialOutcome:
    notes: List[str] = []
    kind = detect_special_case(census, rules)

    # 1) Akdariyyah
    if kind == SpecialCaseKind.AKDARIYYA:
        logger.info("Applying akdariyya")
        notes.append("Akdariyya: the grandfather and the full sister first take 1/6 and 1/2")
        case = SpecialCase(
            kind=kind,
            name="Akdariyya",
            description="Husband, mother, grandfather and one full sister: awl from 6 to 9, "
                        "then the grandfather and the sister share their 4/9 at 2:1",
        )
        return SpecialOutcome(apply_akdariyyah(furudh), kind, [case], notes)

    # 2) Musharraka (Himariyyah)
    if kind == SpecialCaseKind.MUSHARRAKA:
        if not rules.musharraka_enabled:
            notes.append("Musharraka is not applied in this madhab: the full siblings receive nothing "
                         "once the fixed shares exhaust the estate")
            return SpecialOutcome(list(furudh), None, [], notes)
        logger.info("Applying musharraka")
        notes.append("Musharraka: the full siblings join the maternal siblings in their third")
        case = SpecialCase(
            kind=kind,
            name="Musharraka",
            description="The full siblings share the maternal siblings' third equally per head",
        )
        return SpecialOutcome(apply_musharraka(furudh, census), None, [case], notes)

    # 3) Umariyyah (Gharrawain)
    if kind == SpecialCaseKind.UMARIYYAH:
        logger.info("Applying umariyyah")
        notes.append("Umariyyah: the mother takes one third of the remainder after the spouse")
        case = SpecialCase(
            kind=kind,
            name="Umariyyah",
            description="Spouse with both parents: the mother receives a third of what the spouse leaves",
        )
        return SpecialOutcome(apply_umariyyah(furudh), None, [case], notes)

    return SpecialOutcome(list(furudh), None, [], notes)


def apply_post_awl(shares: List[HeirShare], kind: Optional[SpecialCaseKind]) -> List[HeirShare]:
    """Langkah setelah 'aul; sekarang hanya Akdariyyah yang memerlukannya."""
    if kind == SpecialCaseKind.AKDARIYYA:
        return redistribute_after_awl(shares)
    return list(shares)
