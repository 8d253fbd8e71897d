# Di dalam file: schemas.py

from enum import Enum
from fractions import Fraction
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    WithJsonSchema,
    model_validator,
)

from app.math.rational import ZERO, format_fraction, parse_fraction

# Batas jumlah per jenis ahli waris (sama dengan form input)
MAX_HEIR_COUNT = 10

# Fraction yang ikut serialisasi JSON sebagai "n/d"
Rational = Annotated[
    Fraction,
    PlainValidator(parse_fraction),
    PlainSerializer(format_fraction, return_type=str),
    WithJsonSchema({"type": "string", "examples": ["1/6", "3/13"]}),
]


# --- Enumerasi ---
class Madhab(str, Enum):
    HANAFI = "hanafi"
    MALIKI = "maliki"
    SHAFII = "shafii"
    HANBALI = "hanbali"


class HeirKind(str, Enum):
    HUSBAND = "husband"
    WIFE = "wife"
    FATHER = "father"
    MOTHER = "mother"
    GRANDFATHER = "grandfather"
    GRANDMOTHER_FATHER = "grandmother_father"
    GRANDMOTHER_MOTHER = "grandmother_mother"
    SON = "son"
    DAUGHTER = "daughter"
    GRANDSON = "grandson"
    GRANDDAUGHTER = "granddaughter"
    FULL_BROTHER = "full_brother"
    FULL_SISTER = "full_sister"
    PATERNAL_BROTHER = "paternal_brother"
    PATERNAL_SISTER = "paternal_sister"
    MATERNAL_BROTHER = "maternal_brother"
    MATERNAL_SISTER = "maternal_sister"
    FULL_NEPHEW = "full_nephew"
    PATERNAL_NEPHEW = "paternal_nephew"
    FULL_UNCLE = "full_uncle"
    PATERNAL_UNCLE = "paternal_uncle"
    FULL_COUSIN = "full_cousin"
    PATERNAL_COUSIN = "paternal_cousin"
    MATERNAL_UNCLE = "maternal_uncle"
    MATERNAL_AUNT = "maternal_aunt"
    PATERNAL_AUNT = "paternal_aunt"
    DAUGHTER_SON = "daughter_son"
    DAUGHTER_DAUGHTER = "daughter_daughter"
    SISTER_CHILDREN = "sister_children"
    # hanya muncul di hasil
    MATERNAL_SIBLINGS = "maternal_siblings"
    TREASURY = "treasury"


CENSUS_KINDS: List[HeirKind] = [
    k for k in HeirKind if k not in (HeirKind.MATERNAL_SIBLINGS, HeirKind.TREASURY)
]

SPOUSES = frozenset({HeirKind.HUSBAND, HeirKind.WIFE})


class ShareType(str, Enum):
    FIXED = "fixed"
    RESIDUAL = "residual"
    COMBINED = "combined"
    REDISTRIBUTED = "redistributed"
    BLOOD_KIN = "blood_kin"
    TREASURY = "treasury"


class SpecialCaseKind(str, Enum):
    AWL = "awl"
    RADD = "radd"
    BLOOD_KIN = "blood_kin"
    GRANDFATHER_WITH_SIBLINGS = "grandfather_with_siblings"
    UMARIYYAH = "umariyyah"
    MUSHARRAKA = "musharraka"
    AKDARIYYA = "akdariyya"


# --- Input: Tirkah (harta peninggalan) ---
class EstateInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: float = Field(gt=0, allow_inf_nan=False)
    funeral: float = Field(0, ge=0, allow_inf_nan=False)
    debts: float = Field(0, ge=0, allow_inf_nan=False)
    will: float = Field(0, ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def _net_must_be_positive(self):
        if not self.total > self.funeral + self.debts + self.will:
            raise ValueError(
                "Net estate must be positive after deducting funeral costs, debts and will"
            )
        return self

    @property
    def net_estate(self) -> float:
        return self.total - self.funeral - self.debts - self.will


_Count = Annotated[int, Field(ge=0, le=MAX_HEIR_COUNT)]


# --- Input: sensus ahli waris ---
class HeirCensus(BaseModel):
    """
    Jumlah per jenis ahli waris. Model ini frozen: setiap tahap pipeline
    membuat salinan baru lewat `with_counts`, input pemanggil tidak pernah diubah.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    husband: _Count = 0
    wife: _Count = 0
    father: _Count = 0
    mother: _Count = 0
    grandfather: _Count = 0
    grandmother_father: _Count = 0
    grandmother_mother: _Count = 0
    son: _Count = 0
    daughter: _Count = 0
    grandson: _Count = 0
    granddaughter: _Count = 0
    full_brother: _Count = 0
    full_sister: _Count = 0
    paternal_brother: _Count = 0
    paternal_sister: _Count = 0
    maternal_brother: _Count = 0
    maternal_sister: _Count = 0
    full_nephew: _Count = 0
    paternal_nephew: _Count = 0
    full_uncle: _Count = 0
    paternal_uncle: _Count = 0
    full_cousin: _Count = 0
    paternal_cousin: _Count = 0
    maternal_uncle: _Count = 0
    maternal_aunt: _Count = 0
    paternal_aunt: _Count = 0
    daughter_son: _Count = 0
    daughter_daughter: _Count = 0
    sister_children: _Count = 0

    @model_validator(mode="after")
    def _at_least_one_heir(self):
        if self.total() <= 0:
            raise ValueError("The deceased must have at least one heir")
        return self

    # ---- akses ----
    def count(self, kind: HeirKind) -> int:
        return getattr(self, HeirKind(kind).value)

    def total(self) -> int:
        return sum(getattr(self, k.value) for k in CENSUS_KINDS)

    def present(self) -> List[HeirKind]:
        return [k for k in CENSUS_KINDS if getattr(self, k.value) > 0]

    def with_counts(self, updates: Dict[HeirKind, int]) -> "HeirCensus":
        return self.model_copy(update={HeirKind(k).value: v for k, v in updates.items()})

    # ---- predikat ----
    def has_descendants(self) -> bool:
        return self.son + self.daughter + self.grandson + self.granddaughter > 0

    def has_male_descendants(self) -> bool:
        return self.son + self.grandson > 0

    def has_female_descendants(self) -> bool:
        return self.daughter + self.granddaughter > 0

    def has_male_ascendant(self) -> bool:
        return self.father > 0 or self.grandfather > 0

    def has_spouse(self) -> bool:
        return self.husband > 0 or self.wife > 0

    def full_sibling_count(self) -> int:
        return self.full_brother + self.full_sister

    def paternal_sibling_count(self) -> int:
        return self.paternal_brother + self.paternal_sister

    def maternal_sibling_count(self) -> int:
        return self.maternal_brother + self.maternal_sister

    def sibling_count(self) -> int:
        return self.full_sibling_count() + self.paternal_sibling_count() + self.maternal_sibling_count()


# --- Konfigurasi madzhab ---
class RuleSet(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    grandfather_with_siblings: Literal["blocks", "shares"]
    radd_to_spouse: bool
    blood_kin_enabled: bool
    musharraka_enabled: bool
    akdariyya_enabled: bool
    treasury_fallback: bool = False


class MadhabProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Madhab
    name: str
    name_ar: str
    description: str
    rules: RuleSet


# --- Output untuk setiap ahli waris ---
class HeirShare(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: HeirKind
    display_name: str
    share_type: ShareType
    type_label: str
    fraction: Rational
    count: int = 1
    original_fraction: Optional[Rational] = None   # sebelum 'aul
    saham: Optional[int] = None                    # saham atas ashl hasil tashih
    amount: float = 0.0
    amount_per_person: float = 0.0
    justification: str


def merge_share(existing: HeirShare, award: HeirShare, label: str,
                share_type: ShareType = ShareType.COMBINED) -> HeirShare:
    """
    Gabungkan dua bagian untuk jenis ahli waris yang sama:
    pecahan dijumlah, label tipe ditambah (misal "fixed + residuary").
    """
    if existing.kind != award.kind:
        raise ValueError(f"cannot merge {existing.kind.value} with {award.kind.value}")
    type_label = existing.type_label
    if label not in type_label:
        type_label = f"{type_label} + {label}"
    return existing.model_copy(update={
        "fraction": existing.fraction + award.fraction,
        "share_type": share_type,
        "type_label": type_label,
        "justification": f"{existing.justification}; {award.justification}",
    })


def total_fraction(shares: List[HeirShare]) -> Fraction:
    return sum((s.fraction for s in shares), ZERO)


# --- Jejak perhitungan ---
class BlockedHeir(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: HeirKind
    blocking_kind: str        # jenis penghalang, atau kelompok ("male_descendant", "nearer_agnate", ...)
    reason: str


class SpecialCase(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: SpecialCaseKind
    name: str
    description: str


class CalculationWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: Literal["info", "warning", "error"]
    message: str


class CalculationTrace(BaseModel):
    step: str                  # nama langkah (contoh: "Hijab", "Awl")
    description: str           # penjelasan lengkap
    data: Optional[Dict[str, Any]] = None


# --- Output utama ---
class CalculationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    error: Optional[str] = None
    madhab: str
    madhab_name: str = ""
    estate: Optional[EstateInput] = None
    net_estate: float = 0.0
    asl: int = 0                    # ashlul mas'alah awal
    final_base: int = 0             # setelah 'aul
    corrected_base: int = 0         # setelah tashih
    awl_applied: bool = False
    radd_applied: bool = False
    blood_kin_applied: bool = False
    treasury_applied: bool = False
    shares: List[HeirShare] = []
    blocked_heirs: List[BlockedHeir] = []
    special_cases: List[SpecialCase] = []
    notes: List[str] = []
    warnings: List[CalculationWarning] = []
    steps: List[CalculationTrace] = []
    confidence: float = 0.0
    confidence_level: str = "failed"
    calculation_time_ms: float = 0.0

    def share_for(self, kind: HeirKind) -> Optional[HeirShare]:
        kind = HeirKind(kind)
        return next((s for s in self.shares if s.kind == kind), None)


# --- Input API ---
class CalculationInput(BaseModel):
    madhab: Madhab
    estate: EstateInput
    heirs: HeirCensus


class ComparisonInput(BaseModel):
    estate: EstateInput
    heirs: HeirCensus


class MadhabDifference(BaseModel):
    madhab: Madhab
    madhab_name: str
    kind: HeirKind
    amount: float                  # selisih absolut terhadap hanafi
    percentage: float


class MadhabComparison(BaseModel):
    results: Dict[Madhab, CalculationResult]
    consistent: bool
    differences: List[MadhabDifference]

