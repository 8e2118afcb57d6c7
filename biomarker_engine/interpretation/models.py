from dataclasses import dataclass, field
from enum import Enum


class Gender(str, Enum):
    """Closed set of genders the reference ranges are defined for."""

    MALE = "Masculino"
    FEMALE = "Feminino"


class MarkerKey(str, Enum):
    """Canonical marker identifiers."""

    # Hormonal axis
    TESTOSTERONE = "testosterone"
    FREE_TESTOSTERONE = "free_testosterone"
    ESTRADIOL = "estradiol"
    PROGESTERONE = "progesterone"
    SHBG = "shbg"
    PROLACTIN = "prolactin"
    LH = "lh"
    FSH = "fsh"
    DHEA_S = "dhea_s"
    CORTISOL = "cortisol"
    IGF1 = "igf1"
    # Thyroid
    TSH = "tsh"
    FREE_T4 = "free_t4"
    FREE_T3 = "free_t3"
    # Body composition / anthropometry
    WEIGHT = "weight"
    HEIGHT = "height"
    BODYFAT = "bodyfat"
    MUSCLE_MASS = "muscle_mass"
    BMI = "bmi"
    WAIST = "waist"
    # Lipid / metabolic
    VLDL = "vldl"
    LDL = "ldl"
    HDL = "hdl"
    CHOLESTEROL = "cholesterol"
    TRIGLYCERIDES = "triglycerides"
    HBA1C = "hba1c"
    GLUCOSE = "glucose"
    INSULIN = "insulin"
    # Hematology
    HEMATOCRIT = "hematocrit"
    HEMOGLOBIN = "hemoglobin"
    PLATELETS = "platelets"
    FERRITIN = "ferritin"
    # Organ function / vitamins
    CREATININE = "creatinine"
    UREA = "urea"
    AST = "tgo"
    ALT = "tgp"
    GGT = "ggt"
    PSA = "psa"
    VITAMIN_D = "vitamin_d"
    VITAMIN_B12 = "vitamin_b12"

    GENERIC = "generic"


class Provenance(str, Enum):
    """Where a resolved descriptor came from."""

    CURATED = "curated"
    LEARNED = "learned"
    GENERIC = "generic"


class Status(str, Enum):
    CRITICAL_LOW = "CRITICAL_LOW"
    LOW = "LOW"
    BORDERLINE_LOW = "BORDERLINE_LOW"
    NORMAL = "NORMAL"
    BORDERLINE_HIGH = "BORDERLINE_HIGH"
    HIGH = "HIGH"
    CRITICAL_HIGH = "CRITICAL_HIGH"
    UNKNOWN = "UNKNOWN"


class Trend(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    STABLE = "STABLE"
    UNKNOWN = "UNKNOWN"


class RiskColor(str, Enum):
    """Semantic color tag; renderers map it to their own palette."""

    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    EMERALD = "emerald"
    GRAY = "gray"


@dataclass(frozen=True)
class ReferenceRange:
    """Reference range with independently optional bounds."""

    min: float | None = None
    max: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None


@dataclass(frozen=True)
class MetricPoint:
    """A single observed value of a marker."""

    date: str
    value: float
    unit: str = ""
    label: str = ""
    ref_min: float | None = None
    ref_max: float | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class MarkerRanges:
    male: ReferenceRange | None = None
    female: ReferenceRange | None = None
    general: ReferenceRange | None = None


@dataclass(frozen=True)
class MarkerRisks:
    high: tuple[str, ...] = ()
    low: tuple[str, ...] = ()


@dataclass(frozen=True)
class MarkerSource:
    title: str
    url: str


@dataclass(frozen=True)
class MarkerDescriptor:
    """Knowledge about one marker: meaning, unit, ranges, risks and tips."""

    id: str
    label: str
    unit: str
    definition: str
    ranges: MarkerRanges = field(default_factory=MarkerRanges)
    risks: MarkerRisks = field(default_factory=MarkerRisks)
    tips: tuple[str, ...] = ()
    sources: tuple[MarkerSource, ...] = ()
    provenance: Provenance = Provenance.CURATED

    @property
    def is_generic(self) -> bool:
        return self.provenance is Provenance.GENERIC

    @property
    def is_learned(self) -> bool:
        return self.provenance is Provenance.LEARNED


@dataclass(frozen=True)
class LearnedMarker:
    """Externally sourced marker knowledge supplied by the caller."""

    key: str
    label: str
    unit: str = ""
    definition: str = ""
    male_min: float | None = None
    male_max: float | None = None
    female_min: float | None = None
    female_max: float | None = None
    source_url: str = ""
    source_title: str = ""


@dataclass(frozen=True)
class ZoneResult:
    status: Status
    risk_color: RiskColor


@dataclass(frozen=True)
class TrendResult:
    trend: Trend = Trend.UNKNOWN
    trend_percent: float = 0.0
    delta: float = 0.0


@dataclass(frozen=True)
class StaleValue:
    """A manual value superseded by a newer exam value."""

    is_stale: bool
    exam_date: str
    exam_value: float
    exam_unit: str


@dataclass(frozen=True)
class AnalysisResult:
    """Interpretation of one observed value."""

    status: Status
    trend: Trend
    trend_percent: float
    delta: float
    message: str
    risk_color: RiskColor
    active_range: ReferenceRange | None
    marker_key: str = MarkerKey.GENERIC.value
    descriptor: MarkerDescriptor | None = None


@dataclass(frozen=True)
class AnalysisRequest:
    """A validated request to interpret one value."""

    marker: str
    value: float
    date: str
    gender: Gender
    history: tuple[MetricPoint, ...] = ()
    reference_range: ReferenceRange | None = None
    learned: dict[str, LearnedMarker] = field(default_factory=dict)
