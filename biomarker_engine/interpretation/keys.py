"""Maps free-text marker labels to canonical marker keys.

Labels come from lab PDFs, OCR output and manual forms, mostly in
Portuguese. Matching is a case-insensitive substring test against an
ordered rule table; the first rule with a matching pattern wins, so
specific patterns must precede the shorter ones they contain.
Accented and unaccented spellings are listed side by side.
"""

from biomarker_engine.interpretation.models import MarkerKey

Rule = tuple[tuple[str, ...], MarkerKey]

_HORMONAL_RULES: tuple[Rule, ...] = (
    (("testosterona livre", "testo livre", "free testosterone"), MarkerKey.FREE_TESTOSTERONE),
    (("testo",), MarkerKey.TESTOSTERONE),
    (("estradiol", "estrogênio", "estrogenio", "e2"), MarkerKey.ESTRADIOL),
    (("progesterona", "progesterone"), MarkerKey.PROGESTERONE),
    (("shbg", "globulina ligadora"), MarkerKey.SHBG),
    (("prolactina", "prolactin"), MarkerKey.PROLACTIN),
    (("dhea",), MarkerKey.DHEA_S),
    (("cortisol",), MarkerKey.CORTISOL),
    (("igf", "somatomedina"), MarkerKey.IGF1),
    (("fsh", "folículo estimulante", "foliculo estimulante"), MarkerKey.FSH),
    (("luteinizante", "lh"), MarkerKey.LH),
)

_THYROID_RULES: tuple[Rule, ...] = (
    (("tsh", "tireoestimulante", "tireotrofina", "tirotrofina"), MarkerKey.TSH),
    (("t4", "tiroxina"), MarkerKey.FREE_T4),
    (("t3", "triiodotironina"), MarkerKey.FREE_T3),
)

_BODY_RULES: tuple[Rule, ...] = (
    (("massa muscular", "massa magra", "muscle", "lean mass"), MarkerKey.MUSCLE_MASS),
    (("gordura", "massa gorda", "bf", "fat"), MarkerKey.BODYFAT),
    (("imc", "bmi", "índice de massa", "indice de massa"), MarkerKey.BMI),
    (("cintura", "waist"), MarkerKey.WAIST),
    (("altura", "estatura", "height"), MarkerKey.HEIGHT),
    (("peso", "weight"), MarkerKey.WEIGHT),
)

_METABOLIC_RULES: tuple[Rule, ...] = (
    (("vldl",), MarkerKey.VLDL),
    (("ldl",), MarkerKey.LDL),
    (("hdl",), MarkerKey.HDL),
    (("colesterol", "cholesterol"), MarkerKey.CHOLESTEROL),
    (("triglic", "triglyc"), MarkerKey.TRIGLYCERIDES),
    (("hba1c", "a1c", "glicada", "glicosilada"), MarkerKey.HBA1C),
    (("glicose", "glicemia", "glucose"), MarkerKey.GLUCOSE),
    (("insulina", "insulin"), MarkerKey.INSULIN),
)

_HEMATOLOGY_RULES: tuple[Rule, ...] = (
    (("hematócrito", "hematocrito", "hematocrit", "hct"), MarkerKey.HEMATOCRIT),
    (("hemoglobina", "hemoglobin"), MarkerKey.HEMOGLOBIN),
    (("plaqueta", "platelet"), MarkerKey.PLATELETS),
    (("ferritina", "ferritin"), MarkerKey.FERRITIN),
)

_ORGAN_RULES: tuple[Rule, ...] = (
    (("creatinina", "creatinine"), MarkerKey.CREATININE),
    (("ureia", "uréia", "urea"), MarkerKey.UREA),
    (("tgo", "ast", "aspartato"), MarkerKey.AST),
    (("tgp", "alt", "alanina"), MarkerKey.ALT),
    (("ggt", "gama gt", "gama-gt", "gamaglutamil"), MarkerKey.GGT),
    (("psa", "antígeno prostático", "antigeno prostatico"), MarkerKey.PSA),
    (("vitamina d", "vit d", "vitamin d", "25-oh", "25(oh)", "calcidiol"), MarkerKey.VITAMIN_D),
    (("b12", "cobalamina"), MarkerKey.VITAMIN_B12),
)

NORMALIZATION_RULES: tuple[Rule, ...] = (
    *_HORMONAL_RULES,
    *_THYROID_RULES,
    *_BODY_RULES,
    *_METABOLIC_RULES,
    *_HEMATOLOGY_RULES,
    *_ORGAN_RULES,
)


def normalize_marker_key(label: str) -> MarkerKey:
    """Return the canonical key for a marker label, or ``MarkerKey.GENERIC``."""
    text = (label or "").lower().strip()
    if not text:
        return MarkerKey.GENERIC
    for patterns, key in NORMALIZATION_RULES:
        if any(pattern in text for pattern in patterns):
            return key
    return MarkerKey.GENERIC
