"""Curated marker knowledge base and descriptor resolution.

Resolution order for a canonical key:

1. curated entry from ``MARKER_REGISTRY``;
2. caller-supplied learned marker;
3. generic descriptor labelled with the raw marker name.
"""

from collections.abc import Mapping
from types import MappingProxyType

from biomarker_engine.interpretation.models import (
    Gender,
    LearnedMarker,
    MarkerDescriptor,
    MarkerKey,
    MarkerRanges,
    MarkerRisks,
    MarkerSource,
    Provenance,
    ReferenceRange,
)

_ENDOCRINE = MarkerSource("Endocrine Society", "https://www.endocrine.org/")
_MEDLINE = MarkerSource("MedlinePlus", "https://medlineplus.gov/lab-tests/")
_ATA = MarkerSource("American Thyroid Association", "https://www.thyroid.org/")
_WHO = MarkerSource("OMS", "https://www.who.int/")
_AHA = MarkerSource("American Heart Association", "https://www.heart.org/")
_ADA = MarkerSource("American Diabetes Association", "https://diabetes.org/")
_RED_CROSS = MarkerSource("Red Cross", "https://www.redcrossblood.org/")
_NKF = MarkerSource("National Kidney Foundation", "https://www.kidney.org/")
_AASLD = MarkerSource("AASLD", "https://www.aasld.org/")


def _span(low: float | None, high: float | None) -> ReferenceRange:
    return ReferenceRange(min=low, max=high)


_CURATED: tuple[MarkerDescriptor, ...] = (
    # ------------------------------------------------------------------
    # Hormonal axis
    # ------------------------------------------------------------------
    MarkerDescriptor(
        id=MarkerKey.TESTOSTERONE.value,
        label="Testosterona Total",
        unit="ng/dL",
        definition="Principal hormônio androgênico. Regula massa muscular, libido, energia e humor.",
        ranges=MarkerRanges(male=_span(300, 900), female=_span(15, 70)),
        risks=MarkerRisks(
            high=(
                "Aumento de hematócrito (sangue grosso)",
                "Conversão em Estradiol",
                "Acne e queda de cabelo",
            ),
            low=("Perda de massa muscular", "Fadiga crônica", "Baixa libido", "Depressão"),
        ),
        tips=("Sono adequado e gorduras boas na dieta ajudam a manter níveis naturais.",),
        sources=(_ENDOCRINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.FREE_TESTOSTERONE.value,
        label="Testosterona Livre",
        unit="ng/dL",
        definition="Fração da testosterona não ligada ao SHBG, biologicamente ativa nos tecidos.",
        ranges=MarkerRanges(male=_span(5, 21), female=_span(0.1, 0.85)),
        risks=MarkerRisks(
            high=("Oleosidade e acne", "Irritabilidade", "Virilização em mulheres"),
            low=("Baixa libido mesmo com total normal", "Dificuldade em ganhar massa", "Fadiga"),
        ),
        tips=("Interprete junto com Testosterona Total e SHBG.",),
        sources=(_ENDOCRINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.ESTRADIOL.value,
        label="Estradiol (E2)",
        unit="pg/mL",
        definition=(
            "Hormônio derivado da testosterona (em homens). "
            "Essencial para saúde óssea, articular e cerebral."
        ),
        ranges=MarkerRanges(male=_span(20, 45), female=_span(30, 400)),
        risks=MarkerRisks(
            high=("Retenção hídrica", "Ginecomastia (homens)", "Labilidade emocional"),
            low=("Dor articular", "Risco de osteoporose", "Queda de libido", "Ressecamento"),
        ),
        tips=("O equilíbrio T/E2 é mais importante que o número isolado.",),
        sources=(MarkerSource("MedlinePlus", "https://medlineplus.gov/lab-tests/estrogen-levels-test/"),),
    ),
    MarkerDescriptor(
        id=MarkerKey.PROGESTERONE.value,
        label="Progesterona",
        unit="ng/mL",
        definition="Hormônio calmante e regulador do ciclo. Equilibra os efeitos do estrogênio.",
        ranges=MarkerRanges(male=_span(0.2, 1.4), female=_span(0.2, 25)),
        risks=MarkerRisks(
            high=("Sonolência excessiva", "Alteração de libido"),
            low=("TPM severa e irritabilidade", "Ciclos irregulares", "Insônia e ansiedade"),
        ),
        tips=("Em mulheres o valor varia com a fase do ciclo; anote o dia da coleta.",),
        sources=(_MEDLINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.SHBG.value,
        label="SHBG (Globulina)",
        unit="nmol/L",
        definition="Proteína que transporta testosterona e estradiol no sangue, mantendo-os inativos.",
        ranges=MarkerRanges(male=_span(10, 57), female=_span(18, 144)),
        risks=MarkerRisks(
            high=("Sintomas de testosterona baixa mesmo com total normal", "Perda de libido"),
            low=("Resistência à insulina", "Excesso de andrógenos livres", "Fígado gorduroso"),
        ),
        tips=("Resistência à insulina reduz o SHBG; dietas muito restritivas o elevam.",),
        sources=(_ENDOCRINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.PROLACTIN.value,
        label="Prolactina",
        unit="ng/mL",
        definition="Hormônio da lactação e da saciedade sexual. Em excesso inibe o eixo gonadal.",
        ranges=MarkerRanges(male=_span(2, 18), female=_span(2, 29)),
        risks=MarkerRisks(
            high=("Perda de libido", "Disfunção erétil", "Galactorreia", "Infertilidade"),
            low=("Raramente relevante de forma isolada",),
        ),
        tips=("Sono ruim, estresse e alguns antidepressivos elevam a prolactina.",),
        sources=(_ENDOCRINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.LH.value,
        label="LH (Hormônio Luteinizante)",
        unit="mUI/mL",
        definition="Sinal da hipófise que manda as gônadas produzirem testosterona ou progesterona.",
        ranges=MarkerRanges(male=_span(1.7, 8.6), female=_span(2.4, 12.6)),
        risks=MarkerRisks(
            high=("Falência gonadal primária", "Menopausa ou andropausa"),
            low=("Eixo suprimido", "Uso de hormônios exógenos", "Infertilidade"),
        ),
        tips=("Não use hormônios exógenos sem acompanhamento; eles desligam o LH.",),
        sources=(_ENDOCRINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.FSH.value,
        label="FSH (Hormônio Folículo Estimulante)",
        unit="mUI/mL",
        definition="Sinal da hipófise que estimula a produção de espermatozoides e óvulos.",
        ranges=MarkerRanges(male=_span(1.5, 12.4), female=_span(3.5, 12.5)),
        risks=MarkerRisks(
            high=("Falência testicular ou ovariana", "Menopausa"),
            low=("Eixo suprimido", "Infertilidade"),
        ),
        tips=("Déficit calórico extremo reduz a secreção de GnRH e, com ela, o FSH.",),
        sources=(_ENDOCRINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.DHEA_S.value,
        label="DHEA-S",
        unit="µg/dL",
        definition="Pró-hormônio adrenal, precursor de testosterona e estradiol.",
        ranges=MarkerRanges(male=_span(80, 560), female=_span(35, 430)),
        risks=MarkerRisks(
            high=("Pele oleosa e acne", "Hirsutismo em mulheres"),
            low=("Baixa energia e libido", "Baixa imunidade"),
        ),
        tips=("Estresse crônico desvia precursores do DHEA para o cortisol.",),
        sources=(_MEDLINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.CORTISOL.value,
        label="Cortisol",
        unit="µg/dL",
        definition="Hormônio do estresse e do despertar. Anti-inflamatório natural.",
        ranges=MarkerRanges(general=_span(6.2, 19.4)),
        risks=MarkerRisks(
            high=("Ansiedade e insônia", "Perda de massa muscular", "Gordura visceral"),
            low=("Fadiga extrema", "Tontura ao levantar", "Baixa imunidade"),
        ),
        tips=("Colete pela manhã; luz solar ao acordar ajuda a regular o ritmo.",),
        sources=(_ENDOCRINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.IGF1.value,
        label="IGF-1",
        unit="ng/mL",
        definition="Mediador hepático do GH. Executa o crescimento celular e muscular.",
        ranges=MarkerRanges(general=_span(100, 300)),
        risks=MarkerRisks(
            high=("Resistência à insulina", "Dor articular e retenção", "Acromegalia"),
            low=("Recuperação lenta", "Perda de massa magra e óssea"),
        ),
        tips=("Sono profundo é o principal momento de secreção de GH.",),
        sources=(_ENDOCRINE,),
    ),
    # ------------------------------------------------------------------
    # Thyroid
    # ------------------------------------------------------------------
    MarkerDescriptor(
        id=MarkerKey.TSH.value,
        label="TSH",
        unit="µUI/mL",
        definition="Hormônio da hipófise que comanda a tireoide. Sobe quando a tireoide trabalha pouco.",
        ranges=MarkerRanges(general=_span(0.4, 4.5)),
        risks=MarkerRisks(
            high=("Hipotireoidismo", "Metabolismo lento e ganho de peso", "Fadiga"),
            low=("Hipertireoidismo", "Taquicardia", "Ansiedade e insônia"),
        ),
        tips=("Iodo, selênio e zinco participam da produção dos hormônios tireoidianos.",),
        sources=(_ATA,),
    ),
    MarkerDescriptor(
        id=MarkerKey.FREE_T4.value,
        label="T4 Livre",
        unit="ng/dL",
        definition="Forma de estoque do hormônio tireoidiano, convertida em T3 nos tecidos.",
        ranges=MarkerRanges(general=_span(0.8, 1.8)),
        risks=MarkerRisks(
            high=("Hipertireoidismo", "Perda de peso rápida", "Tremores"),
            low=("Hipotireoidismo", "Frio excessivo", "Pele seca"),
        ),
        tips=("Avalie sempre junto com o TSH.",),
        sources=(_ATA,),
    ),
    MarkerDescriptor(
        id=MarkerKey.FREE_T3.value,
        label="T3 Livre",
        unit="pg/mL",
        definition="Hormônio tireoidiano ativo, acelera o gasto energético das células.",
        ranges=MarkerRanges(general=_span(2.3, 4.2)),
        risks=MarkerRisks(
            high=("Calor e sudorese", "Taquicardia", "Catabolismo muscular"),
            low=("Metabolismo lento", "Depressão e fadiga mental"),
        ),
        tips=("Dietas de fome prolongadas reduzem a conversão de T4 em T3.",),
        sources=(_ATA,),
    ),
    # ------------------------------------------------------------------
    # Body composition / anthropometry
    # ------------------------------------------------------------------
    MarkerDescriptor(
        id=MarkerKey.WEIGHT.value,
        label="Peso Corporal",
        unit="kg",
        definition="Massa total do corpo. Sozinho não indica composição corporal (músculo vs gordura).",
        risks=MarkerRisks(
            high=("Sobrecarga articular", "Risco cardiovascular (se for gordura)"),
            low=("Desnutrição", "Perda de massa magra", "Queda de imunidade"),
        ),
        tips=("Avalie junto com o espelho e medidas de cintura.",),
        sources=(_WHO,),
    ),
    MarkerDescriptor(
        id=MarkerKey.HEIGHT.value,
        label="Altura",
        unit="cm",
        definition="Estatura. Base para IMC e taxa metabólica basal.",
        risks=MarkerRisks(
            high=("Sem risco associado",),
            low=("Sem risco associado",),
        ),
        tips=("Meça descalço, pela manhã.",),
        sources=(_WHO,),
    ),
    MarkerDescriptor(
        id=MarkerKey.BODYFAT.value,
        label="Gordura Corporal (BF%)",
        unit="%",
        definition="Porcentagem de tecido adiposo no corpo.",
        ranges=MarkerRanges(male=_span(10, 20), female=_span(18, 28)),
        risks=MarkerRisks(
            high=("Resistência à insulina", "Inflamação crônica", "Baixa testosterona"),
            low=("Queda hormonal", "Perda de ciclo menstrual (mulheres)", "Baixa energia"),
        ),
        tips=("Homens atléticos geralmente buscam 10-15%.",),
        sources=(MarkerSource("ACE Fitness", "https://www.acefitness.org/"),),
    ),
    MarkerDescriptor(
        id=MarkerKey.MUSCLE_MASS.value,
        label="Massa Muscular",
        unit="kg",
        definition="Massa de músculo esquelético estimada por bioimpedância ou DEXA.",
        risks=MarkerRisks(
            high=("Geralmente protetora",),
            low=("Sarcopenia", "Menor sensibilidade à insulina", "Risco de quedas"),
        ),
        tips=("Treino de força e proteína suficiente são os principais fatores.",),
        sources=(_WHO,),
    ),
    MarkerDescriptor(
        id=MarkerKey.BMI.value,
        label="IMC",
        unit="kg/m²",
        definition="Índice de Massa Corporal: peso dividido pela altura ao quadrado.",
        ranges=MarkerRanges(general=_span(18.5, 24.9)),
        risks=MarkerRisks(
            high=("Sobrepeso ou obesidade", "Risco cardiometabólico"),
            low=("Baixo peso", "Desnutrição"),
        ),
        tips=("Atletas musculosos podem ter IMC alto com gordura baixa; compare com o BF%.",),
        sources=(_WHO,),
    ),
    MarkerDescriptor(
        id=MarkerKey.WAIST.value,
        label="Circunferência da Cintura",
        unit="cm",
        definition="Medida indireta de gordura visceral.",
        ranges=MarkerRanges(male=_span(None, 94), female=_span(None, 80)),
        risks=MarkerRisks(
            high=("Gordura visceral", "Risco cardiovascular", "Resistência à insulina"),
            low=("Sem risco associado",),
        ),
        tips=("Meça na altura do umbigo, ao final de uma expiração normal.",),
        sources=(_WHO,),
    ),
    # ------------------------------------------------------------------
    # Lipid / metabolic
    # ------------------------------------------------------------------
    MarkerDescriptor(
        id=MarkerKey.VLDL.value,
        label="Colesterol VLDL",
        unit="mg/dL",
        definition="Lipoproteína que transporta principalmente triglicerídeos produzidos no fígado.",
        ranges=MarkerRanges(general=_span(None, 30)),
        risks=MarkerRisks(
            high=("Triglicerídeos elevados", "Risco cardiovascular"),
            low=("Raramente problemático",),
        ),
        tips=("Reduzir açúcar e álcool costuma baixar o VLDL.",),
        sources=(_AHA,),
    ),
    MarkerDescriptor(
        id=MarkerKey.LDL.value,
        label="Colesterol LDL",
        unit="mg/dL",
        definition='Conhecido como "colesterol ruim". Transporta colesterol para as artérias.',
        ranges=MarkerRanges(general=_span(0, 130)),
        risks=MarkerRisks(
            high=("Formação de placas (aterosclerose)", "Risco de infarto e AVC"),
            low=("Raramente problemático, mas colesterol é base para hormônios",),
        ),
        tips=("Reduzir gorduras saturadas e aumentar fibras ajuda no controle.",),
        sources=(_AHA,),
    ),
    MarkerDescriptor(
        id=MarkerKey.HDL.value,
        label="Colesterol HDL",
        unit="mg/dL",
        definition='"Colesterol bom". Remove o colesterol das artérias e leva para o fígado.',
        ranges=MarkerRanges(general=_span(40, 100)),
        risks=MarkerRisks(
            high=("Geralmente protetor (fator de longevidade)",),
            low=("Aumenta risco cardiovascular significativamente",),
        ),
        tips=("Exercício aeróbico e gorduras saudáveis (azeite, abacate) aumentam o HDL.",),
        sources=(MarkerSource("Mayo Clinic", "https://www.mayoclinic.org/"),),
    ),
    MarkerDescriptor(
        id=MarkerKey.CHOLESTEROL.value,
        label="Colesterol Total",
        unit="mg/dL",
        definition="Soma das frações de colesterol no sangue.",
        ranges=MarkerRanges(general=_span(None, 190)),
        risks=MarkerRisks(
            high=("Risco cardiovascular (avaliar frações)",),
            low=("Possível impacto na produção hormonal",),
        ),
        tips=("O total sozinho diz pouco; olhe LDL, HDL e a razão entre eles.",),
        sources=(_AHA,),
    ),
    MarkerDescriptor(
        id=MarkerKey.TRIGLYCERIDES.value,
        label="Triglicerídeos",
        unit="mg/dL",
        definition="Principal forma de armazenamento de gordura; sobe com excesso de carboidrato e álcool.",
        ranges=MarkerRanges(general=_span(None, 150)),
        risks=MarkerRisks(
            high=("Risco cardiovascular", "Pancreatite (valores muito altos)", "Resistência à insulina"),
            low=("Raramente problemático",),
        ),
        tips=("Jejum de 12h antes da coleta evita falsos elevados.",),
        sources=(_AHA,),
    ),
    MarkerDescriptor(
        id=MarkerKey.HBA1C.value,
        label="Hemoglobina Glicada (HbA1c)",
        unit="%",
        definition="Média da glicose nos últimos 2-3 meses.",
        ranges=MarkerRanges(general=_span(4.0, 5.6)),
        risks=MarkerRisks(
            high=("Pré-diabetes ou diabetes", "Dano vascular progressivo"),
            low=("Hipoglicemias frequentes", "Anemias podem falsear o valor"),
        ),
        tips=("Reflete tendência; uma glicemia isolada não substitui a HbA1c.",),
        sources=(_ADA,),
    ),
    MarkerDescriptor(
        id=MarkerKey.GLUCOSE.value,
        label="Glicose em Jejum",
        unit="mg/dL",
        definition="Nível de açúcar no sangue após jejum.",
        ranges=MarkerRanges(general=_span(70, 99)),
        risks=MarkerRisks(
            high=("Resistência à insulina", "Pré-diabetes ou diabetes"),
            low=("Hipoglicemia", "Tontura e fraqueza"),
        ),
        tips=("Treino de força aumenta a captação de glicose pelos músculos.",),
        sources=(_ADA,),
    ),
    MarkerDescriptor(
        id=MarkerKey.INSULIN.value,
        label="Insulina",
        unit="µUI/mL",
        definition="Hormônio de armazenamento; abre as células para glicose e aminoácidos.",
        ranges=MarkerRanges(general=_span(2.6, 24.9)),
        risks=MarkerRisks(
            high=("Resistência à insulina", "Gordura visceral", "Fome constante"),
            low=("Possível falência pancreática", "Glicose alta"),
        ),
        tips=("Uma noite mal dormida já causa resistência temporária.",),
        sources=(_ADA,),
    ),
    # ------------------------------------------------------------------
    # Hematology
    # ------------------------------------------------------------------
    MarkerDescriptor(
        id=MarkerKey.HEMATOCRIT.value,
        label="Hematócrito",
        unit="%",
        definition="Porcentagem do volume sanguíneo ocupado pelas células vermelhas.",
        ranges=MarkerRanges(male=_span(38, 52), female=_span(35, 47)),
        risks=MarkerRisks(
            high=("Sangue viscoso (grosso)", "Risco de trombose", "Sobrecarga cardíaca"),
            low=("Anemia", "Baixa oxigenação", "Fadiga"),
        ),
        tips=("Hidratação é fundamental. Uso de testosterona tende a aumentar este valor.",),
        sources=(_RED_CROSS,),
    ),
    MarkerDescriptor(
        id=MarkerKey.HEMOGLOBIN.value,
        label="Hemoglobina",
        unit="g/dL",
        definition="Proteína das hemácias que transporta oxigênio.",
        ranges=MarkerRanges(male=_span(13.5, 17.5), female=_span(12, 15.5)),
        risks=MarkerRisks(
            high=("Policitemia", "Risco de trombose"),
            low=("Anemia", "Cansaço e falta de ar"),
        ),
        tips=("Ferro, B12 e ácido fólico sustentam a produção de hemoglobina.",),
        sources=(_RED_CROSS,),
    ),
    MarkerDescriptor(
        id=MarkerKey.PLATELETS.value,
        label="Plaquetas",
        unit="mil/mm³",
        definition="Fragmentos celulares responsáveis pela coagulação.",
        ranges=MarkerRanges(general=_span(150, 450)),
        risks=MarkerRisks(
            high=("Risco de trombose", "Processo inflamatório"),
            low=("Sangramentos", "Hematomas fáceis"),
        ),
        tips=("Infecções virais recentes podem baixar as plaquetas temporariamente.",),
        sources=(_MEDLINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.FERRITIN.value,
        label="Ferritina",
        unit="ng/mL",
        definition="Reserva de ferro do organismo; também sobe em inflamação.",
        ranges=MarkerRanges(male=_span(30, 400), female=_span(15, 150)),
        risks=MarkerRisks(
            high=("Sobrecarga de ferro", "Inflamação", "Dano hepático"),
            low=("Deficiência de ferro", "Queda de cabelo", "Fadiga"),
        ),
        tips=("Doação de sangue reduz ferritina; carne vermelha e vitamina C aumentam a absorção de ferro.",),
        sources=(_MEDLINE,),
    ),
    # ------------------------------------------------------------------
    # Organ function / vitamins
    # ------------------------------------------------------------------
    MarkerDescriptor(
        id=MarkerKey.CREATININE.value,
        label="Creatinina",
        unit="mg/dL",
        definition="Resíduo do metabolismo muscular filtrado pelos rins.",
        ranges=MarkerRanges(male=_span(0.7, 1.3), female=_span(0.6, 1.1)),
        risks=MarkerRisks(
            high=(
                "Sobrecarga renal",
                "Desidratação",
                "Uso excessivo de proteína/creatina (falso positivo)",
            ),
            low=("Perda de massa muscular severa",),
        ),
        tips=("Musculação e suplementação de creatina podem elevar o valor sem significar dano renal.",),
        sources=(_NKF,),
    ),
    MarkerDescriptor(
        id=MarkerKey.UREA.value,
        label="Ureia",
        unit="mg/dL",
        definition="Produto final do metabolismo das proteínas, eliminado pelos rins.",
        ranges=MarkerRanges(general=_span(15, 45)),
        risks=MarkerRisks(
            high=("Desidratação", "Dieta muito rica em proteína", "Função renal reduzida"),
            low=("Baixa ingestão proteica", "Doença hepática"),
        ),
        tips=("Beba água suficiente nos dias anteriores à coleta.",),
        sources=(_NKF,),
    ),
    MarkerDescriptor(
        id=MarkerKey.AST.value,
        label="TGO (AST)",
        unit="U/L",
        definition="Enzima presente no fígado e nos músculos. Sobe com lesão celular.",
        ranges=MarkerRanges(male=_span(None, 40), female=_span(None, 32)),
        risks=MarkerRisks(
            high=("Sobrecarga hepática", "Lesão muscular recente (treino intenso)"),
            low=("Sem relevância clínica",),
        ),
        tips=("Evite treinos pesados 48h antes da coleta para não falsear o resultado.",),
        sources=(_AASLD,),
    ),
    MarkerDescriptor(
        id=MarkerKey.ALT.value,
        label="TGP (ALT)",
        unit="U/L",
        definition="Enzima mais específica do fígado.",
        ranges=MarkerRanges(male=_span(None, 41), female=_span(None, 33)),
        risks=MarkerRisks(
            high=("Esteatose (fígado gorduroso)", "Toxicidade por medicamentos ou orais", "Hepatite"),
            low=("Sem relevância clínica",),
        ),
        tips=("Álcool e esteroides orais são causas comuns de elevação.",),
        sources=(_AASLD,),
    ),
    MarkerDescriptor(
        id=MarkerKey.GGT.value,
        label="Gama GT",
        unit="U/L",
        definition="Enzima das vias biliares, sensível a álcool e medicamentos.",
        ranges=MarkerRanges(male=_span(8, 61), female=_span(5, 36)),
        risks=MarkerRisks(
            high=("Consumo de álcool", "Colestase", "Estresse oxidativo"),
            low=("Sem relevância clínica",),
        ),
        tips=("Reduzir álcool baixa a GGT em poucas semanas.",),
        sources=(_AASLD,),
    ),
    MarkerDescriptor(
        id=MarkerKey.PSA.value,
        label="PSA Total",
        unit="ng/mL",
        definition="Antígeno prostático específico; marcador de saúde da próstata.",
        ranges=MarkerRanges(male=_span(None, 4)),
        risks=MarkerRisks(
            high=("Hiperplasia prostática", "Prostatite", "Investigar neoplasia"),
            low=("Sem relevância clínica",),
        ),
        tips=("Ejaculação e ciclismo nas 48h anteriores podem elevar o PSA.",),
        sources=(_MEDLINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.VITAMIN_D.value,
        label="Vitamina D (25-OH)",
        unit="ng/mL",
        definition="Pró-hormônio ligado à saúde óssea, imunidade e produção hormonal.",
        ranges=MarkerRanges(general=_span(30, 100)),
        risks=MarkerRisks(
            high=("Hipercalcemia", "Toxicidade por suplementação excessiva"),
            low=("Perda de massa óssea", "Baixa imunidade", "Fadiga"),
        ),
        tips=("Exposição solar moderada e suplementação orientada corrigem deficiências.",),
        sources=(_ENDOCRINE,),
    ),
    MarkerDescriptor(
        id=MarkerKey.VITAMIN_B12.value,
        label="Vitamina B12",
        unit="pg/mL",
        definition="Vitamina essencial para formação de hemácias e função neurológica.",
        ranges=MarkerRanges(general=_span(200, 900)),
        risks=MarkerRisks(
            high=("Geralmente reflexo de suplementação",),
            low=("Anemia megaloblástica", "Formigamentos", "Cansaço"),
        ),
        tips=("Veganos e usuários de metformina têm maior risco de deficiência.",),
        sources=(_MEDLINE,),
    ),
)

MARKER_REGISTRY: Mapping[MarkerKey, MarkerDescriptor] = MappingProxyType(
    {MarkerKey(descriptor.id): descriptor for descriptor in _CURATED}
)

_missing = [key for key in MarkerKey if key is not MarkerKey.GENERIC and key not in MARKER_REGISTRY]
if _missing:
    raise RuntimeError(f"Curated registry is missing markers: {[key.value for key in _missing]}")

GENERIC_DEFINITION = (
    "Indicador fisiológico monitorado. Ainda não há uma descrição curada para este marcador."
)
GENERIC_RISKS = MarkerRisks(
    high=("Valor acima do esperado; pode exigir avaliação clínica.",),
    low=("Valor abaixo do esperado; pode exigir avaliação clínica.",),
)
GENERIC_TIPS = ("Compare com valores anteriores.",)


def resolve_descriptor(
    key: MarkerKey | str,
    gender: Gender,
    learned: Mapping[str, LearnedMarker] | None = None,
    raw_label: str | None = None,
) -> MarkerDescriptor:
    """Resolve the single descriptor for a marker. Never returns None.

    ``gender`` does not affect which descriptor is chosen; curated and
    learned descriptors carry both gender ranges and the range resolver
    picks one.
    """
    key_value = key.value if isinstance(key, MarkerKey) else str(key)
    curated = _curated_entry(key_value)
    if curated is not None:
        return curated

    if learned:
        lookup = key_value
        if key_value == MarkerKey.GENERIC.value and raw_label:
            lookup = raw_label.lower().strip()
        entry = learned.get(lookup)
        if entry is not None:
            return _from_learned(entry)

    return generic_descriptor(raw_label or key_value)


def generic_descriptor(raw_label: str) -> MarkerDescriptor:
    """Fallback descriptor that keeps the marker name as it was written."""
    return MarkerDescriptor(
        id=MarkerKey.GENERIC.value,
        label=raw_label,
        unit="",
        definition=GENERIC_DEFINITION,
        risks=GENERIC_RISKS,
        tips=GENERIC_TIPS,
        provenance=Provenance.GENERIC,
    )


def _curated_entry(key_value: str) -> MarkerDescriptor | None:
    if key_value == MarkerKey.GENERIC.value:
        return None
    try:
        return MARKER_REGISTRY.get(MarkerKey(key_value))
    except ValueError:
        return None


def _from_learned(entry: LearnedMarker) -> MarkerDescriptor:
    sources: tuple[MarkerSource, ...] = ()
    if entry.source_url:
        sources = (MarkerSource(entry.source_title or "Fonte externa", entry.source_url),)
    return MarkerDescriptor(
        id=entry.key,
        label=entry.label,
        unit=entry.unit,
        definition=entry.definition or GENERIC_DEFINITION,
        ranges=MarkerRanges(
            male=_learned_range(entry.male_min, entry.male_max),
            female=_learned_range(entry.female_min, entry.female_max),
        ),
        risks=GENERIC_RISKS,
        tips=GENERIC_TIPS,
        sources=sources,
        provenance=Provenance.LEARNED,
    )


def _learned_range(low: float | None, high: float | None) -> ReferenceRange | None:
    if low is None and high is None:
        return None
    return ReferenceRange(min=low, max=high)
