"""
Synthetic ICU Patient Generator

Assembles complete patient records for demos and tests: demographics,
risk-consistent vitals and trends, insights, medication, sedation and
labs.
"""

import random

import structlog

from icuwatch.insights.generator import generate_insight, generate_trend_summaries
from icuwatch.models.patient import LabResult, Medication, Patient
from icuwatch.models.vitals import RiskLevel, VentilationSupport
from icuwatch.synthetic.trends import generate_vital_trends
from icuwatch.synthetic.vitals import generate_snapshot

logger = structlog.get_logger(__name__)


# =============================================================================
# Reference Data
# =============================================================================

FIRST_NAMES = [
    "James", "John", "Robert", "Michael", "William", "David", "Mary", "Patricia",
    "Jennifer", "Linda", "Elizabeth", "Barbara", "Susan", "Jessica", "Sarah",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Jones", "Brown", "Davis", "Miller", "Wilson",
    "Moore", "Taylor", "Anderson", "Thomas", "Jackson", "White", "Harris",
]

DIAGNOSES = [
    "Pneumonia", "COPD Exacerbation", "Sepsis", "Acute Respiratory Distress",
    "Myocardial Infarction", "Congestive Heart Failure", "Stroke",
    "Diabetic Ketoacidosis", "Trauma", "Post-operative Monitoring", "Renal Failure",
    "Liver Failure", "Pulmonary Embolism", "Severe Hypertension", "Status Epilepticus",
]

DEFAULT_RISK_WEIGHTS = {"low": 0.60, "medium": 0.25, "high": 0.15}

BASE_MEDICATIONS = [
    ("Acetaminophen", "1000mg q6h"),
    ("Pantoprazole", "40mg daily"),
]

RISK_MEDICATIONS = {
    RiskLevel.HIGH: [
        ("Norepinephrine", "0.05 mcg/kg/min"),
        ("Vancomycin", "1g q12h"),
        ("Piperacillin-Tazobactam", "4.5g q6h"),
    ],
    RiskLevel.MEDIUM: [
        ("Ceftriaxone", "2g daily"),
        ("Furosemide", "40mg q12h"),
    ],
    RiskLevel.LOW: [],
}

SEDATION_LEVELS = {
    RiskLevel.HIGH: [
        "RASS -2 (Light sedation)",
        "RASS -3 (Moderate sedation)",
        "RASS -4 (Deep sedation)",
    ],
    RiskLevel.MEDIUM: ["RASS -1 (Drowsy)", "RASS 0 (Alert and calm)"],
    RiskLevel.LOW: ["RASS 0 (Alert and calm)"],
}

# name, unit, (base, spread) per risk level, abnormal test
LAB_PANEL = [
    ("WBC", "K/µL",
     {RiskLevel.HIGH: (15, 5), RiskLevel.MEDIUM: (11, 4), RiskLevel.LOW: (7, 3)},
     lambda v: v > 11),
    ("Hgb", "g/dL",
     {RiskLevel.HIGH: (8, 2), RiskLevel.MEDIUM: (10, 2), RiskLevel.LOW: (13, 2)},
     lambda v: v < 12),
    ("Creatinine", "mg/dL",
     {RiskLevel.HIGH: (1.8, 1.2), RiskLevel.MEDIUM: (1.2, 0.6), RiskLevel.LOW: (0.7, 0.5)},
     lambda v: v > 1.2),
    ("Lactate", "mmol/L",
     {RiskLevel.HIGH: (3, 3), RiskLevel.MEDIUM: (1.5, 1.5), RiskLevel.LOW: (0.5, 1)},
     lambda v: v > 2),
]


class SyntheticPatientGenerator:
    """
    Generator for synthetic ICU patients.

    Usage:
        generator = SyntheticPatientGenerator(seed=42)
        patients = generator.generate_patients(12)
    """

    def __init__(
        self,
        seed: int | None = None,
        rng: random.Random | None = None,
        risk_weights: dict[str, float] | None = None,
    ):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility, ignored when rng is given
            rng: Random source to draw from
            risk_weights: Relative share of low/medium/high risk patients
        """
        self.rng = rng or random.Random(seed)
        self.risk_weights = {
            RiskLevel(k): v for k, v in (risk_weights or DEFAULT_RISK_WEIGHTS).items()
        }

    def generate_patients(self, count: int = 12) -> list[Patient]:
        """Generate a ward of ``count`` patients with ids p1..pN."""
        patients = [self.generate_patient(i) for i in range(count)]
        logger.info(
            "Generated synthetic patients",
            count=count,
            high_risk=sum(1 for p in patients if p.risk_level == RiskLevel.HIGH),
        )
        return patients

    def generate_patient(self, index: int) -> Patient:
        rng = self.rng
        risk_level = self.random_risk_level()

        vitals = generate_snapshot(risk_level, rng)
        trends = generate_vital_trends(vitals, risk_level, rng)

        return Patient(
            id=f"p{index + 1}",
            name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
            age=40 + rng.randrange(40),
            gender="Male" if rng.random() > 0.5 else "Female",
            bed_number=bed_number(index),
            diagnosis=rng.choice(DIAGNOSES),
            ventilation_support=self.random_ventilation_support(risk_level),
            risk_level=risk_level,
            sedation_level=rng.choice(SEDATION_LEVELS[risk_level]),
            vitals=vitals,
            trends=trends,
            ai_insight=generate_insight(risk_level, vitals, rng),
            ai_trend_summaries=generate_trend_summaries(risk_level, vitals, trends, rng),
            medication=medication_for(risk_level),
            labs=self.generate_labs(risk_level),
        )

    def random_risk_level(self) -> RiskLevel:
        levels = list(self.risk_weights)
        weights = [self.risk_weights[level] for level in levels]
        return self.rng.choices(levels, weights=weights)[0]

    def random_ventilation_support(self, risk_level: RiskLevel) -> VentilationSupport:
        if risk_level == RiskLevel.HIGH:
            return VentilationSupport.MV if self.rng.random() < 0.7 else VentilationSupport.NIV
        if risk_level == RiskLevel.MEDIUM:
            return VentilationSupport.NIV if self.rng.random() < 0.6 else VentilationSupport.O2
        return VentilationSupport.O2

    def generate_labs(self, risk_level: RiskLevel) -> list[LabResult]:
        labs = []
        for name, unit, ranges, is_abnormal in LAB_PANEL:
            base, spread = ranges[risk_level]
            value = base + self.rng.random() * spread
            labs.append(LabResult(
                name=name,
                value=round(value, 1),
                unit=unit,
                is_abnormal=is_abnormal(value),
            ))
        return labs


def bed_number(index: int) -> str:
    """Beds A-1..A-10, then B-1.. and so on."""
    return f"{chr(65 + index // 10)}-{index % 10 + 1}"


def medication_for(risk_level: RiskLevel) -> list[Medication]:
    return [
        Medication(name=name, dosage=dosage)
        for name, dosage in BASE_MEDICATIONS + RISK_MEDICATIONS[risk_level]
    ]


def generate_patients(
    count: int = 12,
    rng: random.Random | None = None,
    risk_weights: dict[str, float] | None = None,
) -> list[Patient]:
    """Convenience wrapper around SyntheticPatientGenerator."""
    return SyntheticPatientGenerator(rng=rng, risk_weights=risk_weights).generate_patients(count)
