#!/usr/bin/env python3
"""
icuwatch Synthetic Ward Generator

Writes a seeded synthetic patient population as JSON.

Usage:
    python scripts/generate_population.py

    # Or with options
    python scripts/generate_population.py --patients 24 --seed 7 --output ward.json
"""
import argparse
import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from icuwatch.config import get_settings
from icuwatch.observability.logging import configure_logging, get_logger
from icuwatch.synthetic.patients import SyntheticPatientGenerator

logger = get_logger("generate_population")


def main() -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Generate a synthetic ICU ward")
    parser.add_argument("--patients", type=int, default=settings.generator.patient_count,
                        help="Number of patients")
    parser.add_argument("--seed", type=int, default=settings.generator.seed,
                        help="Random seed for a reproducible ward")
    parser.add_argument("--output", type=Path, default=None,
                        help="Output file (stdout when omitted)")
    args = parser.parse_args()

    configure_logging(settings.app.log_level, json_logs=False, stream=sys.stderr)

    generator = SyntheticPatientGenerator(
        seed=args.seed,
        risk_weights=settings.generator.risk_weights,
    )
    patients = generator.generate_patients(args.patients)
    document = json.dumps(
        {"patients": [p.model_dump(mode="json") for p in patients]},
        indent=2,
        ensure_ascii=False,
    )

    if args.output:
        args.output.write_text(document, encoding="utf-8")
        logger.info("Wrote synthetic ward", path=str(args.output), patients=len(patients))
    else:
        print(document)
    return 0


if __name__ == "__main__":
    sys.exit(main())
