#!/usr/bin/env python3
"""Command-line interface for the wellness predictor.

Usage:
    python -m cognify.services.wellness_service.cli --help
    python -m cognify.services.wellness_service.cli predict 0 0 0 1 0 ... --model-dir models
    python -m cognify.services.wellness_service.cli self-test --model-dir models
"""
import argparse
import json
import logging
import sys
from dataclasses import replace

from .config import WellnessConfig
from .errors import InvalidInputError, PredictorError
from .predictor import WellnessPredictor

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        description="Cognify wellness predictor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--model-dir",
        help="Directory holding depression/anxiety model artifacts"
    )
    parser.add_argument(
        "--normalization-file",
        help="Normalization JSON overriding the embedded constants"
    )
    parser.add_argument(
        "--lenient", action="store_true",
        help="Skip per-subscale answer range checks"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    predict_parser = subparsers.add_parser("predict", help="Assess 25 answers")
    predict_parser.add_argument(
        "responses", nargs="+", type=int,
        help="The 25 answers in questionnaire order"
    )

    subparsers.add_parser("self-test", help="Run the built-in smoke-test questionnaires")

    return parser


def build_config(args: argparse.Namespace) -> WellnessConfig:
    config = WellnessConfig.from_env()
    overrides = {}
    if args.model_dir:
        overrides["model_dir"] = args.model_dir
    if args.normalization_file:
        overrides["normalization_file"] = args.normalization_file
    if args.lenient:
        overrides["strict_ranges"] = False
    return replace(config, **overrides)


def main(argv=None) -> int:
    """Main entry point."""
    parser = setup_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command not in ("predict", "self-test"):
        parser.print_help()
        return 0

    try:
        with WellnessPredictor.from_config(build_config(args)) as predictor:
            if args.command == "predict":
                output = predictor.predict(args.responses).to_dict()
            else:
                output = predictor.self_test().to_dict()
    except PredictorError as e:
        print(json.dumps({"error": e.to_dict()}, indent=2))
        return 2 if isinstance(e, InvalidInputError) else 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
