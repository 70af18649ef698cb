"""
Run the synthesis on a signals file and print the decision package.

Usage:
    python -m site_intel_internal.synthesis signals.json --seed-key "300 E Lincoln Way, Ames, IA 50010"

The signals file is either a JSON list of signals, or an object with
"signals" and optionally "address" and "warnings".
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from site_intel_api.signal_models import Signal
from site_intel_internal.monte_carlo.config import DEFAULT_SAMPLE_SIZE
from site_intel_internal.monte_carlo.sensitivity import SensitivityAnalyzer
from site_intel_internal.monte_carlo.simulation import ProbabilisticEstimator
from site_intel_internal.synthesis.config import ConfigurationError, load_rules_config
from site_intel_internal.synthesis.engine import analyze_site
from site_intel_internal.synthesis.export import result_to_csv, result_to_json

logger = logging.getLogger(__name__)

_SIGNAL_LIST = TypeAdapter(list[Signal])


def configure_logging() -> None:
    log_level_name = os.environ.get("SITE_INTEL_LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, None)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    logging.basicConfig(level=log_level, handlers=[stream_handler], force=True)


def read_signals_file(path: Path) -> tuple[list[Signal], str | None, list[str]]:
    """Return (signals, address, warnings) from a signals file."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, list):
        return _SIGNAL_LIST.validate_python(data), None, []
    if not isinstance(data, dict) or "signals" not in data:
        raise ValueError(f"{path} must hold a list of signals or an object with a 'signals' list")
    signals = _SIGNAL_LIST.validate_python(data["signals"])
    warnings = [str(warning) for warning in data.get("warnings") or []]
    return signals, data.get("address"), warnings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m site_intel_internal.synthesis",
        description="Synthesize cost drivers, actions, contingency and a probabilistic estimate from site signals.",
    )
    parser.add_argument("signals_file", type=Path, help="JSON file with the site signals")
    parser.add_argument("--seed-key", help="Simulation seed key; defaults to the file's address")
    parser.add_argument("--baseline-cost-usd", type=float, default=None, help="Baseline project cost in USD")
    parser.add_argument("--sample-size", type=int, default=DEFAULT_SAMPLE_SIZE, help="Monte Carlo trials")
    parser.add_argument("--rules", type=Path, default=None, help="Rule table JSON (default: $SITE_INTEL_RULES_PATH or packaged table)")
    parser.add_argument("--warning", action="append", default=[], help="Upstream data warning; may repeat")
    parser.add_argument("--format", choices=("json", "csv"), default="json")
    parser.add_argument("--sensitivity", action="store_true", help="Also print driver sensitivity ranking (json only)")
    return parser


def main(argv=None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.sensitivity and args.format != "json":
        parser.error("--sensitivity is only available with --format json")

    try:
        config = load_rules_config(args.rules)
    except ConfigurationError as e:
        logger.error(f"Rule table rejected: {e}")
        return 2

    try:
        signals, address, file_warnings = read_signals_file(args.signals_file)
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"Cannot read signals from {args.signals_file}: {e}")
        return 2

    seed_key = args.seed_key or address
    if not seed_key:
        logger.error("A seed key is required: pass --seed-key or put an address in the signals file")
        return 2

    try:
        result = analyze_site(
            signals,
            config,
            seed_key=seed_key,
            baseline_cost_usd=args.baseline_cost_usd,
            sample_size=args.sample_size,
            warnings=file_warnings + args.warning,
        )
    except ValueError as e:
        logger.error(f"Invalid simulation arguments: {e}")
        return 2

    if args.format == "csv":
        sys.stdout.write(result_to_csv(result))
        return 0

    if not args.sensitivity:
        sys.stdout.write(result_to_json(result) + "\n")
        return 0

    trials = ProbabilisticEstimator(sample_size=args.sample_size).simulate(result.cost_drivers, seed_key)
    analyzer = SensitivityAnalyzer()
    payload = {
        "result": result.model_dump(by_alias=True, exclude_none=True, mode="json"),
        "sensitivity": {
            "cost": [d.to_dict() for d in analyzer.analyze(trials, "cost")],
            "schedule": [d.to_dict() for d in analyzer.analyze(trials, "schedule")],
        },
    }
    sys.stdout.write(json.dumps(payload, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
