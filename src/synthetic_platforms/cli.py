from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .harness import SyntheticPlugin
from .io import load_harness_config
from .report import summarize


def _existing_path(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"File not found: {value}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="synthetic-platforms", add_help=True)
    parser.add_argument("--config", required=True, type=_existing_path, help="Path to harness config (yaml|json)")
    parser.add_argument("--platforms", type=int, default=None, help="Override the number of platforms")
    parser.add_argument("--density", type=float, default=None, help="Override the conversion graph density")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random conversions")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write report JSON to this path (default: stdout)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_harness_config(args.config)
        overrides = {
            key: value
            for key, value in {
                "num_platforms": args.platforms,
                "ccg_density": args.density,
                "seed": args.seed,
            }.items()
            if value is not None
        }
        if overrides:
            config = config.model_validate({**config.model_dump(), **overrides})
        plugin = SyntheticPlugin.from_config(config)
        report = summarize(plugin, config.configuration)
    except Exception as exc:  # noqa: BLE001
        print(f"error: {exc}", file=sys.stderr)
        return 2

    payload = report.model_dump(mode="json")
    text = json.dumps(payload, indent=2, sort_keys=True)
    if args.output is None:
        print(text)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text + "\n", encoding="utf-8")
    return 0
