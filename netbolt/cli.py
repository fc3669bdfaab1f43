"""Command line entry point."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from . import __version__, bootstrap


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Measure download and upload throughput")
    parser.add_argument("--config", default=None, help="Path to config.yaml")
    parser.add_argument("--no-progress", action="store_true", help="Hide transfer progress bars")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"netbolt {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    context = bootstrap(
        args.config,
        verbose=args.verbose,
        show_progress=False if args.no_progress else None,
    )

    print(f"\nWelcome to netbolt Version {__version__}")
    print("\nMeasuring network speed, please wait...")

    try:
        report = context.measurements.run()
    finally:
        context.close()

    print("")
    for line in report.lines():
        print(line)
    print("")
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
