"""
Schedule Graph Engine
=====================

Runs the sample construction schedule through the engine.
"""

import argparse
import logging
import sys

from .examples.sample_project import run_sample_project


def main():
    parser = argparse.ArgumentParser(description="Dependency-driven project scheduling")
    parser.add_argument(
        "--example", action="store_true", help="Run the sample construction project"
    )
    parser.add_argument(
        "--slip-days",
        type=int,
        default=7,
        help="Days the topographic survey slips by in the example",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log every scheduling step"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.example:
        print(run_sample_project(slip_days=args.slip_days))
        return 0
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
