"""Factory for constructing the CLI argument parser."""

import argparse


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="dynarun",
        description="dynarun - live terminal output for runs of many tasks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    demo = subparsers.add_parser(
        "demo",
        help="Simulate a run and render it",
        description="Simulate a run of many tasks across several projects and render it live.",
    )

    demo.add_argument(
        "--projects",
        type=int,
        default=4,
        help="Number of simulated projects (default: 4)",
    )

    demo.add_argument(
        "--target",
        action="append",
        dest="targets",
        default=None,
        help="Target to run in every project (repeatable, default: build)",
    )

    demo.add_argument(
        "--parallel",
        type=int,
        default=3,
        help="Maximum number of tasks running at once (default: 3)",
    )

    demo.add_argument(
        "--fail",
        action="append",
        default=[],
        metavar="TASK_ID",
        help="Make the given task fail (repeatable)",
    )

    demo.add_argument(
        "--cached",
        action="append",
        default=[],
        metavar="TASK_ID",
        help="Serve the given task from the local cache (repeatable)",
    )

    demo.add_argument(
        "--max-duration",
        type=float,
        default=2.0,
        help="Longest simulated task duration in seconds (default: 2.0)",
    )

    demo.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for simulated durations",
    )

    demo.add_argument(
        "--verbose",
        action="store_true",
        help="Print terminal output of every finished task",
    )

    demo.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    demo.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Write debug logs to this file",
    )

    return parser
