"""CLI entrypoint for the rollout checker."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from rollout_check import __version__
from rollout_check.cluster.models import WorkloadRef
from rollout_check.config import get_settings
from rollout_check.errors import RolloutCheckError
from rollout_check.rollout import RolloutReporter, run_check


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rollout-check",
        description="Verify that a deployment became available and explain why if it did not.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("namespace", help="Namespace of the deployment")
    parser.add_argument("name", help="Name of the deployment")
    parser.add_argument(
        "--kubeconfig",
        type=Path,
        default=None,
        help="Path to kubeconfig (default: KUBECONFIG env or ~/.kube/config)",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubernetes context to use",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Readiness checks before giving up (default: from env or 6)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds to wait between readiness checks (default: from env or 10)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    args = parser.parse_args(argv)
    if not args.namespace.strip() or not args.name.strip():
        parser.error("namespace and name must not be empty")
    if args.max_attempts is not None and args.max_attempts < 1:
        parser.error("--max-attempts must be at least 1")
    if args.interval is not None and args.interval < 0:
        parser.error("--interval must not be negative")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint for rollout-check CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
    logger = logging.getLogger("rollout_check")
    if not args.verbose:
        logger.setLevel(logging.WARNING)

    try:
        settings = get_settings()
        if args.kubeconfig:
            settings.kubeconfig = args.kubeconfig
        if args.context:
            settings.context = args.context
        if args.max_attempts is not None:
            settings.max_attempts = args.max_attempts
        if args.interval is not None:
            settings.interval_seconds = args.interval

        outcome = run_check(
            WorkloadRef(namespace=args.namespace, name=args.name),
            settings=settings,
            reporter=RolloutReporter(Console()),
        )
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    except RolloutCheckError as e:
        logger.error("%s", e)
        return 1
    return 0 if outcome.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
