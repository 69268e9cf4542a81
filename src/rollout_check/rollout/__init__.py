"""Rollout layer: bounded readiness polling, reporting and orchestration."""

from rollout_check.rollout.orchestrator import run_check
from rollout_check.rollout.poller import RetryBudget, RolloutOutcome, RolloutPoller, RolloutStatus
from rollout_check.rollout.report import RolloutReporter
from rollout_check.rollout.status import DeploymentStatusChecker, is_available

__all__ = [
    "run_check",
    "DeploymentStatusChecker",
    "is_available",
    "RetryBudget",
    "RolloutOutcome",
    "RolloutPoller",
    "RolloutReporter",
    "RolloutStatus",
]
