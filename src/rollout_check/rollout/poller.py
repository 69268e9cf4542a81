"""Bounded readiness polling with diagnosis on the final failed attempt."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from rollout_check.cluster.models import PodSnapshot, WorkloadRef
from rollout_check.diagnosis.models import Diagnosis
from rollout_check.diagnosis.pods import PodDiagnostics
from rollout_check.rollout.report import RolloutReporter
from rollout_check.rollout.status import DeploymentStatusChecker

logger = logging.getLogger(__name__)


class RetryBudget(BaseModel):
    """How many readiness checks to make and how long to wait between them."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(..., ge=1)
    interval: timedelta = Field(default=timedelta(seconds=10), ge=timedelta(0))

    @classmethod
    def from_seconds(cls, max_attempts: int, interval_seconds: float) -> RetryBudget:
        return cls(max_attempts=max_attempts, interval=timedelta(seconds=interval_seconds))


class RolloutStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class RolloutOutcome(BaseModel):
    """Result of polling a rollout."""

    status: RolloutStatus
    attempts: int = Field(..., description="Number of readiness checks performed")
    diagnosis: Diagnosis | None = Field(default=None, description="Set only when the rollout failed")

    @property
    def succeeded(self) -> bool:
        return self.status == RolloutStatus.SUCCESS


class RolloutPoller:
    """Polls deployment readiness until it succeeds or the retry budget runs out."""

    def __init__(
        self,
        checker: DeploymentStatusChecker,
        diagnostics: PodDiagnostics,
        reporter: RolloutReporter | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._checker = checker
        self._diagnostics = diagnostics
        self._reporter = reporter or RolloutReporter()
        self._sleep = sleep

    def run(self, workload: WorkloadRef, budget: RetryBudget, pods: Sequence[PodSnapshot]) -> RolloutOutcome:
        """Poll ``workload`` within ``budget``.

        ``pods`` is the pod set fetched before polling started; it is what gets
        diagnosed if the last attempt fails, so it can lag the final readiness
        check.
        """
        remaining = budget.max_attempts
        attempt = 0
        while True:
            attempt += 1
            if self._checker.check(workload):
                logger.info("Deployment %s available after %d check(s)", workload, attempt)
                self._reporter.succeeded(workload, attempt)
                return RolloutOutcome(status=RolloutStatus.SUCCESS, attempts=attempt)

            if remaining == 1:
                self._reporter.not_ready(workload)
                diagnosis = self._diagnostics.diagnose(pods)
                logger.info(
                    "Deployment %s not available after %d check(s), %d failing container(s)",
                    workload,
                    attempt,
                    len(diagnosis.failing_containers),
                )
                self._reporter.diagnosis(diagnosis)
                self._reporter.failed(workload, attempt)
                return RolloutOutcome(status=RolloutStatus.FAILURE, attempts=attempt, diagnosis=diagnosis)

            self._reporter.waiting(workload, attempt, budget.max_attempts, budget.interval)
            self._sleep(budget.interval.total_seconds())
            remaining -= 1
