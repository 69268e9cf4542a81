"""Orchestrator: connect → fetch workload and pods → poll → diagnose on failure."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from rollout_check.cluster.gateway import ClusterGateway, connect
from rollout_check.cluster.models import WorkloadRef
from rollout_check.config import Settings, get_settings
from rollout_check.diagnosis import LogErrorScanner, PodDiagnostics
from rollout_check.rollout.poller import RetryBudget, RolloutOutcome, RolloutPoller
from rollout_check.rollout.report import RolloutReporter
from rollout_check.rollout.status import DeploymentStatusChecker

logger = logging.getLogger(__name__)


def run_check(
    workload: WorkloadRef,
    settings: Settings | None = None,
    gateway: ClusterGateway | None = None,
    reporter: RolloutReporter | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RolloutOutcome:
    """
    Verify the rollout of ``workload``. Setup failures raise SetupError subclasses;
    an unhealthy rollout is returned as a FAILURE outcome carrying its diagnosis.
    """
    opts = settings or get_settings()
    if gateway is None:
        gateway = connect(
            kubeconfig=str(opts.kubeconfig) if opts.kubeconfig else None,
            context=opts.context,
            log_tail_lines=opts.log_tail_lines,
        )

    descriptor = gateway.get_workload(workload.namespace, workload.name)
    logger.info("Deployment %s uses selector %r", workload, descriptor.selector)
    pods = gateway.list_pods(workload.namespace, descriptor.selector)
    logger.info("Found %d pod(s) for deployment %s", len(pods), workload)

    scanner = LogErrorScanner(limit=opts.evidence_limit, exclude_patterns=opts.log_exclude_patterns)
    poller = RolloutPoller(
        checker=DeploymentStatusChecker(gateway),
        diagnostics=PodDiagnostics(gateway, scanner=scanner),
        reporter=reporter,
        sleep=sleep,
    )
    budget = RetryBudget.from_seconds(opts.max_attempts, opts.interval_seconds)
    return poller.run(workload, budget, pods)
