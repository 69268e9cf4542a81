"""Deployment readiness checks."""

from __future__ import annotations

import logging

from rollout_check.cluster.gateway import ClusterGateway
from rollout_check.cluster.models import WorkloadCondition, WorkloadDescriptor, WorkloadRef

logger = logging.getLogger(__name__)

AVAILABLE_CONDITION = "Available"


def available_condition(descriptor: WorkloadDescriptor) -> WorkloadCondition | None:
    """Return the first Available condition of the deployment, if it reports one."""
    return next((c for c in descriptor.conditions if c.type == AVAILABLE_CONDITION), None)


def is_available(descriptor: WorkloadDescriptor) -> bool:
    """Return True if any Available condition of the deployment has status True."""
    return any(c.type == AVAILABLE_CONDITION and c.status == "True" for c in descriptor.conditions)


class DeploymentStatusChecker:
    """Fetches the deployment afresh on every check; fetch errors propagate."""

    def __init__(self, gateway: ClusterGateway) -> None:
        self._gateway = gateway

    def check(self, workload: WorkloadRef) -> bool:
        descriptor = self._gateway.get_workload(workload.namespace, workload.name)
        ready = is_available(descriptor)
        logger.debug(
            "Deployment %s available=%s (ready %d/%d)",
            workload,
            ready,
            descriptor.ready_replicas,
            descriptor.replicas,
        )
        if not ready:
            condition = available_condition(descriptor)
            if condition is not None and condition.reason:
                logger.info(
                    "Deployment %s not available: %s (%s)",
                    workload,
                    condition.reason,
                    condition.message or "no message",
                )
        return ready
