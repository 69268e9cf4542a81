"""Container state classification: explain directly or fall back to the logs."""

from __future__ import annotations

from rollout_check.cluster.models import ContainerSnapshot, RunningState, WaitingState
from rollout_check.diagnosis.models import Classification, KnownReason

IMAGE_PULL_REASONS = {KnownReason.IMAGE_PULL_BACK_OFF.value, KnownReason.ERR_IMAGE_PULL.value}
CONFIG_REASONS = {KnownReason.CREATE_CONTAINER_CONFIG_ERROR.value}


def classify(snapshot: ContainerSnapshot) -> Classification:
    """Map a container snapshot to exactly one classification; first matching rule wins."""
    state = snapshot.state
    if isinstance(state, RunningState) and snapshot.ready:
        return Classification.healthy()
    if isinstance(state, WaitingState):
        if state.reason in IMAGE_PULL_REASONS or state.reason in CONFIG_REASONS:
            return Classification.known(KnownReason(state.reason), state.message)
    return Classification.log_scan()


def mentions_secret(message: str | None) -> bool:
    """True when a CreateContainerConfigError message refers to a secret (case-sensitive)."""
    return "secret" in (message or "")
