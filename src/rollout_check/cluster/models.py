"""Structured models for the Kubernetes objects the checker reads."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class WorkloadRef(BaseModel):
    """Namespace and name of the deployment under check."""

    model_config = ConfigDict(frozen=True)

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


class WorkloadCondition(BaseModel):
    """Deployment status condition."""

    type: str
    status: str
    reason: str | None = None
    message: str | None = None


class WorkloadDescriptor(BaseModel):
    """Deployment state needed to locate its pods and judge readiness."""

    name: str
    namespace: str
    selector: str = ""
    replicas: int = 0
    ready_replicas: int = 0
    conditions: list[WorkloadCondition] = Field(default_factory=list)


class RunningState(BaseModel):
    kind: Literal["running"] = "running"
    started_at: str | None = None


class WaitingState(BaseModel):
    kind: Literal["waiting"] = "waiting"
    reason: str | None = None
    message: str | None = None


class TerminatedState(BaseModel):
    kind: Literal["terminated"] = "terminated"
    reason: str | None = None
    message: str | None = None
    exit_code: int | None = None


class UnknownState(BaseModel):
    kind: Literal["unknown"] = "unknown"


ContainerState = Annotated[
    Union[RunningState, WaitingState, TerminatedState, UnknownState],
    Field(discriminator="kind"),
]


class ContainerSnapshot(BaseModel):
    """Lifecycle snapshot of one container, captured at diagnosis time."""

    model_config = ConfigDict(frozen=True)

    name: str
    ready: bool = False
    state: ContainerState = Field(default_factory=UnknownState)

    def state_detail(self) -> dict[str, Any]:
        """Printable state, omitting empty fields."""
        return self.state.model_dump(exclude_none=True)


class PodSnapshot(BaseModel):
    """Pod fields used by the diagnosis path."""

    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    phase: str = "Unknown"
    image_pull_secrets: list[str] = Field(default_factory=list)
    containers: list[ContainerSnapshot] = Field(default_factory=list)


class SecretLookup(BaseModel):
    """Outcome of looking up a secret by name."""

    name: str
    namespace: str
    found: bool
    cause: str | None = None
