"""Structured outputs from the diagnosis layer."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ClassificationKind(str, Enum):
    """How a container's state is handled by the diagnosis path."""

    HEALTHY_RUNNING = "healthy_running"
    KNOWN_REASON = "known_reason"
    REQUIRES_LOG_SCAN = "requires_log_scan"


class KnownReason(str, Enum):
    """Waiting reasons explained without reading container logs."""

    IMAGE_PULL_BACK_OFF = "ImagePullBackOff"
    ERR_IMAGE_PULL = "ErrImagePull"
    CREATE_CONTAINER_CONFIG_ERROR = "CreateContainerConfigError"

    @property
    def is_image_pull(self) -> bool:
        return self in (KnownReason.IMAGE_PULL_BACK_OFF, KnownReason.ERR_IMAGE_PULL)


class Classification(BaseModel):
    """Result of classifying a single container snapshot."""

    model_config = ConfigDict(frozen=True)

    kind: ClassificationKind
    reason: KnownReason | None = None
    message: str | None = None

    @classmethod
    def healthy(cls) -> Classification:
        return cls(kind=ClassificationKind.HEALTHY_RUNNING)

    @classmethod
    def known(cls, reason: KnownReason, message: str | None = None) -> Classification:
        return cls(kind=ClassificationKind.KNOWN_REASON, reason=reason, message=message)

    @classmethod
    def log_scan(cls) -> Classification:
        return cls(kind=ClassificationKind.REQUIRES_LOG_SCAN)


class EvidenceSet(BaseModel):
    """Distinct log lines that point at the probable error, in discovery order."""

    model_config = ConfigDict(frozen=True)

    lines: list[str] = Field(default_factory=list)
    limit: int = Field(default=10, ge=1, description="Maximum number of lines collected")
    truncated: bool = Field(default=False, description="Scan stopped because the limit was reached")
    read_error: str | None = Field(default=None, description="Read failure that cut the scan short")

    def __len__(self) -> int:
        return len(self.lines)


class ContainerReport(BaseModel):
    """Explanation for one container of a pod."""

    model_config = ConfigDict(frozen=True)

    container: str
    classification: Classification
    state: dict[str, Any] = Field(default_factory=dict, description="Printable container state")
    explanation: str = Field(default="", description="Operator-facing reason for the failure")
    evidence: EvidenceSet | None = Field(default=None, description="Log evidence, when logs were scanned")
    config_error: bool = Field(
        default=False,
        description="The workload configuration prevents the failure from being explained",
    )

    @property
    def running(self) -> bool:
        return self.classification.kind == ClassificationKind.HEALTHY_RUNNING


class PodDiagnosis(BaseModel):
    """Ordered container reports for one pod."""

    model_config = ConfigDict(frozen=True)

    pod: str
    namespace: str
    phase: str = "Unknown"
    containers: list[ContainerReport] = Field(default_factory=list)


class Diagnosis(BaseModel):
    """Result of diagnosing every pod of a failed rollout."""

    model_config = ConfigDict(frozen=True)

    pods: list[PodDiagnosis] = Field(default_factory=list)

    @property
    def failing_containers(self) -> list[ContainerReport]:
        return [c for p in self.pods for c in p.containers if not c.running]
