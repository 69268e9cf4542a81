"""Exception hierarchy separating fatal setup failures from diagnostic ones."""

from __future__ import annotations


class RolloutCheckError(Exception):
    """Base class for all errors raised by rollout_check."""


class SetupError(RolloutCheckError):
    """Unrecoverable failure while preparing the check; aborts the run."""


class AuthenticationError(SetupError):
    """Cluster credentials could not be resolved."""


class WorkloadNotFoundError(SetupError):
    """The requested workload does not exist in the namespace."""

    def __init__(self, namespace: str, name: str) -> None:
        super().__init__(f"Deployment {name} not found in namespace {namespace}")
        self.namespace = namespace
        self.name = name


class ClusterRequestError(SetupError):
    """A Kubernetes API call required by the check failed."""


class DiagnosticError(RolloutCheckError):
    """Failure on the diagnosis path; reported, never fatal."""


class LogStreamError(DiagnosticError):
    """A container log stream could not be opened or read."""
