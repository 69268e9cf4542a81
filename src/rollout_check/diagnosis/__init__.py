"""Diagnosis layer: classify failing containers and gather log evidence."""

from rollout_check.diagnosis.classifier import classify
from rollout_check.diagnosis.log_scanner import LogErrorScanner
from rollout_check.diagnosis.models import (
    Classification,
    ClassificationKind,
    ContainerReport,
    Diagnosis,
    EvidenceSet,
    KnownReason,
    PodDiagnosis,
)
from rollout_check.diagnosis.pods import PodDiagnostics
from rollout_check.diagnosis.secrets import SecretPresenceProbe

__all__ = [
    "classify",
    "Classification",
    "ClassificationKind",
    "ContainerReport",
    "Diagnosis",
    "EvidenceSet",
    "KnownReason",
    "LogErrorScanner",
    "PodDiagnosis",
    "PodDiagnostics",
    "SecretPresenceProbe",
]
