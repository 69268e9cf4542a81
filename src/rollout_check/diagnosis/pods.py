"""Per-container failure diagnosis over the pods of a workload."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rollout_check.cluster.gateway import ClusterGateway
from rollout_check.cluster.models import ContainerSnapshot, PodSnapshot
from rollout_check.diagnosis import messages
from rollout_check.diagnosis.classifier import classify, mentions_secret
from rollout_check.diagnosis.log_scanner import LogErrorScanner
from rollout_check.diagnosis.models import (
    Classification,
    ClassificationKind,
    ContainerReport,
    Diagnosis,
    EvidenceSet,
    PodDiagnosis,
)
from rollout_check.diagnosis.secrets import SecretPresenceProbe
from rollout_check.errors import LogStreamError

logger = logging.getLogger(__name__)


class PodDiagnostics:
    """Explains why each container of a set of pods is not running."""

    def __init__(
        self,
        gateway: ClusterGateway,
        scanner: LogErrorScanner | None = None,
        secret_probe: SecretPresenceProbe | None = None,
    ) -> None:
        self._gateway = gateway
        self._scanner = scanner or LogErrorScanner()
        self._secret_probe = secret_probe or SecretPresenceProbe(gateway)

    def diagnose(self, pods: Sequence[PodSnapshot]) -> Diagnosis:
        return Diagnosis(pods=[self.diagnose_pod(pod) for pod in pods])

    def diagnose_pod(self, pod: PodSnapshot) -> PodDiagnosis:
        reports = [self._diagnose_container(pod, container) for container in pod.containers]
        return PodDiagnosis(pod=pod.name, namespace=pod.namespace, phase=pod.phase, containers=reports)

    def _diagnose_container(self, pod: PodSnapshot, container: ContainerSnapshot) -> ContainerReport:
        classification = classify(container)
        logger.debug("Container %s/%s classified as %s", pod.name, container.name, classification.kind.value)

        if classification.kind == ClassificationKind.HEALTHY_RUNNING:
            return ContainerReport(
                container=container.name,
                classification=classification,
                explanation=messages.CONTAINER_RUNNING.format(container=container.name),
            )

        state = container.state_detail()
        if classification.kind == ClassificationKind.REQUIRES_LOG_SCAN:
            return self._explain_from_logs(pod, container, classification, state)

        if classification.reason is not None and classification.reason.is_image_pull:
            return self._explain_image_pull(pod, container, classification, state)

        if mentions_secret(classification.message):
            explanation = messages.CONFIG_SECRET_REF
        else:
            explanation = messages.CONFIG_MAP_REF
        return ContainerReport(
            container=container.name,
            classification=classification,
            state=state,
            explanation=explanation,
        )

    def _explain_image_pull(
        self,
        pod: PodSnapshot,
        container: ContainerSnapshot,
        classification: Classification,
        state: dict,
    ) -> ContainerReport:
        reason = classification.reason.value if classification.reason else ""
        if not pod.image_pull_secrets:
            logger.warning("Pod %s reports %s without any imagePullSecrets", pod.name, reason)
            return ContainerReport(
                container=container.name,
                classification=classification,
                state=state,
                explanation=messages.IMAGE_PULL_SECRET_UNSET.format(pod=pod.name, reason=reason),
                config_error=True,
            )

        secret_name = pod.image_pull_secrets[0]
        lookup = self._secret_probe.probe(secret_name, pod.namespace)
        if lookup.found:
            explanation = messages.IMAGE_PULL_SECRET_PRESENT.format(secret=secret_name, namespace=pod.namespace)
        else:
            explanation = messages.IMAGE_PULL_SECRET_MISSING.format(
                secret=secret_name,
                cause=lookup.cause or "not found",
                namespace=pod.namespace,
            )
        return ContainerReport(
            container=container.name,
            classification=classification,
            state=state,
            explanation=explanation,
        )

    def _explain_from_logs(
        self,
        pod: PodSnapshot,
        container: ContainerSnapshot,
        classification: Classification,
        state: dict,
    ) -> ContainerReport:
        try:
            with self._gateway.stream_logs(pod.namespace, pod.name, container.name) as stream:
                evidence = self._scanner.scan(stream.lines())
        except LogStreamError as e:
            logger.warning("%s", e)
            return ContainerReport(
                container=container.name,
                classification=classification,
                state=state,
                explanation=messages.LOG_STREAM_FAILED.format(error=e),
                evidence=EvidenceSet(limit=self._scanner.limit, read_error=str(e)),
            )

        if evidence.lines:
            explanation = messages.LOG_EVIDENCE_FOUND.format(count=len(evidence))
        elif evidence.read_error:
            explanation = messages.LOG_STREAM_FAILED.format(error=evidence.read_error)
        else:
            explanation = messages.LOG_EVIDENCE_NONE
        return ContainerReport(
            container=container.name,
            classification=classification,
            state=state,
            explanation=explanation,
            evidence=evidence,
        )
