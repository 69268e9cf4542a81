"""Tests for the Rich rendering of rollout progress and diagnosis."""

from __future__ import annotations

from datetime import timedelta

from rollout_check.cluster.models import WorkloadRef
from rollout_check.diagnosis.models import (
    Classification,
    ContainerReport,
    Diagnosis,
    EvidenceSet,
    KnownReason,
    PodDiagnosis,
)
from rollout_check.rollout.report import RolloutReporter


def _diagnosis(*reports: ContainerReport, pod: str = "web-abc") -> Diagnosis:
    return Diagnosis(pods=[PodDiagnosis(pod=pod, namespace="default", containers=list(reports))])


class TestRolloutReporter:
    def test_pod_banner_and_running_container(self, reporter: RolloutReporter, output) -> None:
        report = ContainerReport(
            container="app",
            classification=Classification.healthy(),
            explanation="Container app is in running state",
        )
        reporter.diagnosis(_diagnosis(report))
        text = output.getvalue()
        assert "Pod status [web-abc]" in text
        assert "Container app is in running state" in text
        assert "Container[app]" not in text

    def test_known_reason_prints_state_and_note(self, reporter: RolloutReporter, output) -> None:
        report = ContainerReport(
            container="app",
            classification=Classification.known(KnownReason.IMAGE_PULL_BACK_OFF, "Back-off"),
            state={"kind": "waiting", "reason": "ImagePullBackOff", "message": "Back-off"},
            explanation="Secret regcred is present in namespace default",
        )
        reporter.diagnosis(_diagnosis(report))
        text = output.getvalue()
        assert "Container[app]:" in text
        assert '"reason": "ImagePullBackOff"' in text
        assert "[NOTE] Reason for ImagePullBackOff: Secret regcred is present in namespace default" in text

    def test_config_error_label(self, reporter: RolloutReporter, output) -> None:
        report = ContainerReport(
            container="app",
            classification=Classification.known(KnownReason.ERR_IMAGE_PULL),
            state={"kind": "waiting", "reason": "ErrImagePull"},
            explanation="no imagePullSecrets",
            config_error=True,
        )
        reporter.diagnosis(_diagnosis(report))
        assert "[CONFIG ERROR] Reason for ErrImagePull: no imagePullSecrets" in output.getvalue()

    def test_log_evidence_lines_printed_verbatim(self, reporter: RolloutReporter, output) -> None:
        lines = ["[main] ERROR failed to open /data", "error: [bold]not markup[/bold]"]
        report = ContainerReport(
            container="app",
            classification=Classification.log_scan(),
            state={"kind": "waiting", "reason": "CrashLoopBackOff"},
            explanation="Found 2 log line(s) pointing at the error",
            evidence=EvidenceSet(lines=lines, limit=2, truncated=True),
        )
        reporter.diagnosis(_diagnosis(report))
        text = output.getvalue()
        assert "Reason for CrashLoopBackOff" in text
        for line in lines:
            assert line in text
        assert "(stopped after 2 distinct lines)" in text

    def test_empty_diagnosis(self, reporter: RolloutReporter, output) -> None:
        reporter.diagnosis(Diagnosis())
        assert "No pods matched the deployment selector" in output.getvalue()

    def test_status_banners(self, reporter: RolloutReporter, output, workload: WorkloadRef) -> None:
        reporter.succeeded(workload, 3)
        reporter.failed(workload, 6)
        text = output.getvalue()
        assert "[INFO] Deployment Status [web]" in text
        assert "Deployment successful after 3 check(s)." in text
        assert "[ERROR] Deployment Status [web]" in text
        assert "Deployment failed after 6 check(s)." in text

    def test_waiting_states_real_interval(self, reporter: RolloutReporter, output, workload: WorkloadRef) -> None:
        reporter.waiting(workload, 1, 6, timedelta(seconds=2))
        assert "trying again in 2s..." in output.getvalue()

    def test_read_error_shown_without_evidence(self, reporter: RolloutReporter, output) -> None:
        report = ContainerReport(
            container="app",
            classification=Classification.log_scan(),
            state={"kind": "waiting", "reason": "CrashLoopBackOff"},
            explanation="Could not read container logs: connection broken",
            evidence=EvidenceSet(limit=10, read_error="connection broken"),
        )
        reporter.diagnosis(_diagnosis(report))
        text = output.getvalue()
        assert "Reason for CrashLoopBackOff: Could not read container logs: connection broken" in text
        assert "(log read interrupted: connection broken)" in text

    def test_running_but_not_ready_names_its_state(self, reporter: RolloutReporter, output) -> None:
        report = ContainerReport(
            container="app",
            classification=Classification.log_scan(),
            state={"kind": "running"},
            explanation="No log lines mentioning an error were found",
        )
        reporter.diagnosis(_diagnosis(report))
        text = output.getvalue()
        assert "Reason for running (not ready):" in text
        assert "Reason for Error" not in text

    def test_pod_banner_shows_phase(self, reporter: RolloutReporter, output) -> None:
        diagnosis = Diagnosis(pods=[PodDiagnosis(pod="web-abc", namespace="default", phase="Pending")])
        reporter.diagnosis(diagnosis)
        assert "Pod status [web-abc] (Pending)" in output.getvalue()
