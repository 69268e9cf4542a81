"""Human-readable progress and diagnosis output on stdout."""

from __future__ import annotations

from datetime import timedelta

from rich.console import Console
from rich.text import Text

from rollout_check.cluster.models import WorkloadRef
from rollout_check.diagnosis.models import ContainerReport, Diagnosis, PodDiagnosis


def _seconds(interval: timedelta) -> str:
    return f"{interval.total_seconds():g}s"


def _state_label(state: dict) -> str:
    if state.get("kind") == "running":
        return "running (not ready)"
    return "Error"


class RolloutReporter:
    """Renders poll progress and the per-pod diagnosis with Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _line(self, label: str, style: str, message: str) -> None:
        self.console.print(Text.assemble((f"[{label}] ", style), message))

    def waiting(self, workload: WorkloadRef, attempt: int, max_attempts: int, interval: timedelta) -> None:
        self._line(
            "WARN",
            "yellow",
            f"Deployment {workload.name} is not up yet (check {attempt}/{max_attempts}), "
            f"trying again in {_seconds(interval)}...",
        )

    def not_ready(self, workload: WorkloadRef) -> None:
        self.console.print()
        self._line("ERROR", "bold red", f"Deployment {workload.name} is not up yet, checking pod logs")

    def diagnosis(self, diagnosis: Diagnosis) -> None:
        if not diagnosis.pods:
            self._line("NOTE", "cyan", "No pods matched the deployment selector")
        for pod in diagnosis.pods:
            self._pod(pod)

    def _pod(self, pod: PodDiagnosis) -> None:
        self.console.print()
        self.console.rule(Text(f"Pod status [{pod.pod}] ({pod.phase})"), align="left")
        if not pod.containers:
            self._line("NOTE", "cyan", f"Pod {pod.pod} reports no container statuses yet")
        for report in pod.containers:
            self._container(report)

    def _container(self, report: ContainerReport) -> None:
        if report.running:
            self.console.print(Text(report.explanation))
            return
        self.console.print(Text(f"Container[{report.container}]:", style="bold"))
        self.console.print_json(data=report.state)
        if report.classification.reason is not None:
            reason = report.classification.reason.value
        else:
            reason = report.state.get("reason") or _state_label(report.state)
        label = "CONFIG ERROR" if report.config_error else "NOTE"
        self.console.print()
        self._line(label, "cyan", f"Reason for {reason}: {report.explanation}")
        evidence = report.evidence
        if evidence is None:
            return
        for line in evidence.lines:
            self.console.print(Text(line), highlight=False)
        if evidence.truncated:
            self.console.print(Text(f"(stopped after {evidence.limit} distinct lines)", style="dim"))
        if evidence.read_error:
            self.console.print(Text(f"(log read interrupted: {evidence.read_error})", style="dim"))

    def _status_banner(self, workload: WorkloadRef, label: str, style: str) -> None:
        self.console.print()
        self.console.rule(Text(f"[{label}] Deployment Status [{workload.name}]", style=style), align="left")

    def succeeded(self, workload: WorkloadRef, attempts: int) -> None:
        self._status_banner(workload, "INFO", "green")
        self.console.print(f"Deployment successful after {attempts} check(s).")

    def failed(self, workload: WorkloadRef, attempts: int) -> None:
        self._status_banner(workload, "ERROR", "bold red")
        self.console.print(f"Deployment failed after {attempts} check(s).")
