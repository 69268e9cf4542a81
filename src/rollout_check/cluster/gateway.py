"""Kubernetes access for the checker: deployments, pods, secrets and container logs."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from types import TracebackType
from typing import Any, Protocol

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from rollout_check.cluster.models import (
    ContainerSnapshot,
    ContainerState,
    PodSnapshot,
    RunningState,
    SecretLookup,
    TerminatedState,
    UnknownState,
    WaitingState,
    WorkloadCondition,
    WorkloadDescriptor,
)
from rollout_check.errors import (
    AuthenticationError,
    ClusterRequestError,
    LogStreamError,
    WorkloadNotFoundError,
)

logger = logging.getLogger(__name__)


class LogStream:
    """Streamed container log, read one line at a time.

    Use as a context manager so the underlying connection is released on
    every exit path, including when the reader stops early.
    """

    def __init__(self, response: Any, source: str) -> None:
        self._response = response
        self.source = source
        self._closed = False

    def __enter__(self) -> LogStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def lines(self) -> Iterator[str]:
        """Yield decoded log lines without their line terminators."""
        try:
            for raw in self._response:
                if isinstance(raw, bytes):
                    raw = raw.decode("utf-8", errors="replace")
                yield raw.rstrip("\r\n")
        except (HTTPError, OSError) as e:
            raise LogStreamError(f"Error reading logs of {self.source}: {e}") from e

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._response.close()
            release = getattr(self._response, "release_conn", None)
            if release is not None:
                release()
        except (HTTPError, OSError) as e:
            logger.debug("Failed to release log stream %s: %s", self.source, e)


class ClusterGateway(Protocol):
    """Cluster operations the checker depends on."""

    def get_workload(self, namespace: str, name: str) -> WorkloadDescriptor: ...

    def list_pods(self, namespace: str, selector: str) -> list[PodSnapshot]: ...

    def get_secret(self, namespace: str, name: str) -> SecretLookup: ...

    def stream_logs(self, namespace: str, pod: str, container: str) -> LogStream: ...


def _load_kube_config(kubeconfig_path: str | None, context: str | None) -> client.Configuration:
    """Load an explicitly requested kubeconfig, else in-cluster, else the default kubeconfig."""
    if not kubeconfig_path and not context:
        try:
            config.load_incluster_config()
            return client.Configuration.get_default_copy()
        except config.ConfigException:
            logger.debug("Not running in a cluster, falling back to kubeconfig")
    kwargs: dict[str, Any] = {}
    if kubeconfig_path:
        kwargs["config_file"] = str(kubeconfig_path)
    if context:
        kwargs["context"] = context
    config.load_kube_config(**kwargs)
    return client.Configuration.get_default_copy()


def format_label_selector(selector: Any) -> str:
    """Render a V1LabelSelector as a label selector query string."""
    if selector is None:
        return ""
    parts = [f"{k}={v}" for k, v in sorted((selector.match_labels or {}).items())]
    for expr in selector.match_expressions or []:
        values = ",".join(sorted(expr.values or []))
        if expr.operator == "In":
            parts.append(f"{expr.key} in ({values})")
        elif expr.operator == "NotIn":
            parts.append(f"{expr.key} notin ({values})")
        elif expr.operator == "Exists":
            parts.append(expr.key)
        elif expr.operator == "DoesNotExist":
            parts.append(f"!{expr.key}")
        else:
            raise ClusterRequestError(f"Unsupported label selector operator: {expr.operator!r}")
    return ",".join(parts)


def _parse_container_state(state: Any) -> ContainerState:
    """Extract the tagged container state from V1ContainerState."""
    if state is None:
        return UnknownState()
    if state.waiting:
        return WaitingState(
            reason=getattr(state.waiting, "reason", None),
            message=getattr(state.waiting, "message", None),
        )
    if state.running:
        started_at = getattr(state.running, "started_at", None)
        return RunningState(started_at=started_at.isoformat() if started_at else None)
    if state.terminated:
        return TerminatedState(
            reason=getattr(state.terminated, "reason", None),
            message=getattr(state.terminated, "message", None),
            exit_code=getattr(state.terminated, "exit_code", None),
        )
    return UnknownState()


def _build_pod_snapshot(pod: Any) -> PodSnapshot:
    """Build PodSnapshot from V1Pod."""
    containers = [
        ContainerSnapshot(
            name=cs.name,
            ready=bool(cs.ready),
            state=_parse_container_state(cs.state),
        )
        for cs in (getattr(pod.status, "container_statuses", None) or [])
    ]
    pull_secrets = [ref.name for ref in (getattr(pod.spec, "image_pull_secrets", None) or []) if ref.name]
    return PodSnapshot(
        name=pod.metadata.name,
        namespace=pod.metadata.namespace or "default",
        phase=getattr(pod.status, "phase", None) or "Unknown",
        image_pull_secrets=pull_secrets,
        containers=containers,
    )


def _build_workload_descriptor(d: Any) -> WorkloadDescriptor:
    """Build WorkloadDescriptor from V1Deployment."""
    status = d.status
    return WorkloadDescriptor(
        name=d.metadata.name,
        namespace=d.metadata.namespace or "default",
        selector=format_label_selector(d.spec.selector),
        replicas=status.replicas or 0,
        ready_replicas=status.ready_replicas or 0,
        conditions=[
            WorkloadCondition(type=c.type, status=c.status, reason=c.reason, message=c.message)
            for c in (status.conditions or [])
        ],
    )


class KubernetesGateway:
    """ClusterGateway backed by the Kubernetes Core and Apps APIs."""

    def __init__(
        self,
        core: client.CoreV1Api,
        apps: client.AppsV1Api,
        log_tail_lines: int | None = None,
    ) -> None:
        self._core = core
        self._apps = apps
        self.log_tail_lines = log_tail_lines

    def get_workload(self, namespace: str, name: str) -> WorkloadDescriptor:
        try:
            deployment = self._apps.read_namespaced_deployment(name=name, namespace=namespace)
        except ApiException as e:
            if e.status == 404:
                raise WorkloadNotFoundError(namespace, name) from e
            raise ClusterRequestError(f"Error getting deployment {name}: {e.reason}") from e
        except HTTPError as e:
            raise ClusterRequestError(f"Error getting deployment {name}: {e}") from e
        return _build_workload_descriptor(deployment)

    def list_pods(self, namespace: str, selector: str) -> list[PodSnapshot]:
        try:
            pod_list = self._core.list_namespaced_pod(namespace=namespace, label_selector=selector)
        except ApiException as e:
            raise ClusterRequestError(f"Error listing pods for selector {selector!r}: {e.reason}") from e
        except HTTPError as e:
            raise ClusterRequestError(f"Error listing pods for selector {selector!r}: {e}") from e
        return [_build_pod_snapshot(pod) for pod in pod_list.items]

    def get_secret(self, namespace: str, name: str) -> SecretLookup:
        try:
            self._core.read_namespaced_secret(name=name, namespace=namespace)
        except ApiException as e:
            logger.debug("Secret %s/%s lookup failed: %s", namespace, name, e.reason)
            return SecretLookup(name=name, namespace=namespace, found=False, cause=f"({e.status}) {e.reason}")
        except HTTPError as e:
            logger.debug("Secret %s/%s lookup failed: %s", namespace, name, e)
            return SecretLookup(name=name, namespace=namespace, found=False, cause=str(e))
        return SecretLookup(name=name, namespace=namespace, found=True)

    def stream_logs(self, namespace: str, pod: str, container: str) -> LogStream:
        kwargs: dict[str, Any] = {}
        if self.log_tail_lines:
            kwargs["tail_lines"] = self.log_tail_lines
        try:
            response = self._core.read_namespaced_pod_log(
                name=pod,
                namespace=namespace,
                container=container,
                _preload_content=False,
                **kwargs,
            )
        except ApiException as e:
            raise LogStreamError(f"Error getting logs of {pod}/{container}: {e.reason}") from e
        except HTTPError as e:
            raise LogStreamError(f"Error getting logs of {pod}/{container}: {e}") from e
        return LogStream(response, f"{pod}/{container}")


def connect(
    kubeconfig: str | None = None,
    context: str | None = None,
    log_tail_lines: int | None = None,
) -> KubernetesGateway:
    """Resolve credentials and return a gateway bound to the cluster."""
    try:
        cfg = _load_kube_config(kubeconfig, context)
    except (config.ConfigException, OSError) as e:
        raise AuthenticationError(f"Error getting Kubernetes config: {e}") from e
    api_client = client.ApiClient(cfg)
    logger.debug("Connected to Kubernetes API at %s", cfg.host)
    return KubernetesGateway(
        client.CoreV1Api(api_client),
        client.AppsV1Api(api_client),
        log_tail_lines=log_tail_lines,
    )
