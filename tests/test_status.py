"""Tests for deployment readiness evaluation."""

from __future__ import annotations

import logging

import pytest

from rollout_check.cluster.models import WorkloadCondition, WorkloadDescriptor, WorkloadRef
from rollout_check.errors import WorkloadNotFoundError
from rollout_check.rollout.status import DeploymentStatusChecker, available_condition, is_available
from tests.fakes import FakeGateway


def _descriptor(*conditions: tuple[str, str]) -> WorkloadDescriptor:
    return WorkloadDescriptor(
        name="web",
        namespace="default",
        conditions=[WorkloadCondition(type=t, status=s) for t, s in conditions],
    )


class TestIsAvailable:
    def test_available_true(self) -> None:
        assert is_available(_descriptor(("Progressing", "True"), ("Available", "True")))

    def test_available_false(self) -> None:
        assert not is_available(_descriptor(("Available", "False")))

    def test_no_conditions(self) -> None:
        assert not is_available(_descriptor())

    def test_other_condition_true_is_not_enough(self) -> None:
        assert not is_available(_descriptor(("Progressing", "True"), ("ReplicaFailure", "True")))

    def test_any_available_true_counts(self) -> None:
        assert is_available(_descriptor(("Available", "False"), ("Available", "True")))


class TestDeploymentStatusChecker:
    def test_refetches_on_every_check(self) -> None:
        gateway = FakeGateway(availability=[False, True])
        checker = DeploymentStatusChecker(gateway)
        ref = WorkloadRef(namespace="default", name="web")
        assert checker.check(ref) is False
        assert checker.check(ref) is True
        assert gateway.workload_calls == 2

    def test_fetch_errors_propagate(self) -> None:
        class MissingGateway(FakeGateway):
            def get_workload(self, namespace: str, name: str) -> WorkloadDescriptor:
                raise WorkloadNotFoundError(namespace, name)

        checker = DeploymentStatusChecker(MissingGateway())
        with pytest.raises(WorkloadNotFoundError):
            checker.check(WorkloadRef(namespace="default", name="web"))

    def test_unavailable_reason_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        class StalledGateway(FakeGateway):
            def get_workload(self, namespace: str, name: str) -> WorkloadDescriptor:
                return WorkloadDescriptor(
                    name=name,
                    namespace=namespace,
                    conditions=[
                        WorkloadCondition(
                            type="Available",
                            status="False",
                            reason="MinimumReplicasUnavailable",
                            message="Deployment does not have minimum availability.",
                        )
                    ],
                )

        checker = DeploymentStatusChecker(StalledGateway())
        with caplog.at_level(logging.INFO, logger="rollout_check.rollout.status"):
            assert checker.check(WorkloadRef(namespace="default", name="web")) is False
        assert "MinimumReplicasUnavailable" in caplog.text
        assert "minimum availability" in caplog.text


class TestAvailableCondition:
    def test_returns_available_condition(self) -> None:
        condition = available_condition(_descriptor(("Progressing", "True"), ("Available", "False")))
        assert condition is not None
        assert condition.status == "False"

    def test_missing(self) -> None:
        assert available_condition(_descriptor(("Progressing", "True"))) is None
