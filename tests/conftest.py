"""Shared test fixtures for all test modules."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from rollout_check.cluster.models import WorkloadRef
from rollout_check.rollout.report import RolloutReporter


@pytest.fixture
def output() -> io.StringIO:
    """Buffer receiving everything the reporter prints."""
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    """Plain, wide console so rendered text can be asserted on."""
    return Console(file=output, width=200, color_system=None, force_terminal=False)


@pytest.fixture
def reporter(console: Console) -> RolloutReporter:
    return RolloutReporter(console)


@pytest.fixture
def workload() -> WorkloadRef:
    return WorkloadRef(namespace="default", name="web")
