from __future__ import annotations

import threading
from concurrent.futures import Future

import pytest

from depalias.core.model import Coordinate
from depalias.env.environment import BuildEnvironment
from depalias.env.pods import isolated_environment, shutdown_pod_executor

X = Coordinate("x", "1.0")
Y = Coordinate("y", "2.0")


def test_isolated_environment_returns_future_and_forks(pod_executor):
    base = BuildEnvironment([X], name="main")

    fut = isolated_environment(base, [Y], executor=pod_executor)

    assert isinstance(fut, Future)
    pod = fut.result()
    assert pod.dependencies == (X, Y)
    assert pod.name.startswith("main-pod-")
    assert base.dependencies == (X,)


def test_isolated_environment_does_not_block_on_creation(pod_executor):
    release = threading.Event()
    started = threading.Event()

    def slow_init(pod: BuildEnvironment) -> None:
        started.set()
        release.wait(timeout=5)

    fut = isolated_environment(BuildEnvironment([X]), [Y], executor=pod_executor, initializer=slow_init)

    assert started.wait(timeout=5)
    assert not fut.done()
    release.set()
    assert fut.result(timeout=5).dependencies == (X, Y)


def test_isolated_environment_snapshots_base_at_call_time(pod_executor):
    base = BuildEnvironment([X])
    gate = threading.Event()

    fut = isolated_environment(base, [], executor=pod_executor, initializer=lambda pod: gate.wait(timeout=5))
    base.merge([Y])
    gate.set()

    assert fut.result(timeout=5).dependencies == (X,)


def test_isolated_environment_failure_surfaces_from_result(pod_executor):
    def boom(pod: BuildEnvironment) -> None:
        raise RuntimeError("pod failed to start")

    fut = isolated_environment(BuildEnvironment(), [X], executor=pod_executor, initializer=boom)

    with pytest.raises(RuntimeError, match="pod failed to start"):
        fut.result(timeout=5)


def test_isolated_environment_shared_executor():
    try:
        pod = isolated_environment(BuildEnvironment([X]), [X, Y]).result(timeout=5)
        assert pod.dependencies == (X, Y)
    finally:
        shutdown_pod_executor()
