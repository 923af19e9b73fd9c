"""Isolated ("pod") environments created in the background.

A pod starts from a snapshot of a base environment plus an extra coordinate
set. Creation returns a `concurrent.futures.Future` immediately; callers
must `.result()` it before using the pod. There is no cancellation and no
timeout here: once submitted, creation runs to completion or failure, and a
failure is re-raised by `.result()`.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from depalias.core.model import Coordinate
from depalias.env.environment import BuildEnvironment

logger = logging.getLogger(__name__)

DEFAULT_POD_WORKERS = 4

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()
_pod_counter = 0


def _shared_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=DEFAULT_POD_WORKERS, thread_name_prefix="IsolatedEnvironment")
        return _executor


def configure_pod_executor(max_workers: int = DEFAULT_POD_WORKERS) -> None:
    """Replace the shared pod executor with one running `max_workers` threads.

    Pods already submitted to the previous executor still complete.
    """
    global _executor
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers!r}")
    with _executor_lock:
        previous, _executor = _executor, ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="IsolatedEnvironment")
    if previous is not None:
        previous.shutdown(wait=False)
    logger.debug("pod executor configured with %d worker(s)", max_workers)


def shutdown_pod_executor(wait: bool = True) -> None:
    """Shut down the shared pod executor; a new one is created on next use."""
    global _executor
    with _executor_lock:
        executor, _executor = _executor, None
    if executor is not None:
        executor.shutdown(wait=wait)


def _next_pod_name(base: BuildEnvironment) -> str:
    global _pod_counter
    with _executor_lock:
        _pod_counter += 1
        return f"{base.name}-pod-{_pod_counter}"


def _create_pod(
    deps: tuple[Coordinate, ...],
    settings: dict,
    extra: list[Coordinate],
    name: str,
    initializer: Optional[Callable[[BuildEnvironment], None]],
) -> BuildEnvironment:
    pod = BuildEnvironment(deps, settings=settings, name=name)
    pod.merge(extra)
    if initializer is not None:
        initializer(pod)
    logger.info("%s: ready with %d dependencies", name, len(pod))
    return pod


def isolated_environment(
    base: BuildEnvironment,
    extra: Iterable[Coordinate] = (),
    *,
    executor: Executor | None = None,
    initializer: Callable[[BuildEnvironment], None] | None = None,
) -> "Future[BuildEnvironment]":
    """Fork `base` plus `extra` into a new environment, asynchronously.

    The base is snapshotted before this call returns, so later merges into
    `base` never leak into the pod, and the pod never touches `base`.

    Args:
        base: environment to fork.
        extra: coordinates added to the pod on top of the base snapshot.
        executor: where creation runs (default: a shared thread pool).
        initializer: optional callable run on the new pod before the future
            completes (eg to prepare a worker process for it).

    Returns:
        Future resolving to the ready `BuildEnvironment`.
    """
    deps = base.dependencies
    settings = base.settings
    extra_list = list(extra)
    name = _next_pod_name(base)
    logger.info("%s: creating from %s with %d extra coordinate(s)", name, base.name, len(extra_list))

    pool = executor if executor is not None else _shared_executor()
    return pool.submit(_create_pod, deps, settings, extra_list, name, initializer)


__all__ = [
    "DEFAULT_POD_WORKERS",
    "configure_pod_executor",
    "isolated_environment",
    "shutdown_pod_executor",
]
