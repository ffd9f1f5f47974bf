"""Scoped acquisition of engine handles.

Each helper is a context manager that acquires one engine resource,
yields it, and releases it on every exit path, including an early ``return`` inside the ``with``
block or a propagating exception.

* Acquisition failure raises :class:`~dsjob.exceptions.EngineError`
  (re-labelled with a short description) and the ``with`` body never
  runs.  Nothing is released that was not acquired.
* Release is best-effort: a failing close or unlock is logged and
  swallowed so it never replaces the outcome of the body.

Typical use::

    with job_session(engine, "dstage1", "LoadCustomers", lock=True) as job:
        engine.run_job(job, RunMode.NORMAL)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from dsjob.core.protocols import Engine, JobHandle, ProjectHandle
from dsjob.exceptions import EngineError

logger = logging.getLogger(__name__)


def _release(action: Callable[[Any], None], handle: Any, what: str) -> None:
    """Run a release call, logging instead of raising on engine failure."""
    try:
        action(handle)
    except EngineError as exc:
        logger.warning("Failed to %s (status %d): %s", what, exc.status, exc)
    else:
        logger.debug("Released: %s", what)


@contextmanager
def open_project(engine: Engine, name: str) -> Iterator[ProjectHandle]:
    """Open project *name* for the duration of the ``with`` block."""
    try:
        project = engine.open_project(name)
    except EngineError as exc:
        raise exc.with_message(f"Failed to open project '{name}'") from exc
    logger.debug("Opened project %r", name)
    try:
        yield project
    finally:
        _release(engine.close_project, project, f"close project '{name}'")


@contextmanager
def open_job(engine: Engine, project: ProjectHandle, name: str) -> Iterator[JobHandle]:
    """Open job *name* inside an already open *project*."""
    try:
        job = engine.open_job(project, name)
    except EngineError as exc:
        raise exc.with_message(f"Failed to open job '{name}'") from exc
    logger.debug("Opened job %r", name)
    try:
        yield job
    finally:
        _release(engine.close_job, job, f"close job '{name}'")


@contextmanager
def locked_job(engine: Engine, job: JobHandle) -> Iterator[JobHandle]:
    """Hold the engine-side lock on *job* for the duration of the block."""
    try:
        engine.lock_job(job)
    except EngineError as exc:
        raise exc.with_message("Failed to lock job") from exc
    logger.debug("Locked job")
    try:
        yield job
    finally:
        _release(engine.unlock_job, job, "unlock job")


@contextmanager
def job_session(
    engine: Engine,
    project_name: str,
    job_name: str,
    *,
    lock: bool = False,
) -> Iterator[JobHandle]:
    """Open *project_name*, then *job_name* inside it, optionally locked.

    Release happens innermost first: unlock, close job, close project.
    """
    with open_project(engine, project_name) as project:
        with open_job(engine, project, job_name) as job:
            if not lock:
                yield job
                return
            with locked_job(engine, job):
                yield job
