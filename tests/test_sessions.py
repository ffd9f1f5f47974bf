"""Tests for scoped handle acquisition (core/sessions.py).

Every acquired handle must be released exactly once on every exit path,
and nothing may be released that was never acquired.
"""

from __future__ import annotations

import logging

import pytest

from dsjob import engine_status
from dsjob.core.sessions import job_session, locked_job, open_project
from dsjob.exceptions import EngineError

from conftest import FakeEngine


class TestOpenProject:
    def test_yields_handle_and_closes(self, engine: FakeEngine) -> None:
        with open_project(engine, "dstage1") as project:
            assert project == "project:dstage1"
        assert engine.ops() == ["open_project", "close_project"]

    def test_open_failure_relabels_and_skips_body(self, engine: FakeEngine) -> None:
        engine.failures["open_project"] = engine_status.BAD_PROJECT
        body_ran = False
        with pytest.raises(EngineError, match="Failed to open project 'nope'") as exc_info:
            with open_project(engine, "nope"):
                body_ran = True
        assert not body_ran
        assert exc_info.value.status == engine_status.BAD_PROJECT
        assert engine.count("close_project") == 0

    def test_closes_when_body_raises(self, engine: FakeEngine) -> None:
        with pytest.raises(ValueError):
            with open_project(engine, "dstage1"):
                raise ValueError("body failed")
        assert engine.count("close_project") == 1


class TestJobSession:
    def test_release_order_is_innermost_first(self, engine: FakeEngine) -> None:
        with job_session(engine, "dstage1", "LoadCustomers", lock=True) as job:
            assert job == "job:LoadCustomers"
        assert engine.ops() == [
            "open_project",
            "open_job",
            "lock_job",
            "unlock_job",
            "close_job",
            "close_project",
        ]

    def test_job_open_failure_closes_project_only(self, engine: FakeEngine) -> None:
        engine.failures["open_job"] = engine_status.BAD_NAME
        with pytest.raises(EngineError, match="Failed to open job 'Missing'"):
            with job_session(engine, "dstage1", "Missing"):
                pass  # pragma: no cover
        assert engine.count("close_project") == 1
        assert engine.count("close_job") == 0

    def test_lock_failure_skips_body_and_unlock(self, engine: FakeEngine) -> None:
        engine.failures["lock_job"] = engine_status.JOB_LOCKED
        body_ran = False
        with pytest.raises(EngineError) as exc_info:
            with job_session(engine, "dstage1", "LoadCustomers", lock=True):
                body_ran = True
        assert not body_ran
        assert exc_info.value.status == engine_status.JOB_LOCKED
        assert engine.count("unlock_job") == 0
        assert engine.count("close_job") == 1
        assert engine.count("close_project") == 1

    def test_early_return_still_releases(self, engine: FakeEngine) -> None:
        def first_stage() -> str:
            with job_session(engine, "dstage1", "LoadCustomers") as job:
                return f"{job}/Extract"

        assert first_stage() == "job:LoadCustomers/Extract"
        assert engine.count("close_job") == 1
        assert engine.count("close_project") == 1

    def test_body_error_survives_release_failure(
        self,
        engine: FakeEngine,
        caplog: pytest.LogCaptureFixture,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        # The CLI may already have detached the namespace from the root logger.
        monkeypatch.setattr(logging.getLogger("dsjob"), "propagate", True)
        engine.failures["close_job"] = engine_status.BAD_HANDLE
        with caplog.at_level(logging.WARNING, logger="dsjob"):
            with pytest.raises(EngineError) as exc_info:
                with job_session(engine, "dstage1", "LoadCustomers"):
                    raise EngineError(engine_status.BAD_STATE, "run failed")
        assert exc_info.value.status == engine_status.BAD_STATE
        assert engine.count("close_project") == 1
        assert "close job" in caplog.text


class TestLockedJob:
    def test_unlocks_after_body(self, engine: FakeEngine) -> None:
        with locked_job(engine, "job:X") as job:
            assert job == "job:X"
        assert engine.ops() == ["lock_job", "unlock_job"]
