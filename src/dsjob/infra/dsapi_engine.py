"""Native-library implementation of :class:`~dsjob.core.protocols.Engine`.

This module is the **only** place in the codebase that calls into the
engine's C client library.  Every non-success status is raised as a
typed :class:`~dsjob.exceptions.EngineError`; nothing raw escapes
the infrastructure boundary.

The library is located lazily, on the first engine call, so that
argument validation and ``--help``-style paths work on machines without
the client installed.
"""

from __future__ import annotations

import ctypes
import ctypes.util
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from dsjob import engine_status
from dsjob.core.models import (
    ConnectionParams,
    JobInfoKey,
    JobLimit,
    LinkInfoKey,
    LogDetail,
    LogEvent,
    LogFilter,
    LogType,
    ParamInfo,
    ParamType,
    ProjectInfoKey,
    RunMode,
    StageInfoKey,
)
from dsjob.core.param_values import FloatValue, IntegerValue, ParamValue, value_class_for
from dsjob.exceptions import EngineError, EngineLibraryNotFoundError, engine_error
from dsjob.infra.dsapi_structs import (
    DSJOBINFO,
    DSLINKINFO,
    DSLOGDETAIL,
    DSLOGEVENT,
    DSPARAM,
    DSPARAMINFO,
    DSPROJECTINFO,
    DSSTAGEINFO,
    declare_prototypes,
    read_string_list,
)

logger = logging.getLogger(__name__)

LIBRARY_NAME: str = "vmdsapi"
"""Base name of the client library (``libvmdsapi.so`` / ``vmdsapi.dll``)."""

# Union member holding the payload of each string-like parameter type.
_TEXT_FIELDS: dict[int, str] = {
    ParamType.STRING: "pString",
    ParamType.ENCRYPTED: "pEncrypt",
    ParamType.PATHNAME: "pPath",
    ParamType.LIST: "pListValue",
    ParamType.DATE: "pDate",
    ParamType.TIME: "pTime",
}


def load_library(path: str | None = None) -> ctypes.CDLL:
    """Load and prototype the client library.

    Parameters
    ----------
    path:
        Explicit library path.  When ``None`` the platform's library
        search is used.

    Raises
    ------
    EngineLibraryNotFoundError
        When the library cannot be found, loaded, or lacks an entry point.
    """
    hint = (
        "Install the engine client, or point DSJOB_DSAPI_LIBRARY at the "
        f"{LIBRARY_NAME} shared library."
    )
    candidate = path or ctypes.util.find_library(LIBRARY_NAME)
    if candidate is None:
        raise EngineLibraryNotFoundError(
            f"Engine client library '{LIBRARY_NAME}' was not found.",
            hint=hint,
        )
    try:
        lib = ctypes.CDLL(candidate)
        declare_prototypes(lib)
    except (OSError, AttributeError) as exc:
        raise EngineLibraryNotFoundError(
            f"Failed to load engine client library '{candidate}': {exc}",
            hint=hint,
        ) from exc
    logger.debug("Loaded engine client library %s", candidate)
    return lib


class DsapiEngine:
    """Concrete :class:`Engine` backed by the native client library.

    Usage::

        engine = DsapiEngine()
        engine.set_server_params(ConnectionParams(server="etl01"))
        project = engine.open_project("dstage1")

    This class satisfies the :class:`~dsjob.core.protocols.Engine`
    protocol structurally.
    """

    def __init__(
        self,
        library_path: str | None = None,
        *,
        encoding: str = "utf-8",
        loader: Callable[[str | None], Any] = load_library,
    ) -> None:
        self._library_path = library_path
        self._encoding = encoding
        self._loader = loader
        self._lib: Any = None
        self._server_params: ConnectionParams = ConnectionParams()

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    @property
    def lib(self) -> Any:
        """The loaded library, with the connection parameters applied."""
        if self._lib is None:
            lib = self._loader(self._library_path)
            params = self._server_params
            lib.DSSetServerParams(
                self._encode(params.domain),
                self._encode(params.user),
                self._encode(params.password),
                self._encode(params.server),
            )
            self._lib = lib
        return self._lib

    def _encode(self, text: str | None) -> bytes | None:
        if text is None:
            return None
        return text.encode(self._encoding)

    def _decode(self, raw: bytes | None) -> str:
        if raw is None:
            return ""
        return raw.decode(self._encoding, errors="replace")

    def _strings(self, address: int | None) -> list[str]:
        return read_string_list(address, self._encoding)

    @staticmethod
    def _check(call: str, status: int) -> None:
        logger.debug("%s -> %d", call, status)
        if status != engine_status.NO_ERROR:
            raise engine_error(status, f"{call} returned status {status}")

    def _last_error(self, call: str) -> EngineError:
        status = self.lib.DSGetLastError()
        logger.debug("%s failed, last error %d", call, status)
        return engine_error(status, f"{call} failed with status {status}")

    def _log_detail(self, detail: DSLOGDETAIL) -> LogDetail:
        return LogDetail(
            event_id=detail.eventId,
            timestamp=datetime.fromtimestamp(detail.timestamp),
            type=detail.type,
            message_lines=tuple(self._strings(detail.fullMessage)),
        )

    def _log_event(self, event: DSLOGEVENT) -> LogEvent:
        return LogEvent(
            event_id=event.eventId,
            timestamp=datetime.fromtimestamp(event.timestamp),
            type=event.type,
            message=self._decode(event.message),
        )

    def _param_value(self, param: DSPARAM) -> ParamValue | None:
        value_class = value_class_for(param.paramType)
        if value_class is IntegerValue:
            return IntegerValue(param.paramValue.pInt)
        if value_class is FloatValue:
            return FloatValue(param.paramValue.pFloat)
        field = _TEXT_FIELDS.get(param.paramType)
        if field is None:
            return None
        return value_class(self._decode(getattr(param.paramValue, field)))

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    def set_server_params(self, params: ConnectionParams) -> None:
        """Record *params*; they are applied when the library is first used."""
        self._server_params = params
        if self._lib is not None:
            self._lib.DSSetServerParams(
                self._encode(params.domain),
                self._encode(params.user),
                self._encode(params.password),
                self._encode(params.server),
            )

    def get_project_list(self) -> list[str]:
        address = self.lib.DSGetProjectList()
        if not address:
            raise self._last_error("DSGetProjectList")
        return self._strings(address)

    def get_last_error_message(self) -> list[str] | None:
        if self._lib is None:
            # No engine call has been made, so there is nothing to report.
            return None
        address = self.lib.DSGetLastErrorMsg(None)
        if not address:
            return None
        return self._strings(address) or None

    # ------------------------------------------------------------------
    # Handles
    # ------------------------------------------------------------------

    def open_project(self, name: str) -> int:
        handle = self.lib.DSOpenProject(self._encode(name))
        if not handle:
            raise self._last_error("DSOpenProject")
        return handle

    def close_project(self, project: int) -> None:
        self._check("DSCloseProject", self.lib.DSCloseProject(project))

    def open_job(self, project: int, name: str) -> int:
        handle = self.lib.DSOpenJob(project, self._encode(name))
        if not handle:
            raise self._last_error("DSOpenJob")
        return handle

    def close_job(self, job: int) -> None:
        self._check("DSCloseJob", self.lib.DSCloseJob(job))

    def lock_job(self, job: int) -> None:
        self._check("DSLockJob", self.lib.DSLockJob(job))

    def unlock_job(self, job: int) -> None:
        self._check("DSUnlockJob", self.lib.DSUnlockJob(job))

    # ------------------------------------------------------------------
    # Job control
    # ------------------------------------------------------------------

    def run_job(self, job: int, mode: RunMode) -> None:
        self._check("DSRunJob", self.lib.DSRunJob(job, int(mode)))

    def stop_job(self, job: int) -> None:
        self._check("DSStopJob", self.lib.DSStopJob(job))

    def wait_for_job(self, job: int) -> None:
        self._check("DSWaitForJob", self.lib.DSWaitForJob(job))

    def set_job_limit(self, job: int, limit: JobLimit, value: int) -> None:
        self._check("DSSetJobLimit", self.lib.DSSetJobLimit(job, int(limit), value))

    # ------------------------------------------------------------------
    # Information
    # ------------------------------------------------------------------

    def get_project_info(self, project: int, key: ProjectInfoKey) -> Any:
        info = DSPROJECTINFO()
        self._check(
            "DSGetProjectInfo",
            self.lib.DSGetProjectInfo(project, int(key), ctypes.byref(info)),
        )
        return self._strings(info.info.jobList)

    def get_job_info(self, job: int, key: JobInfoKey) -> Any:
        info = DSJOBINFO()
        self._check("DSGetJobInfo", self.lib.DSGetJobInfo(job, int(key), ctypes.byref(info)))
        data = info.info
        if key == JobInfoKey.STATUS:
            return data.jobStatus
        if key == JobInfoKey.WAVE_NUMBER:
            return data.jobWaveNumber
        if key == JobInfoKey.START_TIMESTAMP:
            return datetime.fromtimestamp(data.jobStartTime)
        if key == JobInfoKey.PARAM_LIST:
            return self._strings(data.paramList)
        if key == JobInfoKey.STAGE_LIST:
            return self._strings(data.stageList)
        if key == JobInfoKey.CONTROLLER:
            return self._decode(data.jobController)
        if key == JobInfoKey.USER_STATUS:
            return self._decode(data.userStatus)
        return self._decode(data.jobName)

    def get_stage_info(self, job: int, stage: str, key: StageInfoKey) -> Any:
        info = DSSTAGEINFO()
        self._check(
            "DSGetStageInfo",
            self.lib.DSGetStageInfo(job, self._encode(stage), int(key), ctypes.byref(info)),
        )
        data = info.info
        if key == StageInfoKey.LAST_ERROR:
            return self._log_detail(data.lastError)
        if key == StageInfoKey.IN_ROW_NUMBER:
            return data.inRowNum
        if key == StageInfoKey.LINK_LIST:
            return self._strings(data.linkList)
        if key == StageInfoKey.TYPE:
            return self._decode(data.typeName)
        return self._decode(data.stageName)

    def get_link_info(self, job: int, stage: str, link: str, key: LinkInfoKey) -> Any:
        info = DSLINKINFO()
        self._check(
            "DSGetLinkInfo",
            self.lib.DSGetLinkInfo(
                job,
                self._encode(stage),
                self._encode(link),
                int(key),
                ctypes.byref(info),
            ),
        )
        data = info.info
        if key == LinkInfoKey.LAST_ERROR:
            return self._log_detail(data.lastError)
        if key == LinkInfoKey.ROW_COUNT:
            return data.rowCount
        return self._decode(data.linkName)

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def get_param_info(self, job: int, name: str) -> ParamInfo:
        info = DSPARAMINFO()
        self._check(
            "DSGetParamInfo",
            self.lib.DSGetParamInfo(job, self._encode(name), ctypes.byref(info)),
        )
        is_list = info.paramType == ParamType.LIST
        return ParamInfo(
            param_type=info.paramType,
            help_text=self._decode(info.helpText),
            prompt=self._decode(info.paramPrompt),
            prompt_at_run=bool(info.promptAtRun),
            default_value=self._param_value(info.defaultValue),
            design_default_value=self._param_value(info.desDefaultValue),
            list_values=tuple(self._strings(info.listValues)) if is_list else (),
            design_list_values=tuple(self._strings(info.desListValues)) if is_list else (),
        )

    def set_param(self, job: int, name: str, value: ParamValue) -> None:
        param = DSPARAM()
        param.paramType = int(value.param_type)
        if isinstance(value, IntegerValue):
            param.paramValue.pInt = value.value
        elif isinstance(value, FloatValue):
            param.paramValue.pFloat = value.value
        else:
            # The encoded buffer must outlive the call below.
            payload = self._encode(value.value)
            setattr(param.paramValue, _TEXT_FIELDS[value.param_type], payload)
        self._check(
            "DSSetParam",
            self.lib.DSSetParam(job, self._encode(name), ctypes.byref(param)),
        )

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    def log_event(self, job: int, log_type: LogType, message: str) -> None:
        self._check(
            "DSLogEvent",
            self.lib.DSLogEvent(job, int(log_type), None, self._encode(message)),
        )

    def find_first_log_entry(self, job: int, log_filter: LogFilter) -> LogEvent:
        event = DSLOGEVENT()
        start = int(log_filter.start_time.timestamp()) if log_filter.start_time else 0
        end = int(log_filter.end_time.timestamp()) if log_filter.end_time else 0
        self._check(
            "DSFindFirstLogEntry",
            self.lib.DSFindFirstLogEntry(
                job,
                int(log_filter.log_type),
                start,
                end,
                log_filter.max_count,
                ctypes.byref(event),
            ),
        )
        return self._log_event(event)

    def find_next_log_entry(self, job: int) -> LogEvent:
        event = DSLOGEVENT()
        self._check("DSFindNextLogEntry", self.lib.DSFindNextLogEntry(job, ctypes.byref(event)))
        return self._log_event(event)

    def get_log_entry(self, job: int, event_id: int) -> LogDetail:
        detail = DSLOGDETAIL()
        self._check(
            "DSGetLogEntry",
            self.lib.DSGetLogEntry(job, event_id, ctypes.byref(detail)),
        )
        return self._log_detail(detail)

    def get_newest_log_id(self, job: int, log_type: LogType) -> int:
        event_id = self.lib.DSGetNewestLogId(job, int(log_type))
        if event_id < 0:
            raise self._last_error("DSGetNewestLogId")
        return event_id
