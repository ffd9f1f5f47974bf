"""ctypes declarations for the engine's native client API.

Layouts follow the C header shipped with the client library.  Only the
union members this client reads are declared; each union is padded to
the size of its largest C member.
"""

from __future__ import annotations

import ctypes

c_time_t = ctypes.c_int64


class DSPARAMVALUE(ctypes.Union):
    _fields_ = [
        ("pString", ctypes.c_char_p),
        ("pEncrypt", ctypes.c_char_p),
        ("pInt", ctypes.c_int),
        ("pFloat", ctypes.c_float),
        ("pPath", ctypes.c_char_p),
        ("pListValue", ctypes.c_char_p),
        ("pDate", ctypes.c_char_p),
        ("pTime", ctypes.c_char_p),
    ]


class DSPARAM(ctypes.Structure):
    _fields_ = [
        ("paramType", ctypes.c_int),
        ("paramValue", DSPARAMVALUE),
    ]


class DSPARAMINFO(ctypes.Structure):
    _fields_ = [
        ("defaultValue", DSPARAM),
        ("helpText", ctypes.c_char_p),
        ("paramPrompt", ctypes.c_char_p),
        ("paramType", ctypes.c_int),
        ("desDefaultValue", DSPARAM),
        # NUL-separated string lists, read with read_string_list().
        ("listValues", ctypes.c_void_p),
        ("desListValues", ctypes.c_void_p),
        ("promptAtRun", ctypes.c_int),
    ]


class DSLOGEVENT(ctypes.Structure):
    _fields_ = [
        ("eventId", ctypes.c_int),
        ("timestamp", c_time_t),
        ("type", ctypes.c_int),
        ("message", ctypes.c_char_p),
    ]


class DSLOGDETAIL(ctypes.Structure):
    _fields_ = [
        ("eventId", ctypes.c_int),
        ("timestamp", c_time_t),
        ("type", ctypes.c_int),
        ("reserve", ctypes.c_char_p),
        ("fullMessage", ctypes.c_void_p),
    ]


class _ProjectInfoUnion(ctypes.Union):
    _fields_ = [
        ("jobList", ctypes.c_void_p),
    ]


class DSPROJECTINFO(ctypes.Structure):
    _fields_ = [
        ("infoType", ctypes.c_int),
        ("info", _ProjectInfoUnion),
    ]


class _JobInfoUnion(ctypes.Union):
    _fields_ = [
        ("jobStatus", ctypes.c_int),
        ("jobController", ctypes.c_char_p),
        ("jobStartTime", c_time_t),
        ("jobWaveNumber", ctypes.c_int),
        ("userStatus", ctypes.c_char_p),
        ("paramList", ctypes.c_void_p),
        ("stageList", ctypes.c_void_p),
        ("jobName", ctypes.c_char_p),
    ]


class DSJOBINFO(ctypes.Structure):
    _fields_ = [
        ("infoType", ctypes.c_int),
        ("info", _JobInfoUnion),
    ]


class _StageInfoUnion(ctypes.Union):
    _fields_ = [
        ("lastError", DSLOGDETAIL),
        ("typeName", ctypes.c_char_p),
        ("inRowNum", ctypes.c_int),
        ("linkList", ctypes.c_void_p),
        ("stageName", ctypes.c_char_p),
    ]


class DSSTAGEINFO(ctypes.Structure):
    _fields_ = [
        ("infoType", ctypes.c_int),
        ("info", _StageInfoUnion),
    ]


class _LinkInfoUnion(ctypes.Union):
    _fields_ = [
        ("lastError", DSLOGDETAIL),
        ("rowCount", ctypes.c_int),
        ("linkName", ctypes.c_char_p),
    ]


class DSLINKINFO(ctypes.Structure):
    _fields_ = [
        ("infoType", ctypes.c_int),
        ("info", _LinkInfoUnion),
    ]


def read_string_list(address: int | None, encoding: str) -> list[str]:
    """Decode a C string list: NUL-separated entries ending in an empty one."""
    items: list[str] = []
    if not address:
        return items
    while True:
        raw = ctypes.string_at(address)
        if not raw:
            return items
        items.append(raw.decode(encoding, errors="replace"))
        address += len(raw) + 1


def declare_prototypes(lib: ctypes.CDLL) -> None:
    """Attach argument and return types to the library's entry points."""
    handle = ctypes.c_void_p
    text = ctypes.c_char_p
    status = ctypes.c_int

    prototypes: dict[str, tuple[object, list[object]]] = {
        "DSSetServerParams": (None, [text, text, text, text]),
        "DSGetProjectList": (ctypes.c_void_p, []),
        "DSGetLastError": (status, []),
        "DSGetLastErrorMsg": (ctypes.c_void_p, [handle]),
        "DSOpenProject": (handle, [text]),
        "DSCloseProject": (status, [handle]),
        "DSOpenJob": (handle, [handle, text]),
        "DSCloseJob": (status, [handle]),
        "DSLockJob": (status, [handle]),
        "DSUnlockJob": (status, [handle]),
        "DSRunJob": (status, [handle, ctypes.c_int]),
        "DSStopJob": (status, [handle]),
        "DSWaitForJob": (status, [handle]),
        "DSSetJobLimit": (status, [handle, ctypes.c_int, ctypes.c_int]),
        "DSGetProjectInfo": (status, [handle, ctypes.c_int, ctypes.POINTER(DSPROJECTINFO)]),
        "DSGetJobInfo": (status, [handle, ctypes.c_int, ctypes.POINTER(DSJOBINFO)]),
        "DSGetStageInfo": (status, [handle, text, ctypes.c_int, ctypes.POINTER(DSSTAGEINFO)]),
        "DSGetLinkInfo": (
            status,
            [handle, text, text, ctypes.c_int, ctypes.POINTER(DSLINKINFO)],
        ),
        "DSGetParamInfo": (status, [handle, text, ctypes.POINTER(DSPARAMINFO)]),
        "DSSetParam": (status, [handle, text, ctypes.POINTER(DSPARAM)]),
        "DSLogEvent": (status, [handle, ctypes.c_int, text, text]),
        "DSFindFirstLogEntry": (
            status,
            [handle, ctypes.c_int, c_time_t, c_time_t, ctypes.c_int, ctypes.POINTER(DSLOGEVENT)],
        ),
        "DSFindNextLogEntry": (status, [handle, ctypes.POINTER(DSLOGEVENT)]),
        "DSGetLogEntry": (status, [handle, ctypes.c_int, ctypes.POINTER(DSLOGDETAIL)]),
        "DSGetNewestLogId": (ctypes.c_int, [handle, ctypes.c_int]),
    }
    for name, (restype, argtypes) in prototypes.items():
        function = getattr(lib, name)
        function.restype = restype
        function.argtypes = argtypes
