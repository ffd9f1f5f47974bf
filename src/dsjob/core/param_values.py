"""Typed job-parameter values.

A parameter value is a sum type with one variant per
:class:`~dsjob.core.models.ParamType`.  Every variant carries its type
code as a class attribute, so consumers dispatch on the variant class
(or on ``param_type``) and never guess which payload is present.

Values are only built through :func:`make_param_value`, which applies
the marshalling rules for operator-supplied text:

* INTEGER and FLOAT are parsed leniently; unparseable text becomes
  ``0`` / ``0.0`` rather than an error.
* Every other declared type keeps the text verbatim.
* A declared type this client does not know is treated as STRING.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from dsjob.core.models import ParamType
from dsjob.utils import lenient_float, lenient_int


@dataclass(frozen=True, slots=True)
class StringValue:
    param_type: ClassVar[ParamType] = ParamType.STRING
    value: str


@dataclass(frozen=True, slots=True)
class EncryptedValue:
    param_type: ClassVar[ParamType] = ParamType.ENCRYPTED
    value: str

    def __repr__(self) -> str:
        return "EncryptedValue(value='***')"


@dataclass(frozen=True, slots=True)
class IntegerValue:
    param_type: ClassVar[ParamType] = ParamType.INTEGER
    value: int


@dataclass(frozen=True, slots=True)
class FloatValue:
    param_type: ClassVar[ParamType] = ParamType.FLOAT
    value: float


@dataclass(frozen=True, slots=True)
class PathnameValue:
    param_type: ClassVar[ParamType] = ParamType.PATHNAME
    value: str


@dataclass(frozen=True, slots=True)
class ListValue:
    param_type: ClassVar[ParamType] = ParamType.LIST
    value: str


@dataclass(frozen=True, slots=True)
class DateValue:
    param_type: ClassVar[ParamType] = ParamType.DATE
    value: str


@dataclass(frozen=True, slots=True)
class TimeValue:
    param_type: ClassVar[ParamType] = ParamType.TIME
    value: str


ParamValue = Union[
    StringValue,
    EncryptedValue,
    IntegerValue,
    FloatValue,
    PathnameValue,
    ListValue,
    DateValue,
    TimeValue,
]

_VALUE_CLASSES: dict[int, type[ParamValue]] = {
    cls.param_type: cls
    for cls in (
        StringValue,
        EncryptedValue,
        IntegerValue,
        FloatValue,
        PathnameValue,
        ListValue,
        DateValue,
        TimeValue,
    )
}


def value_class_for(param_type: int) -> type[ParamValue]:
    """Return the variant class for *param_type*, STRING when unknown."""
    return _VALUE_CLASSES.get(param_type, StringValue)


def make_param_value(param_type: int, text: str) -> ParamValue:
    """Construct the typed value for *text* under the declared *param_type*."""
    value_class = value_class_for(param_type)
    if value_class is IntegerValue:
        return IntegerValue(lenient_int(text))
    if value_class is FloatValue:
        return FloatValue(lenient_float(text))
    return value_class(text)


def split_assignment(text: str) -> tuple[str, str]:
    """Split ``name=value`` at the first ``=``.

    Text without ``=`` yields an empty value.  Names are not validated.
    """
    name, _, value = text.partition("=")
    return name, value
