"""Core parameter service — marshals ``name=value`` text into typed values.

The declared type of a parameter is authoritative and always fetched
from the engine before a value is constructed.  This service depends on
an :class:`~dsjob.core.protocols.Engine` injected at construction time.

Guarantees
----------
* No I/O and no console output.
* Only :class:`~dsjob.exceptions.EngineError` escapes, re-labelled with
  which step failed.
* A failed type query never leads to a submission.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from dsjob.core.param_values import ParamValue, make_param_value, split_assignment
from dsjob.core.protocols import Engine, JobHandle
from dsjob.exceptions import EngineError

logger = logging.getLogger(__name__)


class ParameterService:
    """Sets job parameters from operator-supplied assignments.

    Parameters
    ----------
    engine:
        Any object satisfying the :class:`Engine` protocol.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine: Engine = engine

    def set_parameter(self, job: JobHandle, assignment: str) -> ParamValue:
        """Apply one ``name=value`` assignment to *job*.

        Returns
        -------
        ParamValue
            The typed value that the engine accepted.

        Raises
        ------
        EngineError
            When the declared type cannot be fetched, or the engine
            rejects the value.
        """
        name, text = split_assignment(assignment)
        try:
            info = self._engine.get_param_info(job, name)
        except EngineError as exc:
            raise exc.with_message(
                f"Error {exc.status} getting information for parameter '{name}'",
            ) from exc

        value = make_param_value(info.param_type, text)
        logger.debug("Setting parameter %r as %s", name, value.param_type.name)
        try:
            self._engine.set_param(job, name, value)
        except EngineError as exc:
            raise exc.with_message(
                f"Error setting value of parameter '{name}'",
            ) from exc
        return value

    def set_parameters(self, job: JobHandle, assignments: Iterable[str]) -> None:
        """Apply *assignments* in order, stopping at the first failure."""
        for assignment in assignments:
            self.set_parameter(job, assignment)
