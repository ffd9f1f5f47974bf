"""Tests for ParameterService (core/parameter_service.py).

The declared type is always fetched before a value is built, and a
failed type query never leads to a submission.
"""

from __future__ import annotations

import pytest

from dsjob import engine_status
from dsjob.core.models import ParamInfo
from dsjob.core.param_values import FloatValue, IntegerValue, StringValue
from dsjob.core.parameter_service import ParameterService
from dsjob.exceptions import EngineError

from conftest import FakeEngine


class TestSetParameter:
    def test_string_parameter(self, engine: FakeEngine) -> None:
        value = ParameterService(engine).set_parameter("job:X", "Region=EMEA")
        assert value == StringValue("EMEA")
        assert engine.ops() == ["get_param_info", "set_param"]
        assert engine.param_values["Region"] == StringValue("EMEA")

    def test_integer_parameter_is_typed(self, engine: FakeEngine) -> None:
        ParameterService(engine).set_parameter("job:X", "BatchSize=500")
        assert engine.param_values["BatchSize"] == IntegerValue(500)

    def test_float_parameter_is_typed(self, engine: FakeEngine) -> None:
        ParameterService(engine).set_parameter("job:X", "Ratio=0.5")
        assert engine.param_values["Ratio"] == FloatValue(0.5)

    def test_unknown_declared_type_is_sent_as_string(self, engine: FakeEngine) -> None:
        engine.params["Odd"] = ParamInfo(param_type=42)
        ParameterService(engine).set_parameter("job:X", "Odd=7")
        assert engine.param_values["Odd"] == StringValue("7")

    def test_type_query_failure_never_submits(self, engine: FakeEngine) -> None:
        with pytest.raises(EngineError, match="getting information for parameter 'Nope'") as exc:
            ParameterService(engine).set_parameter("job:X", "Nope=1")
        assert exc.value.status == engine_status.BAD_PARAM
        assert engine.count("set_param") == 0

    def test_rejected_value_is_relabelled(self, engine: FakeEngine) -> None:
        engine.failures["set_param"] = engine_status.BAD_VALUE
        with pytest.raises(EngineError, match="Error setting value of parameter 'Region'") as exc:
            ParameterService(engine).set_parameter("job:X", "Region=??")
        assert exc.value.status == engine_status.BAD_VALUE


class TestSetParameters:
    def test_stops_at_first_failure(self, engine: FakeEngine) -> None:
        with pytest.raises(EngineError):
            ParameterService(engine).set_parameters(
                "job:X", ["Region=EU", "Nope=1", "BatchSize=3"]
            )
        assert list(engine.param_values) == ["Region"]
