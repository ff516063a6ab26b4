"""Tests for RunMetric, RunParam and RunData parsing."""

import math

import pytest

from tracking.runs import (
    FieldParseError,
    MissingFieldError,
    RunData,
    RunMetric,
    RunParam,
)


class TestRunMetric:
    """RunMetric.from_dict."""

    def test_string_step_and_timestamp_coerced(self):
        metric = RunMetric.from_dict(
            {"key": "acc", "value": 0.9, "step": "3", "timestamp": "4000"}
        )

        assert metric == RunMetric(key="acc", value=0.9, step=3, timestamp=4000)
        assert isinstance(metric.step, int)
        assert isinstance(metric.timestamp, int)

    def test_integer_value_becomes_float(self):
        metric = RunMetric.from_dict({"key": "epoch", "value": 2, "step": 0, "timestamp": 1})
        assert metric.value == 2.0
        assert isinstance(metric.value, float)

    def test_nan_value_string(self):
        metric = RunMetric.from_dict({"key": "loss", "value": "NaN", "step": 0, "timestamp": 1})
        assert math.isnan(metric.value)

    def test_infinity_value_string(self):
        metric = RunMetric.from_dict(
            {"key": "loss", "value": "-Infinity", "step": 0, "timestamp": 1}
        )
        assert metric.value == -math.inf

    @pytest.mark.parametrize("missing", ["key", "value", "step", "timestamp"])
    def test_missing_field(self, missing):
        payload = {"key": "acc", "value": 0.9, "step": 3, "timestamp": 4000}
        del payload[missing]

        with pytest.raises(MissingFieldError) as exc_info:
            RunMetric.from_dict(payload)
        assert exc_info.value.field == missing
        assert exc_info.value.record == "metric"

    def test_missing_field_is_key_error(self):
        with pytest.raises(KeyError):
            RunMetric.from_dict({"key": "acc"})

    def test_unparseable_step(self):
        with pytest.raises(FieldParseError, match="step"):
            RunMetric.from_dict({"key": "acc", "value": 0.9, "step": "three", "timestamp": 1})

    @pytest.mark.parametrize("key", [None, 7, ("loss",)])
    def test_non_string_key_rejected(self, key):
        with pytest.raises(FieldParseError) as exc_info:
            RunMetric.from_dict({"key": key, "value": 1, "step": 1, "timestamp": 1})
        assert exc_info.value.field == "key"

    def test_unparseable_value(self):
        with pytest.raises(FieldParseError, match="value"):
            RunMetric.from_dict({"key": "acc", "value": "high", "step": 1, "timestamp": 1})


class TestRunParam:
    """RunParam construction."""

    def test_from_dict(self):
        assert RunParam.from_dict({"key": "lr", "value": "0.1"}) == RunParam("lr", "0.1")

    def test_from_key_value_pair(self):
        param = RunParam("batch_size", "16")
        assert param.key == "batch_size"
        assert param.value == "16"

    @pytest.mark.parametrize("missing", ["key", "value"])
    def test_missing_field(self, missing):
        payload = {"key": "lr", "value": "0.1"}
        del payload[missing]

        with pytest.raises(MissingFieldError, match=missing):
            RunParam.from_dict(payload)

    @pytest.mark.parametrize("value", [None, 3, 0.1, True, ["a"]])
    def test_non_string_value_rejected(self, value):
        with pytest.raises(FieldParseError) as exc_info:
            RunParam.from_dict({"key": "epochs", "value": value})
        assert exc_info.value.field == "value"
        assert exc_info.value.expected == "string"

    def test_non_string_key_rejected(self):
        with pytest.raises(FieldParseError, match="key"):
            RunParam.from_dict({"key": None, "value": "3"})

    def test_direct_construction_validated(self):
        with pytest.raises(FieldParseError):
            RunParam("epochs", 3)


class TestRunData:
    """RunData.from_dict aggregation."""

    def test_full_payload(self, run_data_dict):
        data = RunData.from_dict(run_data_dict)

        assert set(data.metrics) == {"loss", "f1"}
        assert data.metrics["f1"].step == 2
        assert set(data.params) == {"learning_rate", "batch_size"}
        assert data.params["batch_size"].value == "16"
        assert data.tags is run_data_dict["tags"]

    def test_duplicate_metric_last_wins(self):
        data = RunData.from_dict({
            "metrics": [
                {"key": "loss", "value": 0.5, "step": 1, "timestamp": 1000},
                {"key": "loss", "value": 0.4, "step": 2, "timestamp": 2000},
            ]
        })

        assert len(data.metrics) == 1
        assert data.metrics["loss"].value == 0.4
        assert data.metrics["loss"].step == 2

    def test_duplicate_param_last_wins(self):
        data = RunData.from_dict({
            "params": [
                {"key": "lr", "value": "0.1"},
                {"key": "lr", "value": "0.01"},
            ]
        })
        assert data.params == {"lr": RunParam("lr", "0.01")}

    def test_missing_metrics_is_empty_dict(self):
        data = RunData.from_dict({})
        assert data.metrics == {}

    def test_missing_params_is_none(self):
        assert RunData.from_dict({"metrics": []}).params is None

    def test_empty_params_is_empty_dict(self):
        params = RunData.from_dict({"params": []}).params
        assert params is not None
        assert params == {}

    def test_missing_tags_is_none(self):
        assert RunData.from_dict({}).tags is None

    def test_tags_passed_through_untouched(self):
        tags = {"anything": ["goes", 1, None]}
        assert RunData.from_dict({"tags": tags}).tags is tags

    def test_malformed_metric_propagates(self):
        with pytest.raises(MissingFieldError):
            RunData.from_dict({"metrics": [{"key": "loss", "value": 0.1, "step": 1}]})

    def test_metric_without_string_key_not_indexed(self):
        with pytest.raises(FieldParseError):
            RunData.from_dict(
                {"metrics": [{"key": None, "value": 1, "step": 1, "timestamp": 1}]}
            )

    def test_param_with_null_value_rejected(self):
        with pytest.raises(FieldParseError):
            RunData.from_dict({"params": [{"key": "lr", "value": None}]})

    def test_get_params(self, run_data_dict):
        data = RunData.from_dict(run_data_dict)
        assert data.get_params() is data.params
