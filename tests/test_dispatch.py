"""Tests for the request dispatcher."""

import json

import pytest

from cwlogs.dispatch import Dispatcher, ResponseEnvelope
from cwlogs.errors import BackendError, ErrorKind, InvalidArguments, UnknownOperation

VALID_ARGS = {
    "list_log_groups": {},
    "list_log_streams": {"logGroupName": "/aws/lambda/app"},
    "get_log_events": {"logGroupName": "/aws/lambda/app", "logStreamName": "2025/01/01/[$LATEST]abc"},
}

REQUIRED = [
    ("list_log_streams", "logGroupName"),
    ("get_log_events", "logGroupName"),
    ("get_log_events", "logStreamName"),
]


class TestValidation:
    @pytest.mark.parametrize("name", sorted(VALID_ARGS))
    def test_valid_arguments_dispatch(self, backend, name):
        envelope = Dispatcher(backend).dispatch(name, VALID_ARGS[name])
        assert isinstance(envelope, ResponseEnvelope)
        assert len(backend.calls) == 1

    @pytest.mark.parametrize("name,field", REQUIRED)
    def test_missing_required_field_never_reaches_backend(self, backend, name, field):
        args = dict(VALID_ARGS[name])
        del args[field]
        with pytest.raises(InvalidArguments) as excinfo:
            Dispatcher(backend).dispatch(name, args)
        assert field in excinfo.value.fields
        assert field in excinfo.value.message
        assert backend.calls == []

    def test_get_log_events_names_both_missing_fields(self, backend):
        with pytest.raises(InvalidArguments) as excinfo:
            Dispatcher(backend).dispatch("get_log_events", {})
        assert excinfo.value.fields == ["logGroupName", "logStreamName"]
        assert excinfo.value.message == "logGroupName and logStreamName are required"

    @pytest.mark.parametrize("limit", [0, 51])
    def test_list_log_streams_limit_out_of_bounds(self, backend, limit):
        args = dict(VALID_ARGS["list_log_streams"], limit=limit)
        with pytest.raises(InvalidArguments):
            Dispatcher(backend).dispatch("list_log_streams", args)
        assert backend.calls == []

    def test_list_log_streams_limit_upper_bound_accepted(self, backend):
        args = dict(VALID_ARGS["list_log_streams"], limit=50)
        Dispatcher(backend).dispatch("list_log_streams", args)
        assert backend.calls[0][1]["limit"] == 50

    def test_get_log_events_limit_allows_100(self, backend):
        args = dict(VALID_ARGS["get_log_events"], limit=100)
        Dispatcher(backend).dispatch("get_log_events", args)
        with pytest.raises(InvalidArguments):
            Dispatcher(backend).dispatch("get_log_events", dict(args, limit=101))

    def test_start_after_end_rejected(self, backend):
        args = dict(VALID_ARGS["get_log_events"], startTime=2000, endTime=1000)
        with pytest.raises(InvalidArguments) as excinfo:
            Dispatcher(backend).dispatch("get_log_events", args)
        assert excinfo.value.fields == ["startTime", "endTime"]
        assert backend.calls == []

    def test_wrong_type_rejected(self, backend):
        with pytest.raises(InvalidArguments, match="limit must be a number"):
            Dispatcher(backend).dispatch("list_log_groups", {"limit": "25"})
        assert backend.calls == []


class TestBackendParameters:
    def test_list_log_groups_default_limit(self, backend):
        Dispatcher(backend).dispatch("list_log_groups", {})
        assert backend.calls == [("describe_log_groups", {"limit": 10})]

    def test_list_log_groups_explicit_limit_and_prefix(self, backend):
        Dispatcher(backend).dispatch("list_log_groups", {"limit": 25, "prefix": "/aws/"})
        assert backend.calls == [
            ("describe_log_groups", {"limit": 25, "logGroupNamePrefix": "/aws/"}),
        ]

    def test_list_log_streams_orders_by_last_event(self, backend):
        Dispatcher(backend).dispatch("list_log_streams", {"logGroupName": "g"})
        assert backend.calls == [
            (
                "describe_log_streams",
                {"logGroupName": "g", "limit": 10, "orderBy": "LastEventTime", "descending": True},
            ),
        ]

    def test_get_log_events_time_range(self, backend):
        args = dict(VALID_ARGS["get_log_events"], startTime=1000, endTime=1000, limit=3)
        Dispatcher(backend).dispatch("get_log_events", args)
        method, params = backend.calls[0]
        assert method == "get_log_events"
        assert params == {
            "logGroupName": "/aws/lambda/app",
            "logStreamName": "2025/01/01/[$LATEST]abc",
            "limit": 3,
            "startTime": 1000,
            "endTime": 1000,
        }

    def test_get_log_events_omits_absent_times(self, backend):
        Dispatcher(backend).dispatch("get_log_events", VALID_ARGS["get_log_events"])
        params = backend.calls[0][1]
        assert "startTime" not in params
        assert "endTime" not in params

    def test_extra_fields_ignored(self, backend):
        Dispatcher(backend).dispatch("list_log_groups", {"limit": 5, "region": "eu-west-1"})
        assert backend.calls == [("describe_log_groups", {"limit": 5})]


class TestEnvelopes:
    def test_records_serialized_as_formatted_json(self, make_backend):
        groups = [
            {"logGroupName": "/aws/lambda/a", "arn": "arn:aws:logs:us-east-1:1:log-group:/aws/lambda/a", "storedBytes": 12},
            {"logGroupName": "/aws/lambda/b", "storedBytes": 0},
        ]
        backend = make_backend(responses={"describe_log_groups": {"logGroups": groups}})
        envelope = Dispatcher(backend).dispatch("list_log_groups", {})
        assert envelope.to_dict() == {
            "content": [{"type": "text", "text": json.dumps(groups, indent=2)}],
        }
        assert json.loads(envelope.text) == groups

    def test_empty_events_is_success(self, make_backend):
        backend = make_backend(responses={"get_log_events": {"events": []}})
        envelope = Dispatcher(backend).dispatch("get_log_events", VALID_ARGS["get_log_events"])
        assert json.loads(envelope.text) == []

    def test_missing_result_key_is_empty_sequence(self, backend):
        envelope = Dispatcher(backend).dispatch("list_log_streams", VALID_ARGS["list_log_streams"])
        assert envelope.text == "[]"


class TestErrors:
    def test_unknown_operation(self, backend):
        with pytest.raises(UnknownOperation) as excinfo:
            Dispatcher(backend).dispatch("delete_log_group", {"logGroupName": "g"})
        assert excinfo.value.to_envelope() == {
            "code": "UnknownOperation",
            "message": "Unknown tool: delete_log_group",
        }
        assert backend.calls == []

    def test_backend_error_relays_message(self, failing_backend):
        with pytest.raises(BackendError) as excinfo:
            Dispatcher(failing_backend).dispatch("list_log_groups", {})
        error = excinfo.value
        assert "ThrottlingException" in error.message
        assert error.message == "Failed to list log groups: ThrottlingException: Rate exceeded"
        assert error.backend_message == "ThrottlingException: Rate exceeded"
        assert error.backend_code == "ThrottlingException"
        assert error.kind == ErrorKind.BACKEND_ERROR
        assert len(failing_backend.calls) == 1

    @pytest.mark.parametrize("name", sorted(VALID_ARGS))
    def test_backend_called_once_without_retry(self, failing_backend, name):
        with pytest.raises(BackendError):
            Dispatcher(failing_backend).dispatch(name, VALID_ARGS[name])
        assert len(failing_backend.calls) == 1

    @pytest.mark.parametrize("error", [RuntimeError("ThrottlingException"), TimeoutError("read timed out")])
    def test_any_backend_exception_becomes_backend_error(self, make_backend, error):
        backend = make_backend(error=error)
        with pytest.raises(BackendError) as excinfo:
            Dispatcher(backend).dispatch("list_log_groups", {})
        assert excinfo.value.backend_message == str(error)
        assert excinfo.value.message == f"Failed to list log groups: {error}"
        assert excinfo.value.backend_code is None
        assert excinfo.value.to_envelope()["code"] == "BackendError"
        assert len(backend.calls) == 1

    @pytest.mark.parametrize("limit", [float("nan"), float("inf")])
    def test_non_finite_limit_rejected(self, backend, limit):
        args = dict(VALID_ARGS["list_log_streams"], limit=limit)
        with pytest.raises(InvalidArguments) as excinfo:
            Dispatcher(backend).dispatch("list_log_streams", args)
        assert excinfo.value.fields == ["limit"]
        assert backend.calls == []
