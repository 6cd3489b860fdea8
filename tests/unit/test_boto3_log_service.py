from __future__ import annotations

from typing import Any
from unittest.mock import patch

import boto3
import pytest
from botocore.stub import Stubber

from logship.core.client import (
    Boto3LogService,
    LogServiceClient,
    StreamDescription,
    as_log_service,
)
from logship.core.errors import CursorInvalid, ServiceError
from logship.core.events import LogEvent
from logship.testing import FakeLogService


@pytest.fixture
def logs_client() -> Any:
    return boto3.client(
        "logs",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(logs_client: Any):
    with Stubber(logs_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture
def service(logs_client: Any) -> Boto3LogService:
    return Boto3LogService(logs_client)


class TestPutEvents:
    def test_sends_wire_events_without_cursor(self, stubber, service) -> None:
        stubber.add_response(
            "put_log_events",
            {"nextSequenceToken": "t2"},
            {
                "logGroupName": "/app",
                "logStreamName": "web",
                "logEvents": [{"timestamp": 1000, "message": "hello"}],
            },
        )

        token = service.put_events("/app", "web", [LogEvent(b"hello", 1000)])

        assert token == "t2"

    def test_includes_cursor_when_known(self, stubber, service) -> None:
        stubber.add_response(
            "put_log_events",
            {"nextSequenceToken": "t3"},
            {
                "logGroupName": "/app",
                "logStreamName": "web",
                "logEvents": [{"timestamp": 1, "message": "x"}],
                "sequenceToken": "t2",
            },
        )

        assert service.put_events("/app", "web", [LogEvent(b"x", 1)], "t2") == "t3"

    def test_invalid_sequence_token_maps_to_cursor_invalid(self, stubber, service) -> None:
        stubber.add_client_error(
            "put_log_events",
            service_error_code="InvalidSequenceTokenException",
            service_message="The given sequenceToken is invalid",
            modeled_fields={"expectedSequenceToken": "t9"},
        )

        with pytest.raises(CursorInvalid) as exc_info:
            service.put_events("/app", "web", [LogEvent(b"x", 1)], "t1")

        assert exc_info.value.expected_token == "t9"
        assert exc_info.value.code == "InvalidSequenceTokenException"
        assert exc_info.value.operation == "PutLogEvents"

    def test_data_already_accepted_counts_as_delivered(self, stubber, service) -> None:
        stubber.add_client_error(
            "put_log_events",
            service_error_code="DataAlreadyAcceptedException",
            service_message="already accepted",
            modeled_fields={"expectedSequenceToken": "t5"},
        )

        assert service.put_events("/app", "web", [LogEvent(b"x", 1)], "t4") == "t5"

    def test_other_errors_map_to_service_error(self, stubber, service) -> None:
        stubber.add_client_error(
            "put_log_events",
            service_error_code="ServiceUnavailableException",
            service_message="try later",
            http_status_code=503,
        )

        with pytest.raises(ServiceError) as exc_info:
            service.put_events("/app", "web", [LogEvent(b"x", 1)])

        assert not isinstance(exc_info.value, CursorInvalid)
        assert exc_info.value.code == "ServiceUnavailableException"
        assert "try later" in str(exc_info.value)

    def test_rejected_events_are_reported(self, stubber, service) -> None:
        stubber.add_response(
            "put_log_events",
            {
                "nextSequenceToken": "t2",
                "rejectedLogEventsInfo": {"tooOldLogEventEndIndex": 0},
            },
        )

        with patch("logship.core.diagnostics.warn") as warn_mock:
            service.put_events("/app", "web", [LogEvent(b"old", 1)])

        warn_mock.assert_called_once()
        assert warn_mock.call_args.kwargs["tooOldLogEventEndIndex"] == 0


class TestDescribeAndCreate:
    def test_describe_groups_follows_pagination(self, stubber, service) -> None:
        stubber.add_response(
            "describe_log_groups",
            {"logGroups": [{"logGroupName": "/app"}], "nextToken": "n1"},
            {"logGroupNamePrefix": "/app"},
        )
        stubber.add_response(
            "describe_log_groups",
            {"logGroups": [{"logGroupName": "/app-two"}]},
            {"logGroupNamePrefix": "/app", "nextToken": "n1"},
        )

        assert service.describe_groups("/app") == ["/app", "/app-two"]

    def test_describe_streams_reads_tokens(self, stubber, service) -> None:
        stubber.add_response(
            "describe_log_streams",
            {
                "logStreams": [
                    {"logStreamName": "web", "uploadSequenceToken": "t1"},
                    {"logStreamName": "web-2"},
                ]
            },
            {"logGroupName": "/app", "logStreamNamePrefix": "web"},
        )

        assert service.describe_streams("/app", "web") == [
            StreamDescription("web", "t1"),
            StreamDescription("web-2", None),
        ]

    def test_create_group_with_tags(self, stubber, service) -> None:
        stubber.add_response(
            "create_log_group", {}, {"logGroupName": "/app", "tags": {"team": "core"}}
        )

        service.create_group("/app", {"team": "core"})

    def test_create_group_without_tags(self, stubber, service) -> None:
        stubber.add_response("create_log_group", {}, {"logGroupName": "/app"})

        service.create_group("/app")

    def test_put_retention_policy(self, stubber, service) -> None:
        stubber.add_response(
            "put_retention_policy",
            {},
            {"logGroupName": "/app", "retentionInDays": 14},
        )

        service.put_retention_policy("/app", 14)

    def test_create_stream(self, stubber, service) -> None:
        stubber.add_response(
            "create_log_stream", {}, {"logGroupName": "/app", "logStreamName": "web"}
        )

        service.create_stream("/app", "web")

    def test_create_failure_maps_to_service_error(self, stubber, service) -> None:
        stubber.add_client_error(
            "create_log_stream",
            service_error_code="ResourceNotFoundException",
            service_message="group missing",
        )

        with pytest.raises(ServiceError) as exc_info:
            service.create_stream("/missing", "web")

        assert exc_info.value.operation == "CreateLogStream"
        assert exc_info.value.code == "ResourceNotFoundException"


class TestAsLogService:
    def test_wraps_raw_boto3_client(self, logs_client) -> None:
        wrapped = as_log_service(logs_client)

        assert isinstance(wrapped, Boto3LogService)
        assert wrapped.client is logs_client

    def test_passes_capability_objects_through(self) -> None:
        fake = FakeLogService()

        assert as_log_service(fake) is fake
        assert isinstance(fake, LogServiceClient)

    def test_rejects_unrelated_objects(self) -> None:
        with pytest.raises(TypeError):
            as_log_service(object())
