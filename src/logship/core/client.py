"""
Remote log-service capability and its boto3 implementation.

The shipping engine only talks to ``LogServiceClient``. ``Boto3LogService``
adapts a boto3 ``logs`` client to it and translates AWS error codes into the
logship error taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence, runtime_checkable

from botocore.exceptions import BotoCoreError, ClientError

from . import diagnostics
from .errors import CursorInvalid, ServiceError
from .events import LogEvent


@dataclass(frozen=True)
class StreamDescription:
    """A remote stream as reported by the service."""

    name: str
    upload_sequence_token: str | None = None


@runtime_checkable
class LogServiceClient(Protocol):
    """Operations the shipping engine needs from the remote log service.

    ``put_events`` raises ``CursorInvalid`` when the sequence token is stale
    and ``ServiceError`` for any other failure; every other method raises
    ``ServiceError`` on failure.
    """

    def put_events(
        self,
        group: str,
        stream: str,
        events: Sequence[LogEvent],
        cursor: str | None = None,
    ) -> str | None:
        """Append ordered events and return the next sequence token."""
        ...

    def describe_groups(self, prefix: str) -> list[str]: ...

    def create_group(self, name: str, tags: Mapping[str, str] | None = None) -> None: ...

    def put_retention_policy(self, group: str, days: int) -> None: ...

    def describe_streams(self, group: str, prefix: str) -> list[StreamDescription]: ...

    def create_stream(self, group: str, name: str) -> None: ...


_INVALID_TOKEN = "InvalidSequenceTokenException"
_ALREADY_ACCEPTED = "DataAlreadyAcceptedException"


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def _expected_token(exc: ClientError) -> str | None:
    token = exc.response.get("expectedSequenceToken")
    if token is None:
        token = exc.response.get("Error", {}).get("expectedSequenceToken")
    return token


def _service_error(exc: Exception, operation: str) -> ServiceError:
    if isinstance(exc, ClientError):
        code = _error_code(exc) or None
        message = exc.response.get("Error", {}).get("Message") or str(exc)
    else:
        code = type(exc).__name__
        message = str(exc)
    return ServiceError(
        f"{operation} failed: {message}",
        code=code,
        operation=operation,
        cause=exc,
    )


class Boto3LogService:
    """``LogServiceClient`` backed by a boto3 CloudWatch Logs client."""

    def __init__(self, client: Any) -> None:
        self._client = client

    @classmethod
    def create(cls, *, region: str | None = None, **client_kwargs: Any) -> "Boto3LogService":
        import boto3

        if region is not None:
            client_kwargs.setdefault("region_name", region)
        return cls(boto3.client("logs", **client_kwargs))

    @property
    def client(self) -> Any:
        return self._client

    def put_events(
        self,
        group: str,
        stream: str,
        events: Sequence[LogEvent],
        cursor: str | None = None,
    ) -> str | None:
        kwargs: dict[str, Any] = {
            "logGroupName": group,
            "logStreamName": stream,
            "logEvents": [event.to_wire() for event in events],
        }
        if cursor:
            kwargs["sequenceToken"] = cursor
        try:
            response = self._client.put_log_events(**kwargs)
        except ClientError as exc:
            code = _error_code(exc)
            if code == _INVALID_TOKEN:
                raise CursorInvalid(
                    expected_token=_expected_token(exc),
                    code=code,
                    operation="PutLogEvents",
                    cause=exc,
                ) from exc
            if code == _ALREADY_ACCEPTED:
                diagnostics.warn(
                    "log-service",
                    "batch already accepted by log service",
                    group=group,
                    stream=stream,
                )
                return _expected_token(exc)
            raise _service_error(exc, "PutLogEvents") from exc
        except BotoCoreError as exc:
            raise _service_error(exc, "PutLogEvents") from exc

        rejected = response.get("rejectedLogEventsInfo")
        if rejected:
            diagnostics.warn(
                "log-service",
                "log service rejected events",
                group=group,
                stream=stream,
                **{str(k): v for k, v in rejected.items()},
            )
        return response.get("nextSequenceToken")

    def describe_groups(self, prefix: str) -> list[str]:
        names: list[str] = []
        try:
            paginator = self._client.get_paginator("describe_log_groups")
            for page in paginator.paginate(logGroupNamePrefix=prefix):
                names.extend(g["logGroupName"] for g in page.get("logGroups", []))
        except (ClientError, BotoCoreError) as exc:
            raise _service_error(exc, "DescribeLogGroups") from exc
        return names

    def create_group(self, name: str, tags: Mapping[str, str] | None = None) -> None:
        kwargs: dict[str, Any] = {"logGroupName": name}
        if tags:
            kwargs["tags"] = dict(tags)
        try:
            self._client.create_log_group(**kwargs)
        except (ClientError, BotoCoreError) as exc:
            raise _service_error(exc, "CreateLogGroup") from exc

    def put_retention_policy(self, group: str, days: int) -> None:
        try:
            self._client.put_retention_policy(
                logGroupName=group, retentionInDays=days
            )
        except (ClientError, BotoCoreError) as exc:
            raise _service_error(exc, "PutRetentionPolicy") from exc

    def describe_streams(self, group: str, prefix: str) -> list[StreamDescription]:
        streams: list[StreamDescription] = []
        try:
            paginator = self._client.get_paginator("describe_log_streams")
            for page in paginator.paginate(
                logGroupName=group, logStreamNamePrefix=prefix
            ):
                for item in page.get("logStreams", []):
                    streams.append(
                        StreamDescription(
                            name=item["logStreamName"],
                            upload_sequence_token=item.get("uploadSequenceToken"),
                        )
                    )
        except (ClientError, BotoCoreError) as exc:
            raise _service_error(exc, "DescribeLogStreams") from exc
        return streams

    def create_stream(self, group: str, name: str) -> None:
        try:
            self._client.create_log_stream(logGroupName=group, logStreamName=name)
        except (ClientError, BotoCoreError) as exc:
            raise _service_error(exc, "CreateLogStream") from exc


def as_log_service(client: Any) -> LogServiceClient:
    """Return ``client`` as a ``LogServiceClient``, wrapping raw boto3 clients."""
    if isinstance(client, LogServiceClient):
        return client
    if hasattr(client, "put_log_events"):
        return Boto3LogService(client)
    raise TypeError(
        f"Expected a LogServiceClient or boto3 logs client, got {type(client).__name__}"
    )


__all__ = [
    "Boto3LogService",
    "LogServiceClient",
    "StreamDescription",
    "as_log_service",
]
