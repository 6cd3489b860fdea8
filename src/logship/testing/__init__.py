"""
Testing utilities for code that ships logs through logship.

``FakeLogService`` replaces the remote service in unit tests and
``FakeClock`` lets rate-limiter waits run without real delays.

Pytest fixtures live in ``logship.testing.fixtures``; enable them with
``pytest_plugins = ("logship.testing.fixtures",)``.

Example:
    from logship import CloudWatchLogsHandler
    from logship.testing import FakeLogService

    def test_ships_on_close():
        service = FakeLogService()
        handler = CloudWatchLogsHandler(service, "/app", "web")
        ...
"""

from .fakes import FakeClock, FakeLogService, PutCall

__all__ = [
    "FakeClock",
    "FakeLogService",
    "PutCall",
]
