"""Tests for log configuration and request/job context binding."""

import logging

import pytest
import structlog

from brimis.logging_config import (
    SERVICE_NAME,
    _add_service,
    bind_job_context,
    bind_request_context,
    clear_request_context,
    configure_logging,
)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    clear_request_context()


def test_bind_job_context_adds_job_id():
    clear_request_context()
    bind_request_context("trc_abc123")
    bind_job_context("job_0001")
    assert structlog.contextvars.get_contextvars() == {
        "trace_id": "trc_abc123",
        "job_id": "job_0001",
    }
    clear_request_context()
    assert structlog.contextvars.get_contextvars() == {}


def test_service_name_does_not_override_explicit_value():
    assert _add_service(None, "info", {})["service"] == SERVICE_NAME
    assert _add_service(None, "info", {"service": "worker"})["service"] == "worker"


def test_configure_logging_installs_single_handler(restore_logging):
    configure_logging("debug", json_output=True)
    configure_logging("debug", json_output=True)
    assert len(restore_logging.handlers) == 1
    assert restore_logging.level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_unknown_level_falls_back_to_info(restore_logging):
    configure_logging("chatty")
    assert restore_logging.level == logging.INFO


@pytest.mark.asyncio
async def test_job_routes_bind_job_id(client, monkeypatch):
    bound = []
    monkeypatch.setattr("brimis.dependencies.bind_job_context", bound.append)
    await client.get("/api/v1/jobs/job_missing")
    assert bound == ["job_missing"]
