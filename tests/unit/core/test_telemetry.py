# Copyright (c) HotelLux contributors.
# Licensed under the MIT license.

"""Tests for telemetry infrastructure."""

import logging
from unittest.mock import MagicMock

import pytest

from HotelLux.Admin.core.telemetry import (
    NoOpTelemetryManager,
    RequestContext,
    ResponseContext,
    TelemetryConfig,
    TelemetryManager,
    create_telemetry_manager,
)


class TestTelemetryConfig:
    def test_default_values(self):
        config = TelemetryConfig()
        assert config.enable_tracing is False
        assert config.enable_logging is False
        assert config.log_level == "WARNING"
        assert config.logger_name == "HotelLux.Admin"
        assert config.hooks == []

    def test_immutability(self):
        config = TelemetryConfig(enable_logging=True)
        with pytest.raises(AttributeError):
            config.enable_logging = False


class TestTelemetryManagerFactory:
    def test_returns_noop_when_config_none(self):
        assert isinstance(create_telemetry_manager(None), NoOpTelemetryManager)

    def test_returns_noop_when_all_disabled(self):
        assert isinstance(create_telemetry_manager(TelemetryConfig()), NoOpTelemetryManager)

    def test_returns_manager_when_logging_enabled(self):
        assert isinstance(create_telemetry_manager(TelemetryConfig(enable_logging=True)), TelemetryManager)

    def test_returns_manager_when_hooks_provided(self):
        assert isinstance(create_telemetry_manager(TelemetryConfig(hooks=[MagicMock()])), TelemetryManager)


class TestTelemetryManager:
    def _trace(self, manager, **kwargs):
        return manager.trace_request("users.fetch_all", "GET", "https://x/api/users", "req-1", "corr-1", "users", **kwargs)

    def test_hooks_receive_start_and_end(self):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with self._trace(manager) as ctx:
            manager.record_response(ctx, 200, "svc-1")

        hook.on_request_start.assert_called_once()
        request, response = hook.on_request_end.call_args.args
        assert isinstance(request, RequestContext)
        assert request.entity_set == "users"
        assert isinstance(response, ResponseContext)
        assert response.status_code == 200
        assert response.service_request_id == "svc-1"
        assert response.duration_ms >= 0

    def test_hook_receives_error_and_exception_propagates(self):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with pytest.raises(RuntimeError):
            with self._trace(manager):
                raise RuntimeError("boom")

        ctx, error = hook.on_request_error.call_args.args
        assert ctx.operation == "users.fetch_all"
        assert str(error) == "boom"

    def test_error_response_is_not_dispatched_twice(self):
        hook = MagicMock()
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with pytest.raises(RuntimeError):
            with self._trace(manager) as ctx:
                manager.record_response(ctx, 503, error=RuntimeError("unavailable"))
                raise RuntimeError("unavailable")

        hook.on_request_end.assert_called_once()
        hook.on_request_error.assert_not_called()

    def test_failure_without_response_is_logged(self, caplog):
        manager = TelemetryManager(TelemetryConfig(enable_logging=True, logger_name="hotellux.test"))

        with caplog.at_level(logging.WARNING, logger="hotellux.test"):
            with pytest.raises(ConnectionError):
                with self._trace(manager):
                    raise ConnectionError("unreachable")

        records = [r for r in caplog.records if r.name == "hotellux.test"]
        assert [r.levelno for r in records] == [logging.ERROR]
        assert "unreachable" in records[0].getMessage()

    def test_failing_hook_does_not_break_request(self):
        hook = MagicMock()
        hook.on_request_start.side_effect = ValueError("bad hook")
        manager = TelemetryManager(TelemetryConfig(hooks=[hook]))

        with self._trace(manager) as ctx:
            manager.record_response(ctx, 200)

        hook.on_request_end.assert_called_once()

    def test_logging_levels_follow_status(self, caplog):
        manager = TelemetryManager(TelemetryConfig(enable_logging=True, log_level="DEBUG", logger_name="hotellux.test"))

        with caplog.at_level(logging.DEBUG, logger="hotellux.test"):
            with self._trace(manager) as ctx:
                manager.record_response(ctx, 200)
            with self._trace(manager) as ctx:
                manager.record_response(ctx, 500)

        levels = [r.levelno for r in caplog.records if r.name == "hotellux.test"]
        assert levels == [logging.DEBUG, logging.WARNING]

    def test_additional_headers_merged(self):
        h1 = MagicMock()
        h1.get_additional_headers.return_value = {"a": "1"}
        h2 = MagicMock()
        h2.get_additional_headers.return_value = {"b": "2"}
        manager = TelemetryManager(TelemetryConfig(hooks=[h1, h2]))
        assert manager.get_additional_headers() == {"a": "1", "b": "2"}

    def test_tracing_without_opentelemetry_installed_is_inert(self, monkeypatch):
        import HotelLux.Admin.core.telemetry as telemetry

        monkeypatch.setattr(telemetry, "_OTEL_AVAILABLE", False)
        manager = TelemetryManager(TelemetryConfig(enable_tracing=True))
        assert manager.is_tracing_enabled is False


class TestNoOpTelemetryManager:
    def test_trace_request_yields_context(self):
        manager = NoOpTelemetryManager()
        with manager.trace_request("users.delete", "DELETE", "u", "r", "c") as ctx:
            manager.record_response(ctx, 204)
        assert ctx.operation == "users.delete"
        assert manager.get_additional_headers() == {}
