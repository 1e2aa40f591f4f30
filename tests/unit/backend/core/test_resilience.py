"""Unit tests for agencyhub.backend.core.resilience."""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import aiobreaker
import pytest

from agencyhub.backend.core.resilience import ResilienceLogger, create_circuit_breaker

LOGGER = "agencyhub.backend.core.resilience.logger"


class TestResilienceLogger:
    def test_state_change_open_logs_error(self):
        cb = MagicMock(fail_counter=5)

        with patch(LOGGER) as mock_logger:
            ResilienceLogger("web_push").state_change(cb, "closed", "open")

        mock_logger.error.assert_called_once()
        extra = mock_logger.error.call_args.kwargs["extra"]
        assert extra["resilience_event"] == "circuit_breaker_opened"
        assert extra["dependency"] == "web_push"
        assert extra["failure_count"] == 5

    @pytest.mark.parametrize(
        ("new_state", "event"),
        [("closed", "circuit_breaker_closed"), ("half-open", "circuit_breaker_half_open")],
    )
    def test_other_transitions_log_info(self, new_state, event):
        with patch(LOGGER) as mock_logger:
            ResilienceLogger("web_push").state_change(MagicMock(fail_counter=0), "open", new_state)

        mock_logger.info.assert_called_once()
        assert mock_logger.info.call_args.kwargs["extra"]["resilience_event"] == event

    def test_failure_logs_warning(self):
        with patch(LOGGER) as mock_logger:
            ResilienceLogger("web_push").failure(MagicMock(fail_counter=2), ConnectionError("refused"))

        mock_logger.warning.assert_called_once()
        extra = mock_logger.warning.call_args.kwargs["extra"]
        assert extra["resilience_event"] == "circuit_breaker_failure"
        assert extra["error"] == "refused"


class TestCreateCircuitBreaker:
    def test_configuration(self):
        breaker = create_circuit_breaker("web_push", fail_max=3, timeout_duration=45)

        assert isinstance(breaker, aiobreaker.CircuitBreaker)
        assert breaker.fail_max == 3
        assert breaker.timeout_duration == timedelta(seconds=45)
        assert any(isinstance(l, ResilienceLogger) for l in breaker.listeners)

    async def test_opens_after_fail_max(self):
        breaker = create_circuit_breaker("flaky", fail_max=2, timeout_duration=60)

        async def boom():
            raise ConnectionError("down")

        with patch(LOGGER):
            with pytest.raises(ConnectionError):
                await breaker.call_async(boom)
            with pytest.raises((ConnectionError, aiobreaker.CircuitBreakerError)):
                await breaker.call_async(boom)
            with pytest.raises(aiobreaker.CircuitBreakerError):
                await breaker.call_async(boom)

        assert breaker.current_state == aiobreaker.CircuitBreakerState.OPEN

    async def test_excluded_errors_do_not_count(self):
        class Gone(Exception):
            pass

        breaker = create_circuit_breaker("web_push", fail_max=1, exclude=[Gone])

        async def gone():
            raise Gone()

        with pytest.raises(Gone):
            await breaker.call_async(gone)

        assert breaker.fail_counter == 0
        assert breaker.current_state == aiobreaker.CircuitBreakerState.CLOSED
