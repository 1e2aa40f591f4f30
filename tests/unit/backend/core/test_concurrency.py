"""Unit tests for agencyhub.backend.core.concurrency."""

import asyncio
import contextvars
from unittest.mock import MagicMock, patch

import pytest
import structlog

import agencyhub.backend.core.concurrency as concurrency_module
from agencyhub.backend.core.concurrency import (
    TracedThreadPoolExecutor,
    get_io_pool,
    get_semaphore,
    shutdown_pools,
)

APP_CONFIG = "agencyhub.backend.core.config.get_app_config"


@pytest.fixture(autouse=True)
def _reset_pools():
    concurrency_module._io_pool = None
    concurrency_module._semaphores.clear()
    yield
    if concurrency_module._io_pool is not None:
        concurrency_module._io_pool.shutdown(wait=False)
        concurrency_module._io_pool = None
    concurrency_module._semaphores.clear()


def _mock_concurrency_config(thread_max=4, external_api=3):
    mock_config = MagicMock()
    mock_config.concurrency.thread_pool.max_workers = thread_max
    mock_config.concurrency.semaphores = MagicMock(spec=["external_api"])
    mock_config.concurrency.semaphores.external_api = external_api
    return mock_config


class TestTracedThreadPoolExecutor:
    def test_propagates_contextvars(self):
        test_var = contextvars.ContextVar("test_var", default="default")
        test_var.set("from_caller")

        executor = TracedThreadPoolExecutor(max_workers=1)
        try:
            assert executor.submit(test_var.get).result(timeout=5) == "from_caller"
        finally:
            executor.shutdown(wait=True)

    def test_propagates_structlog_context(self):
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id="push-123")

        executor = TracedThreadPoolExecutor(max_workers=1)
        try:
            ctx = executor.submit(structlog.contextvars.get_contextvars).result(timeout=5)
            assert ctx["request_id"] == "push-123"
        finally:
            executor.shutdown(wait=True)
            structlog.contextvars.clear_contextvars()


class TestGetIoPool:
    def test_created_lazily_with_configured_size(self):
        with patch(APP_CONFIG, return_value=_mock_concurrency_config(thread_max=3)):
            pool = get_io_pool()

        assert isinstance(pool, TracedThreadPoolExecutor)
        assert pool._max_workers == 3

    def test_returns_same_instance(self):
        with patch(APP_CONFIG, return_value=_mock_concurrency_config()):
            assert get_io_pool() is get_io_pool()


class TestGetSemaphore:
    def test_uses_configured_capacity(self):
        with patch(APP_CONFIG, return_value=_mock_concurrency_config(external_api=3)):
            sem = get_semaphore("external_api")

        assert sem._value == 3

    def test_unconfigured_name_defaults_to_20(self):
        with patch(APP_CONFIG, return_value=_mock_concurrency_config()):
            sem = get_semaphore("something_else")

        assert sem._value == 20

    def test_cached_per_name(self):
        with patch(APP_CONFIG, return_value=_mock_concurrency_config()):
            assert get_semaphore("external_api") is get_semaphore("external_api")
            assert get_semaphore("external_api") is not get_semaphore("other")


class TestShutdownPools:
    async def test_shuts_down_and_clears(self):
        with patch(APP_CONFIG, return_value=_mock_concurrency_config()):
            pool = get_io_pool()
            get_semaphore("external_api")

        await shutdown_pools()

        assert concurrency_module._io_pool is None
        assert concurrency_module._semaphores == {}
        with pytest.raises(RuntimeError):
            pool.submit(lambda: None)

    async def test_noop_when_nothing_created(self):
        await shutdown_pools()
        assert concurrency_module._io_pool is None

    async def test_pool_usable_from_event_loop(self):
        with patch(APP_CONFIG, return_value=_mock_concurrency_config()):
            pool = get_io_pool()

        loop = asyncio.get_running_loop()
        assert await loop.run_in_executor(pool, sum, [1, 2, 3]) == 6
