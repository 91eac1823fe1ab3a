"""Pytest configuration for the aitomics tests.

Shared fixtures: a fresh caller registry per test, a fake text-generation
backend and a small response chain built from programmatic callers.
"""

import logging
from unittest.mock import AsyncMock

import pytest
from loguru import logger as loguru_logger

from aitomics.callers import IdentityCaller, ProgrammaticCaller
from aitomics.registry import CallerRegistry
from aitomics.response import Response


class PropagateHandler(logging.Handler):
    def emit(self, record):
        logging.getLogger(record.name).handle(record)


@pytest.fixture(scope="session", autouse=True)
def configure_loguru_for_pytest_caplog():
    """Configure Loguru to propagate messages to standard logging for caplog."""
    try:
        loguru_logger.remove(0)
    except ValueError:  # Handler 0 might already be gone
        pass
    loguru_logger.add(PropagateHandler(), format="{message}", level="DEBUG")


@pytest.fixture
def registry() -> CallerRegistry:
    return CallerRegistry()


@pytest.fixture
def fake_fetcher() -> AsyncMock:
    """Backend double that answers every request with a fixed text."""
    return AsyncMock(return_value="positive")


@pytest.fixture
def upper_caller(registry: CallerRegistry) -> ProgrammaticCaller:
    return registry.add(ProgrammaticCaller(str.upper, "test.upper"))


@pytest.fixture
def split_caller(registry: CallerRegistry) -> ProgrammaticCaller:
    return registry.add(ProgrammaticCaller(lambda text: text.split(" "), "test.split"))


@pytest.fixture
def three_step_chain(registry: CallerRegistry) -> Response:
    """Seed 'Some Text String' -> identity -> upper -> split."""
    identity = registry.add(IdentityCaller())
    upper = ProgrammaticCaller(str.upper, "chain.upper")
    split = ProgrammaticCaller(lambda text: text.split(" "), "chain.split")
    registry.add(upper)
    registry.add(split)

    first = Response("Some Text String", identity, "Some Text String")
    second = Response("SOME TEXT STRING", upper, first)
    return Response(["SOME", "TEXT", "STRING"], split, second)
