"""Tests for the async retry decorator."""

import asyncio
from types import SimpleNamespace

import pytest

from utils import decorators
from utils.decorators import retry_on_exception


@pytest.fixture
def sleeps(monkeypatch):
    delays = []

    async def no_wait(seconds):
        delays.append(seconds)

    monkeypatch.setattr(decorators, "asyncio", SimpleNamespace(sleep=no_wait))
    return delays


def flaky(failures, exc=ConnectionError):
    calls = []

    async def call():
        calls.append(1)
        if len(calls) <= failures:
            raise exc("down")
        return "up"

    return call, calls


def test_recovers_after_failures(sleeps):
    call, calls = flaky(2)
    assert asyncio.run(retry_on_exception(retries=3, delay=0.5, exceptions=(ConnectionError,))(call)()) == "up"
    assert len(calls) == 3
    assert sleeps == [0.5, 1.0]


def test_gives_up_after_last_attempt(sleeps):
    call, calls = flaky(5)
    with pytest.raises(ConnectionError):
        asyncio.run(retry_on_exception(retries=3, delay=1, exceptions=(ConnectionError,))(call)())
    assert len(calls) == 3
    assert sleeps == [1, 2]


def test_other_exceptions_are_not_retried(sleeps):
    call, calls = flaky(1, exc=KeyError)
    with pytest.raises(KeyError):
        asyncio.run(retry_on_exception(retries=3, exceptions=(ConnectionError,))(call)())
    assert len(calls) == 1
    assert sleeps == []
