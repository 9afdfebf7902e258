"""Fixtures for end-to-end HTTP tests against an in-memory database."""

from collections.abc import Iterator

import pytest

from tests.unit.application.api.harness import Harness, run_harness


@pytest.fixture
def advisory() -> Iterator[Harness]:
    yield from run_harness(strict=False)


@pytest.fixture
def strict() -> Iterator[Harness]:
    yield from run_harness(strict=True)
