"""Shared fixtures for the jsonapi_codec test suite."""

from __future__ import annotations

import json
from typing import Any

import pytest

from jsonapi_codec import JSONAPICodec


@pytest.fixture
def codec() -> JSONAPICodec:
    return JSONAPICodec()


@pytest.fixture
def loads():
    """Decode marshalled bytes for structural comparisons."""

    def _loads(payload: bytes) -> Any:
        return json.loads(payload.decode("utf-8"))

    return _loads
