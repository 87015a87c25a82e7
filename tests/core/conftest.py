"""Pytest configuration and fixtures for core module tests.

- make_response: factory for mocked requests.Response objects
- mock_session: MagicMock standing in for requests.Session
- sample_manifest: a small plugins.json payload
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import orjson
import pytest
import requests

BASE_URL = "https://example.com/repo/"


def build_response(
    content: bytes = b"",
    status_error: Exception | None = None,
) -> MagicMock:
    """Build a mock response usable as a context manager.

    Args:
        content: Response body
        status_error: Exception raised by raise_for_status(), if any

    Returns:
        MagicMock mimicking requests.Response

    """
    response = MagicMock(spec=requests.Response)
    response.__enter__.return_value = response
    response.__exit__.return_value = None
    response.content = content
    response.iter_content.side_effect = lambda chunk_size=1: iter(
        [content[i : i + chunk_size] for i in range(0, len(content), chunk_size)]
    )
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


@pytest.fixture
def make_response() -> Callable[..., MagicMock]:
    """Provide the mock response factory."""
    return build_response


@pytest.fixture
def mock_session() -> MagicMock:
    """Provide a mock requests.Session."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def sample_manifest() -> list[dict[str, Any]]:
    """Provide a manifest with one plugin and two releases."""
    return [
        {
            "id": "p1",
            "name": "Plugin One",
            "description": "First plugin",
            "provider": "Example",
            "projectUrl": "https://example.com/p1",
            "releases": [
                {
                    "version": "1.0",
                    "url": "p1-1.0.zip",
                    "date": "2020-01-01",
                    "sha512sum": "deadbeef",
                },
                {
                    "version": "1.1",
                    "url": "https://cdn.example.org/p1-1.1.zip",
                    "date": "2020-06-01T12:00:00Z",
                    "requires": ">=2.0",
                },
            ],
        }
    ]


@pytest.fixture
def manifest_bytes(sample_manifest: list[dict[str, Any]]) -> bytes:
    """Provide the sample manifest serialized as JSON."""
    return orjson.dumps(sample_manifest)
