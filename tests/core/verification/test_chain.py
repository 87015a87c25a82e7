"""Tests for verify_file and the default verifier chain."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from plugin_updater.core.verification import (
    DEFAULT_FILE_VERIFIERS,
    BasicVerifier,
    Sha512SumVerifier,
    VerificationContext,
    verify_file,
)
from plugin_updater.exceptions import VerifyError


def test_default_chain_order() -> None:
    """Test the sanity gate runs before the checksum check."""
    assert [type(v) for v in DEFAULT_FILE_VERIFIERS] == [
        BasicVerifier,
        Sha512SumVerifier,
    ]


def test_all_verifiers_pass(
    plugin_file: Path,
    plugin_file_sha512: str,
    make_context: Callable[..., VerificationContext],
) -> None:
    """Test a good file passes the default chain."""
    verify_file(make_context(plugin_file_sha512), plugin_file)


def test_stops_at_first_failure(
    tmp_path: Path,
    make_context: Callable[..., VerificationContext],
) -> None:
    """Test later verifiers do not run after a failure."""
    empty = tmp_path / "empty.zip"
    empty.touch()
    second = MagicMock()

    with pytest.raises(VerifyError):
        verify_file(make_context(), empty, [BasicVerifier(), second])

    second.verify.assert_not_called()


def test_runs_verifiers_in_order(
    plugin_file: Path,
    make_context: Callable[..., VerificationContext],
) -> None:
    """Test each verifier receives the context and file in sequence."""
    calls: list[str] = []
    first = MagicMock()
    first.verify.side_effect = lambda ctx, f: calls.append("first")
    second = MagicMock()
    second.verify.side_effect = lambda ctx, f: calls.append("second")
    context = make_context()

    verify_file(context, plugin_file, [first, second])

    assert calls == ["first", "second"]
    first.verify.assert_called_once_with(context, plugin_file)


def test_checksum_mismatch_fails_chain(
    plugin_file: Path,
    make_context: Callable[..., VerificationContext],
) -> None:
    """Test a wrong checksum fails the default chain."""
    with pytest.raises(VerifyError, match="does not match"):
        verify_file(make_context("00ff"), plugin_file)
