# tests/test_utils.py
"""Tests for the MINUTES2DOCX_DEBUG switch."""

import logging

import pytest

from minutes2docx.internals import constants
from minutes2docx.utils import get_debug_mode


@pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes ", "on"])
def test_debug_mode_on(clean_debug_env: pytest.MonkeyPatch, value: str) -> None:
    clean_debug_env.setenv("MINUTES2DOCX_DEBUG", value)
    assert get_debug_mode() is True


@pytest.mark.parametrize("value", ["0", "false", "No", "off "])
def test_debug_mode_off(clean_debug_env: pytest.MonkeyPatch, value: str) -> None:
    clean_debug_env.setenv("MINUTES2DOCX_DEBUG", value)
    assert get_debug_mode() is False


def test_debug_mode_unset_uses_default(clean_debug_env: pytest.MonkeyPatch) -> None:
    assert get_debug_mode() == constants.DEBUG_MODE_DEFAULT


@pytest.mark.parametrize("value", ["bob", "", "2"])
def test_debug_mode_unrecognized_value_warns_and_uses_default(
    clean_debug_env: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture, value: str
) -> None:
    clean_debug_env.setenv("MINUTES2DOCX_DEBUG", value)

    with caplog.at_level(logging.WARNING):
        assert get_debug_mode() == constants.DEBUG_MODE_DEFAULT

    assert "Ignoring MINUTES2DOCX_DEBUG" in caplog.text
