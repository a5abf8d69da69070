"""Tests for session settings read from environment-style mappings."""

import pytest

from py_inodefs.config import DEFAULT_PROMPT, PROMPT_VAR, TRACE_VAR, Settings
from py_inodefs.logging import LogLevel


class TestSettings:
    """Verify defaults and derived values."""

    def test_defaults(self) -> None:
        """The default prompt is ``% `` and tracing is off."""
        settings = Settings()
        assert settings.prompt == DEFAULT_PROMPT == "% "
        assert not settings.trace

    def test_log_level_follows_trace(self) -> None:
        """Tracing lowers the recording threshold to DEBUG."""
        assert Settings().log_level is LogLevel.INFO
        assert Settings(trace=True).log_level is LogLevel.DEBUG


class TestFromEnv:
    """Verify reading settings from KEY=VALUE pairs."""

    def test_empty_env_gives_defaults(self) -> None:
        """Missing keys fall back to the defaults."""
        assert Settings.from_env({}) == Settings()

    def test_prompt_is_read(self) -> None:
        """INODEFS_PROMPT sets the prompt verbatim."""
        assert Settings.from_env({PROMPT_VAR: "fs> "}).prompt == "fs> "

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_truthy_trace_values(self, value: str) -> None:
        """Common truthy spellings turn tracing on."""
        assert Settings.from_env({TRACE_VAR: value}).trace

    @pytest.mark.parametrize("value", ["", "0", "false", "off", "maybe"])
    def test_other_trace_values(self, value: str) -> None:
        """Anything else leaves tracing off."""
        assert not Settings.from_env({TRACE_VAR: value}).trace
