"""Runtime settings for a filesystem session.

Settings come from plain ``KEY=VALUE`` string pairs, the same shape as a
process environment.  Pass ``os.environ`` (or any string mapping) to
``Settings.from_env``:

- ``INODEFS_PROMPT``: the shell prompt (default ``"% "``).
- ``INODEFS_TRACE``: record DEBUG trace entries when truthy
  (``1``, ``true``, ``yes``, ``on``; case-insensitive).

Unset keys fall back to the defaults.  Settings are frozen; the prompt
can still be changed later on the filesystem state itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from py_inodefs.logging import LogLevel

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_PROMPT = "% "

PROMPT_VAR = "INODEFS_PROMPT"
TRACE_VAR = "INODEFS_TRACE"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Settings:
    """Prompt text and trace switch for one session."""

    prompt: str = DEFAULT_PROMPT
    trace: bool = False

    @property
    def log_level(self) -> LogLevel:
        """Return the minimum level the session logger should record."""
        return LogLevel.DEBUG if self.trace else LogLevel.INFO

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> Settings:
        """Build settings from an environment-style mapping."""
        prompt = env.get(PROMPT_VAR, DEFAULT_PROMPT)
        trace = env.get(TRACE_VAR, "").strip().lower() in _TRUTHY
        return cls(prompt=prompt, trace=trace)
