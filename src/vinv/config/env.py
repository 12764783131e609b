"""Typed reads of VINV_* environment variables.

A variable that is unset or blank counts as not given. A value that does not
parse is logged and also counts as not given, so the config file or the
built-in default applies instead.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _parse_bool(value: str) -> bool:
    return value.lower() in _TRUE_VALUES


def _parse_path(value: str) -> Path:
    return Path(value).expanduser()


class EnvReader:
    """Reads environment variables with type conversion.

    Tests pass ``env`` as a plain dict; otherwise os.environ is read.

    Example:
        reader = EnvReader(env={"VINV_WORKERS": "4"})
        reader.get_int("VINV_WORKERS")  # 4
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def _read(self, var: str, parse: Callable[[str], T], kind: str) -> T | None:
        raw = self._env.get(var, "").strip()
        if not raw:
            return None
        try:
            return parse(raw)
        except ValueError:
            logger.warning("Ignoring %s=%r: not a valid %s", var, raw, kind)
            return None

    def get_str(self, var: str) -> str | None:
        return self._read(var, str, "string")

    def get_int(self, var: str) -> int | None:
        return self._read(var, int, "integer")

    def get_float(self, var: str) -> float | None:
        return self._read(var, float, "number")

    def get_bool(self, var: str) -> bool | None:
        """True for 1/true/yes/on in any case, False for anything else."""
        return self._read(var, _parse_bool, "boolean")

    def get_path(self, var: str) -> Path | None:
        return self._read(var, _parse_path, "path")

    def get_path_list(self, var: str, separator: str = os.pathsep) -> list[Path] | None:
        """Split on separator (``:`` on POSIX); empty entries are dropped."""
        value = self.get_str(var)
        if value is None:
            return None
        parts = (part.strip() for part in value.split(separator))
        return [_parse_path(part) for part in parts if part]
