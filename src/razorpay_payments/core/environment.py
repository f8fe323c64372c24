"""
Assemble the environment variables used to configure the client.

Values come from three layers: a base mapping (the process environment by
default), an optional ``.env`` file that only fills gaps, and explicit
overrides that always win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

from dotenv import dotenv_values

__all__ = ["ClientEnvironment", "build_environment", "load_env_file"]


def _read_env_file(path: Optional[str]) -> Dict[str, str]:
    if path is None or not Path(path).is_file():
        return {}
    return {
        key: value
        for key, value in dotenv_values(path, encoding="utf-8").items()
        if value is not None
    }


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Copy the variables found in ``path`` into ``environ`` without replacing
    keys that are already set, and return the merged mapping.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    for key, value in _read_env_file(path).items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class ClientEnvironment:
    variables: Mapping[str, str]

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    ``base`` defaults to :data:`os.environ`; pass ``env_file=None`` to skip
    reading a ``.env`` file.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)
    for key, value in _read_env_file(env_file).items():
        merged.setdefault(key, value)
    if overrides:
        merged.update(overrides)
    return ClientEnvironment(variables=merged)
