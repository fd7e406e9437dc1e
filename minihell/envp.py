"""Environment lists made of ``NAME=value`` strings."""

from __future__ import annotations

from collections.abc import Sequence


def get_var_name(string: str | None) -> str | None:
    """Return the part before the first ``=``, or None if there is none."""
    if string is None:
        return None
    name, sep, _ = string.partition("=")
    return name if sep else None


def get_var_value(string: str | None) -> str | None:
    """Return the part after the first ``=``, or None if there is none."""
    if string is None:
        return None
    _, sep, value = string.partition("=")
    return value if sep else None


def get_env_value(name: str | None, envp: Sequence[str] | None) -> str | None:
    """Look up the value of ``name`` in ``envp``."""
    if name is None or not envp:
        return None
    for entry in envp:
        if get_var_name(entry) == name:
            return get_var_value(entry)
    return None


def unset_env_value(name: str | None, envp: Sequence[str] | None) -> list[str] | None:
    """Return a copy of ``envp`` without the entries named ``name``."""
    if name is None or envp is None:
        return None
    return [entry for entry in envp if get_var_name(entry) != name]


def set_env_value(
    name: str | None, value: str | None, envp: Sequence[str] | None
) -> list[str]:
    """Return a copy of ``envp`` where ``name`` is set to ``value``.

    The new entry is placed at the end; any earlier entry of that name is dropped.
    """
    if name is None or value is None:
        return list(envp or [])
    result = unset_env_value(name, envp) or []
    result.append(f"{name}={value}")
    return result