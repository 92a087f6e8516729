"""Validation helpers for rule options."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class InvalidOptionError(ValueError):
    """Raised when a rule is configured with options it cannot accept."""


def require_enabled(primary: object) -> None:
    if primary is not True:
        msg = f"expected true as the primary option, got {primary!r}"
        raise InvalidOptionError(msg)


def check_keys(secondary: Mapping[str, object], allowed: Iterable[str]) -> None:
    unknown = sorted(set(secondary) - set(allowed))
    if unknown:
        msg = f"unknown option(s): {', '.join(unknown)}"
        raise InvalidOptionError(msg)


def bool_option(secondary: Mapping[str, object], key: str, *, default: bool) -> bool:
    value = secondary.get(key, default)
    if not isinstance(value, bool):
        msg = f"option '{key}' must be true or false, got {value!r}"
        raise InvalidOptionError(msg)
    return value


def string_list_option(secondary: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    """Return the list of strings under *key*, or ``None`` when it is absent.

    A single string is accepted as a one-element list.
    """
    if key not in secondary:
        return None
    value = secondary[key]
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        msg = f"option '{key}' must be a list of strings, got {value!r}"
        raise InvalidOptionError(msg)
    return tuple(value)


def no_options(primary: object, secondary: Mapping[str, object]) -> None:
    """Option parser for rules that take nothing beyond ``true``."""
    require_enabled(primary)
    check_keys(secondary, ())
