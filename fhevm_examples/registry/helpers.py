"""Utility helpers shared by the registry loader."""

from __future__ import annotations

import typing as typ

from .models import Difficulty, RegistryError


def _text(value: object | None) -> str:
    """Return a stripped string, treating ``None`` as empty."""
    if value is None:
        return ""
    return str(value).strip()


def _required_text(payload: typ.Mapping[str, typ.Any], key: str, owner: str) -> str:
    """Return ``payload[key]`` as text or raise when missing or blank."""
    text = _text(payload.get(key))
    if not text:
        msg = f"{owner} is missing '{key}'."
        raise RegistryError(msg)
    return text


def _string_list(value: str | list[object] | None) -> tuple[str, ...]:
    """Normalize a scalar or list payload into a tuple of non-empty strings."""
    if isinstance(value, str):
        text = value.strip()
        return (text,) if text else ()
    if isinstance(value, list):
        normalized: list[str] = []
        for item in value:
            text = str(item).strip()
            if text:
                normalized.append(text)
        return tuple(normalized)
    return ()


def _mapping(value: object | None, owner: str) -> dict[str, typ.Any]:
    """Return ``value`` as a dict, treating ``None`` as empty, or raise."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"{owner} must be a mapping, got {type(value).__name__}."
        raise RegistryError(msg)
    return value


def _positive_int(value: object | None, owner: str, default: int) -> int:
    """Return ``value`` as a positive integer, or ``default`` when unset."""
    if value is None:
        return default
    if isinstance(value, bool):
        msg = f"{owner} must be a positive integer, got {value!r}."
        raise RegistryError(msg)
    try:
        number = int(str(value).strip())
    except ValueError as exc:
        msg = f"{owner} must be a positive integer, got {value!r}."
        raise RegistryError(msg) from exc
    if number < 1:
        msg = f"{owner} must be a positive integer, got {value!r}."
        raise RegistryError(msg)
    return number


def _parse_difficulty(value: object | None, owner: str) -> Difficulty:
    """Return the Difficulty for ``value``; missing values mean beginner."""
    text = _text(value).lower()
    if not text:
        return Difficulty.BEGINNER
    try:
        return Difficulty(text)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in Difficulty)
        msg = f"{owner} has unknown difficulty '{value}'. Expected one of: {allowed}"
        raise RegistryError(msg) from exc


def title_from_slug(slug: str) -> str:
    """Return ``"Access Control"`` for ``"access-control"``."""
    return " ".join(word.capitalize() for word in slug.split("-") if word)


__all__ = [
    "_mapping",
    "_parse_difficulty",
    "_positive_int",
    "_required_text",
    "_string_list",
    "_text",
    "title_from_slug",
]
