from __future__ import annotations

from typing import Any, Iterable, Sequence


class ValidationError(ValueError):
    """400-level input problem, raised before the store is touched."""


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(payload: dict, fields: Iterable[str]) -> None:
    """Raise ValidationError listing every required field that is missing or blank."""
    missing = [name for name in fields if _is_blank(payload.get(name))]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def require_string(payload: dict, name: str) -> str:
    value = payload.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} must be a non-empty string")
    return value


def normalize_params(params: Any) -> list[str | None]:
    """
    Normalize positional SQL parameters.

    The shell sends a flat list of strings. Numbers and booleans are
    accepted and converted to their string form (SQLite column affinity
    turns them back into numbers on insert); None binds NULL. Nested
    values are rejected.
    """
    if params is None:
        return []
    if not isinstance(params, (list, tuple)):
        raise ValidationError("params must be a list")

    normalized: list[str | None] = []
    for index, value in enumerate(params):
        if value is None or isinstance(value, str):
            normalized.append(value)
        elif isinstance(value, bool):
            normalized.append("1" if value else "0")
        elif isinstance(value, (int, float)):
            normalized.append(str(value))
        else:
            raise ValidationError(f"params[{index}] must be a string")
    return normalized


def require_int(payload: dict, name: str, *, default: int | None = None, minimum: int | None = None) -> int:
    """
    Strict integer field (money in minor units, quantities).

    Floats and decimal strings are rejected so amounts never pass through
    floating point.
    """
    value = payload.get(name, default)
    if value is None:
        raise ValidationError(f"{name} is required")
    if isinstance(value, float):
        raise ValidationError(f"{name} must be an integer, not a decimal")
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer")
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped or "." in stripped or "e" in stripped.lower():
            raise ValidationError(f"{name} must be an integer")
        try:
            value = int(stripped)
        except ValueError:
            raise ValidationError(f"{name} must be an integer")
    if not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    if minimum is not None and value < minimum:
        raise ValidationError(f"{name} must be >= {minimum}")
    return value


def only_known(names: Sequence[str], allowed: Iterable[str], what: str) -> None:
    unknown = sorted(set(names) - set(allowed))
    if unknown:
        raise ValidationError(f"Unknown {what}: {', '.join(unknown)}")
