import json
import os
import secrets

# URL-safe nanoid alphabet: A-Za-z0-9_-
_NANOID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_-"


def generate_id(length: int = 16) -> str:
    """
    Generate a nanoid-style random id.

    Used for operation ids, which end up in logs, span attributes and task
    registry keys, so they must stay URL and log safe.

    Example:
        >>> generate_id(16)
        'kAANsGIQ6xRJp4Zc'
    """
    return "".join(secrets.choice(_NANOID_ALPHABET) for _ in range(length))


def get_env_int(name: str, default: int | None = None) -> int | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def get_env_float(name: str, default: float | None = None) -> float | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


def _env_flag(name: str, default: bool = False) -> bool:
    """True for '1', 'true', 'yes' or 'on' (any case); default when unset."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_json_dict(env_key: str) -> dict[str, object]:
    """Load a JSON object from an env var, e.g. extra request kwargs."""
    raw_value = os.getenv(env_key, "")
    if not raw_value:
        return {}

    try:
        parsed = json.loads(raw_value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{env_key} must be valid JSON: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ValueError(f"{env_key} must be a JSON object")
    return parsed


__all__ = [
    "generate_id",
    "get_env_int",
    "get_env_float",
    "_env_flag",
    "_load_json_dict",
]
