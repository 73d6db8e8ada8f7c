"""
Small helpers shared by the adapters: null/blank checks, defaults,
deterministic ids and argument validation.
"""

import hashlib
import uuid
from typing import Any, Callable, Optional, Sized, TypeVar

T = TypeVar("T")


def get_or_default(value: Optional[T], default: Any) -> T:
    """
    Return `value` unless it is None, otherwise `default`.

    A callable default is only invoked when it is actually needed.
    """
    if value is not None:
        return value
    return default() if callable(default) else default


def get_or_default_lazy(value: Optional[T], supplier: Callable[[], T]) -> T:
    """Return `value` unless it is None, otherwise the result of `supplier()`."""
    return value if value is not None else supplier()


def is_null_or_blank(string: Optional[str]) -> bool:
    return string is None or not string.strip()


def is_not_null_or_blank(string: Optional[str]) -> bool:
    return not is_null_or_blank(string)


def are_not_null_or_blank(*strings: Optional[str]) -> bool:
    """True only if at least one string is given and none is None or blank."""
    if not strings:
        return False
    return all(is_not_null_or_blank(s) for s in strings)


def is_null_or_empty(collection: Optional[Sized]) -> bool:
    return collection is None or len(collection) == 0


def repeat(string: str, times: int) -> str:
    return string * max(times, 0)


def random_uuid() -> str:
    return str(uuid.uuid4())


def generate_uuid_from(text: str) -> str:
    """
    Derive a stable UUID from arbitrary text.

    The SHA-256 hex digest of the text is turned into a name-based
    (version 3) UUID, so equal inputs always produce equal ids.
    """
    hex_digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    md5 = hashlib.md5(hex_digest.encode("utf-8")).digest()
    return str(uuid.UUID(bytes=md5, version=3))


def quoted(string: Optional[str]) -> str:
    if string is None:
        return "null"
    return f'"{string}"'


def first_chars(string: Optional[str], number_of_chars: int) -> Optional[str]:
    if string is None:
        return None
    return string[:number_of_chars]


def ensure_not_null(value: Optional[T], name: str) -> T:
    if value is None:
        raise ValueError(f"{name} cannot be null")
    return value


def ensure_not_blank(value: Optional[str], name: str) -> str:
    if is_null_or_blank(value):
        raise ValueError(f"{name} cannot be null or blank")
    return value  # type: ignore[return-value]


def ensure_not_empty(collection: Optional[Sized], name: str):
    if is_null_or_empty(collection):
        raise ValueError(f"{name} cannot be null or empty")
    return collection


def ensure_greater_than_zero(value: Optional[int], name: str) -> int:
    if value is None or value <= 0:
        raise ValueError(f"{name} must be greater than zero, but is: {value}")
    return value


def ensure_between(value: Optional[float], min_value: float, max_value: float, name: str) -> float:
    if value is None or value < min_value or value > max_value:
        raise ValueError(f"{name} must be between {min_value} and {max_value}, but is: {value}")
    return value
