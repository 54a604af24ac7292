"""
Short-name parsing and the reserved-name list.
"""

from __future__ import annotations

import string

from golinks.errors import InvalidNameError

EDIT_PREFIX = "/edit/"

# Top-level path segments owned by the service itself. "edit" must stay in
# here or the default and edit handlers redirect to each other forever.
BANNED_NAMES = frozenset(
    {"api", "edit", "links", "s", "admin", "version", "healthz"}
)

# Banned names that are also served as a subtree ("/edit/", "/links/").
SUBTREE_NAMES = frozenset({"edit", "links"})

GENERATED_NAME_PREFIX = ":"

_ID_ALPHABET = string.digits + string.ascii_letters


def parse_name(prefix: str, path: str) -> str:
    """
    Return the short name that follows ``prefix`` in ``path``.

    Leading slashes are dropped, so ``parse_name("/", "/")`` is the empty
    name. The result never starts with ``prefix``.
    """
    name = path
    while True:
        if prefix and name.startswith(prefix):
            name = name[len(prefix):]
        elif name.startswith("/"):
            name = name.lstrip("/")
        else:
            return name


def clean_name(name: str) -> str:
    return name.strip("/")


def is_banned_name(name: str) -> bool:
    return name in BANNED_NAMES


def has_banned_prefix(name: str) -> bool:
    """True when the first path segment of ``name`` is a banned name."""
    return is_banned_name(name.split("/", 1)[0])


def validate_name(name: str) -> None:
    """Raise InvalidNameError if ``name`` may not be claimed by a user."""
    if has_banned_prefix(name) or name.startswith(GENERATED_NAME_PREFIX):
        raise InvalidNameError(name)


def encode_id(value: int) -> str:
    if value < 0:
        raise ValueError("id must be non-negative")
    if value == 0:
        return _ID_ALPHABET[0]
    base = len(_ID_ALPHABET)
    digits = []
    while value:
        value, rem = divmod(value, base)
        digits.append(_ID_ALPHABET[rem])
    return "".join(reversed(digits))


def generated_name(value: int) -> str:
    return f"{GENERATED_NAME_PREFIX}{encode_id(value)}"
