"""Configuration enums for type-safe settings.

These enums provide type safety and IDE autocomplete for configuration values.
They inherit from str to maintain JSON serialization compatibility.
"""

from enum import Enum


class Permission(str, Enum):
    """Permission scopes a user can grant during the OAuth handshake."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"


class TokenKind(str, Enum):
    """Which stage of the OAuth1 handshake a stored token belongs to."""

    EMPTY = "empty"
    REQUEST = "request"
    ACCESS = "access"


class ResponseStatus(str, Enum):
    """Values of the ``stat`` field in a response envelope."""

    OK = "ok"
    FAIL = "fail"
