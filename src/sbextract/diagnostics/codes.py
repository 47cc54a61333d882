"""Stable, searchable error code registry.

Ranges:
- E00xx      — Input (credentials)
- E01xx      — Transport (connection, authentication, timeout)
- E02xx      — Backend setup (missing procedures)
- E03xx      — Response validation
- E09xx      — Everything else reported by the backend
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ErrorCode:
    value: int

    def __str__(self) -> str:
        return f"E{self.value:04d}"


# Input (E00xx)
MISSING_CREDENTIALS = ErrorCode(1)

# Transport (E01xx)
CONNECTION_FAILED = ErrorCode(101)
AUTHENTICATION_FAILED = ErrorCode(102)
CALL_TIMEOUT = ErrorCode(103)

# Backend setup (E02xx)
SETUP_REQUIRED = ErrorCode(201)

# Response validation (E03xx)
PERMISSION_DENIED = ErrorCode(301)
INVALID_SHAPE = ErrorCode(302)

# Fallback (E09xx)
REMOTE_ERROR = ErrorCode(901)
