"""Ports to the world outside the engine: client storage and the auth API.

The concrete adapters live in ``wms.infrastructure``; tests use in-memory
fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AuthTokens:
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "Bearer"

    @staticmethod
    def from_dict(raw: dict[str, Any]) -> AuthTokens:
        return AuthTokens(
            access_token=raw["access_token"],
            refresh_token=raw["refresh_token"],
            expires_in=int(raw.get("expires_in", 0)),
            token_type=raw.get("token_type", "Bearer"),
        )


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: str = "staff"
    warehouse_id: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_dict(raw: dict[str, Any]) -> User:
        known = {"id", "name", "email", "role", "warehouseId"}
        return User(
            id=str(raw["id"]),
            name=raw.get("name", ""),
            email=raw.get("email", ""),
            role=raw.get("role", "staff"),
            warehouse_id=str(raw.get("warehouseId", "")),
            extra={k: v for k, v in raw.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "warehouseId": self.warehouse_id,
        }


@dataclass(frozen=True)
class LoginResult:
    tokens: AuthTokens
    user: User


class KeyValueStore(ABC):
    """Persisted client state (the browser's local storage, here a file)."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value, or None."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key; missing keys are ignored."""


class AuthGateway(ABC):

    @abstractmethod
    def login(self, email: str, password: str) -> LoginResult:
        """Exchange credentials for tokens."""

    @abstractmethod
    def refresh_token(self, refresh_token: str) -> LoginResult:
        """Exchange a refresh token for a new token pair."""

    @abstractmethod
    def logout(self, refresh_token: str) -> None:
        """Invalidate the refresh token server-side."""

    @abstractmethod
    def me(self) -> User:
        """Return the user the current access token belongs to."""
