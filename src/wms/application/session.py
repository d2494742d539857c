"""Application service: the signed-in session.

``AuthService`` owns the tokens and the current user, persists them through
a ``KeyValueStore`` and keeps the access token fresh with a cancellable
``RefreshScheduler``.  Logout bumps a generation counter so a refresh that
was already in flight cannot resurrect the session.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from typing import TypeVar

from wms.application.ports import AuthGateway, AuthTokens, KeyValueStore, LoginResult, User
from wms.domain.exceptions import AuthError, NetworkError, ValidationError

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
USER_KEY = "user"

DEFAULT_REFRESH_LEAD_SECONDS = 300
RESTORED_EXPIRES_IN = 24 * 60 * 60
MIN_REFRESH_DELAY = 1.0

T = TypeVar("T")


class RefreshScheduler:
    """Runs a single pending callback after a delay; rescheduling replaces it."""

    def __init__(self, timer_factory: Callable[..., threading.Timer] = threading.Timer) -> None:
        self._timer_factory = timer_factory
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(delay, callback)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None and self._timer.is_alive()


def refresh_delay(expires_in: int, lead_seconds: int) -> float:
    """Seconds to wait before refreshing a token that expires in ``expires_in``."""
    if expires_in > lead_seconds:
        return float(expires_in - lead_seconds)
    return max(expires_in / 2, MIN_REFRESH_DELAY)


class AuthService:

    def __init__(
        self,
        gateway: AuthGateway,
        storage: KeyValueStore,
        scheduler: RefreshScheduler | None = None,
        refresh_lead_seconds: int = DEFAULT_REFRESH_LEAD_SECONDS,
    ) -> None:
        self._gateway = gateway
        self._storage = storage
        self._scheduler = scheduler or RefreshScheduler()
        self._lead = refresh_lead_seconds
        self._lock = threading.RLock()
        self._generation = 0
        self._tokens: AuthTokens | None = None
        self._user: User | None = None

    # --- State ----------------------------------------------------------------

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def access_token(self) -> str | None:
        return self._tokens.access_token if self._tokens else None

    @property
    def is_authenticated(self) -> bool:
        return self._tokens is not None and self._user is not None

    # --- Lifecycle ------------------------------------------------------------

    def restore(self) -> bool:
        """Load a persisted session and check it against the server.

        A session that can't be verified because the server is unreachable
        is kept as is; one the server rejects is cleared.
        """
        access = self._storage.get(ACCESS_TOKEN_KEY)
        refresh = self._storage.get(REFRESH_TOKEN_KEY)
        raw_user = self._storage.get(USER_KEY)
        if not (access and refresh and raw_user):
            return False

        try:
            user = User.from_dict(json.loads(raw_user))
        except (ValueError, KeyError, TypeError):
            logger.warning("stored user record is unreadable, clearing session")
            self._clear_storage()
            return False

        with self._lock:
            self._generation += 1
            self._tokens = AuthTokens(access, refresh, RESTORED_EXPIRES_IN)
            self._user = user
        self._schedule_refresh(RESTORED_EXPIRES_IN)

        try:
            current = self.call_authorized(self._gateway.me)
        except AuthError:
            logger.info("stored session was rejected by the server")
            return False
        except NetworkError as exc:
            logger.warning("could not verify stored session: %s", exc)
            return True

        with self._lock:
            self._user = current
            self._storage.set(USER_KEY, json.dumps(current.to_dict()))
        return True

    def login(self, email: str, password: str) -> User:
        if not email or not email.strip():
            raise ValidationError("Email is required")
        if not password:
            raise ValidationError("Password is required")

        result = self._gateway.login(email.strip(), password)
        with self._lock:
            self._generation += 1
            self._apply(result)
        logger.info("signed in as %s", result.user.email)
        return result.user

    def refresh(self) -> bool:
        """Exchange the refresh token for a new pair.

        Returns False when there is nothing to refresh, the server is
        unreachable, or the session ended while the request was in flight.
        A rejected refresh token ends the session.
        """
        with self._lock:
            generation = self._generation
            token = self._tokens.refresh_token if self._tokens else None
        if not token:
            return False

        try:
            result = self._gateway.refresh_token(token)
        except AuthError:
            if self._end_session(generation):
                logger.info("refresh token rejected, signed out")
            else:
                logger.info("ignoring rejected refresh from a session that already ended")
            return False
        except NetworkError as exc:
            logger.warning("token refresh failed: %s", exc)
            return False

        with self._lock:
            if generation != self._generation:
                logger.info("discarding token refresh that completed after sign-out")
                return False
            self._apply(result)
        logger.debug("access token refreshed")
        return True

    def logout(self) -> None:
        self._end_session()

    def call_authorized(self, fn: Callable[..., T], *args, **kwargs) -> T:
        """Call ``fn``; on AuthError refresh once and retry, else sign out."""
        with self._lock:
            generation = self._generation
        try:
            return fn(*args, **kwargs)
        except AuthError:
            if not self.refresh():
                if self.is_authenticated:
                    self._end_session(generation)
                raise
        return fn(*args, **kwargs)

    # --- Internal helpers -----------------------------------------------------

    def _end_session(self, generation: int | None = None) -> bool:
        """Clear the session, unless ``generation`` names one that already ended."""
        with self._lock:
            if generation is not None and generation != self._generation:
                return False
            self._generation += 1
            self._scheduler.cancel()
            token = self._tokens.refresh_token if self._tokens else None
            self._tokens = None
            self._user = None
            self._clear_storage()

        if token:
            try:
                self._gateway.logout(token)
            except (AuthError, NetworkError) as exc:
                logger.warning("server-side logout failed: %s", exc)
        logger.info("signed out")
        return True

    def _apply(self, result: LoginResult) -> None:
        self._tokens = result.tokens
        self._user = result.user
        self._storage.set(ACCESS_TOKEN_KEY, result.tokens.access_token)
        self._storage.set(REFRESH_TOKEN_KEY, result.tokens.refresh_token)
        self._storage.set(USER_KEY, json.dumps(result.user.to_dict()))
        self._schedule_refresh(result.tokens.expires_in)

    def _schedule_refresh(self, expires_in: int) -> None:
        self._scheduler.schedule(refresh_delay(expires_in, self._lead), self._scheduled_refresh)

    def _scheduled_refresh(self) -> None:
        try:
            self.refresh()
        except Exception:
            logger.exception("scheduled token refresh failed")

    def _clear_storage(self) -> None:
        for key in (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, USER_KEY):
            self._storage.remove(key)
