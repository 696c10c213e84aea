# /app/services/auth_service.py

"""
Authentication and session handling.

Sign up, sign in and sign out go through here; the result of a successful
sign in or token check is a `UserSession`, a plain object that carries the
user profile and role and is passed explicitly to whatever needs to know who
is asking. Interested parts of the application can subscribe to sign-in and
sign-out events on the `SessionManager`, whose lifetime is bound to the
application's startup and shutdown.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, Optional

from jose import JWTError

from ..core import security
from ..core.utils import new_id
from ..models.user_model import UserCreate, UserRole, UserUpdate
from .database_service import DatabaseService

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


@dataclass
class UserSession:
    """The signed-in user's profile together with the token that proves it."""
    user: object
    access_token: str
    jti: str
    expires_at: datetime

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def role(self) -> str:
        return self.user.role


AuthListener = Callable[[AuthEvent, Optional[UserSession]], None]


# --- Accounts ---

def create_user(db: DatabaseService, user: UserCreate):
    """Registers a new account. Raises ValueError if the email is taken."""
    if db.get_user_by_email(user.email):
        raise ValueError("An account with this email already exists.")

    record = {
        "id": new_id("usr"),
        "email": user.email,
        "name": user.name,
        "role": user.role.value,
        # Only students belong to a home class.
        "class_id": user.class_id if user.role == UserRole.STUDENT else None,
        "hashed_password": security.get_password_hash(user.password),
        "is_active": True,
    }
    new_user = db.add_user(record)
    logger.info("Registered %s account %s", new_user.role, new_user.id)
    return new_user


def authenticate_user(db: DatabaseService, email: str, password: str):
    """The user with these credentials, or None."""
    user = db.get_user_by_email(email)
    if not user or not user.is_active:
        return None
    if not security.verify_password(password, user.hashed_password):
        return None
    return user


def update_profile(db: DatabaseService, user, profile_update: UserUpdate):
    update_data = profile_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValueError("No update data provided.")
    if "name" in update_data and update_data["name"] is None:
        raise ValueError("A name cannot be null.")
    if "class_id" in update_data and user.role != UserRole.STUDENT.value:
        raise ValueError("Only students can be assigned a home class.")
    return db.update_user(user.id, update_data)


def _expiry_from_claims(claims: dict) -> datetime:
    return datetime.fromtimestamp(claims["exp"], tz=timezone.utc).replace(tzinfo=None)


# --- Sessions ---

class SessionManager:
    def __init__(self):
        self._listeners: List[AuthListener] = []
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        """Called once at application startup."""
        if self._started:
            return
        self._started = True
        self.subscribe(_log_auth_event)
        logger.info("Session manager started")

    def shutdown(self) -> None:
        """Called once at application shutdown; drops every listener."""
        self._listeners.clear()
        self._started = False
        logger.info("Session manager stopped")

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Registers a listener for auth events and returns its unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: AuthEvent, session: Optional[UserSession]) -> None:
        for listener in list(self._listeners):
            listener(event, session)

    def sign_in(self, db: DatabaseService, email: str, password: str) -> Optional[UserSession]:
        user = authenticate_user(db, email, password)
        if user is None:
            return None

        token = security.create_access_token(subject=user.id)
        claims = security.decode_access_token(token)
        session = UserSession(user=user, access_token=token, jti=claims["jti"], expires_at=_expiry_from_claims(claims))
        self._notify(AuthEvent.SIGNED_IN, session)
        return session

    def get_session(self, db: DatabaseService, token: str) -> Optional[UserSession]:
        """Resolves a bearer token to a session; None if it is invalid, revoked or orphaned."""
        try:
            claims = security.decode_access_token(token)
        except JWTError:
            return None

        user_id = claims.get("sub")
        jti = claims.get("jti")
        if not user_id or not jti or db.is_token_revoked(jti):
            return None

        user = db.get_user_by_id(user_id)
        if user is None or not user.is_active:
            return None
        return UserSession(user=user, access_token=token, jti=jti, expires_at=_expiry_from_claims(claims))

    def sign_out(self, db: DatabaseService, session: UserSession) -> None:
        db.add_revoked_token(jti=session.jti, user_id=session.user_id, expires_at=session.expires_at)
        self._notify(AuthEvent.SIGNED_OUT, session)


def _log_auth_event(event: AuthEvent, session: Optional[UserSession]) -> None:
    user_id = session.user_id if session is not None else None
    logger.info("Auth event %s for user %s", event.value, user_id)
