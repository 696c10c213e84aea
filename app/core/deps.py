# /app/core/deps.py

"""FastAPI dependencies that resolve the caller's session and enforce roles."""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from ..models.user_model import UserRole
from ..services.auth_service import SessionManager, UserSession
from ..services.database_service import DatabaseService, get_db_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)


def get_session_manager(request: Request) -> SessionManager:
    """The application-scoped SessionManager created in the lifespan handler."""
    return request.app.state.session_manager


def get_current_session(
    token: str = Depends(oauth2_scheme),
    db: DatabaseService = Depends(get_db_service),
    manager: SessionManager = Depends(get_session_manager),
) -> UserSession:
    session = manager.get_session(db, token)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def get_optional_session(
    token: Optional[str] = Depends(optional_oauth2_scheme),
    db: DatabaseService = Depends(get_db_service),
    manager: SessionManager = Depends(get_session_manager),
) -> Optional[UserSession]:
    if not token:
        return None
    return manager.get_session(db, token)


def require_role(*roles: UserRole):
    """Dependency factory that checks the session's role is one of `roles`."""
    allowed = {role.value for role in roles}

    def checker(session: UserSession = Depends(get_current_session)) -> UserSession:
        if session.role not in allowed:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return session

    return checker
