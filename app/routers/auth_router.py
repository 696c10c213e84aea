# /app/routers/auth_router.py

"""
This module defines the public-facing API for all authentication-related actions.

It includes endpoints for:
- User registration (`/register`)
- User login and token generation (`/token`)
- The current session, or a null user when signed out (`/session`)
- Signing out and revoking the current token (`/logout`)
- Reading and updating the current user's profile (`/me`)
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

# --- Application-specific Imports ---
from ..core.deps import get_current_session, get_optional_session, get_session_manager
from ..models.user_model import SessionResponse, Token, User, UserCreate, UserUpdate
from ..services import auth_service
from ..services.auth_service import SessionManager, UserSession
from ..services.database_service import DatabaseService, get_db_service

# --- Router Initialization ---
router = APIRouter()


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register_user(user_in: UserCreate, db: DatabaseService = Depends(get_db_service)):
    """Creates an account and its profile in one step."""
    try:
        return auth_service.create_user(db=db, user=user_in)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: DatabaseService = Depends(get_db_service),
    manager: SessionManager = Depends(get_session_manager),
):
    """OAuth2 password flow: the email goes in the `username` field."""
    session = manager.sign_in(db, email=form_data.username, password=form_data.password)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=session.access_token, token_type="bearer", expires_at=session.expires_at)


@router.get("/session", response_model=SessionResponse)
def read_session(session: Optional[UserSession] = Depends(get_optional_session)):
    if session is None:
        return SessionResponse()
    return SessionResponse(user=User.model_validate(session.user), expires_at=session.expires_at)


@router.post("/logout")
def logout(
    session: UserSession = Depends(get_current_session),
    db: DatabaseService = Depends(get_db_service),
    manager: SessionManager = Depends(get_session_manager),
):
    manager.sign_out(db, session)
    return {"success": True, "message": "Logged out successfully"}


@router.get("/me", response_model=User)
def read_current_user(session: UserSession = Depends(get_current_session)):
    return session.user


@router.patch("/me", response_model=User)
def update_current_user(
    profile_update: UserUpdate,
    session: UserSession = Depends(get_current_session),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return auth_service.update_profile(db=db, user=session.user, profile_update=profile_update)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
