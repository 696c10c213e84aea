# /app/services/database_helpers/user_repository_sql.py

"""
Raw SQLAlchemy queries for the `users` and `revoked_tokens` tables.

User rows double as profiles: the auth service reads them after verifying a
password or a token, and the dashboards read them to resolve student names.
"""

from datetime import datetime
from typing import List, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.utils import new_id
from app.db.models.user_model import User, RevokedToken


class UserRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    # --- User Methods ---

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_users_by_ids(self, user_ids: List[str]) -> List[User]:
        if not user_ids:
            return []
        return self.db.query(User).filter(User.id.in_(user_ids)).all()

    def get_all_users(self) -> List[User]:
        return self.db.query(User).order_by(User.name).all()

    def get_users_by_role(self, role: str) -> List[User]:
        return self.db.query(User).filter(User.role == role).order_by(User.name).all()

    def get_students_by_class_id(self, class_id: str) -> List[User]:
        """Students whose profile names `class_id` as their home class."""
        return (
            self.db.query(User)
            .filter(User.role == "student", User.class_id == class_id)
            .order_by(User.name)
            .all()
        )

    def count_users_by_role(self, role: str) -> int:
        return self.db.query(func.count(User.id)).filter(User.role == role).scalar() or 0

    def add_user(self, record: Dict) -> User:
        new_user = User(**record)
        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)
        return new_user

    def update_user(self, user_id: str, data: Dict) -> Optional[User]:
        db_user = self.get_user_by_id(user_id)
        if db_user:
            for key, value in data.items():
                setattr(db_user, key, value)
            self.db.commit()
            self.db.refresh(db_user)
        return db_user

    # --- Revoked Token Methods ---

    def add_revoked_token(self, jti: str, user_id: str, expires_at: datetime) -> RevokedToken:
        revoked = RevokedToken(id=new_id("rvk"), jti=jti, user_id=user_id, expires_at=expires_at)
        self.db.add(revoked)
        self.db.commit()
        return revoked

    def is_token_revoked(self, jti: str) -> bool:
        return self.db.query(RevokedToken.id).filter(RevokedToken.jti == jti).first() is not None
