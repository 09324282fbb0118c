from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from typing import Any, Optional, Tuple
import logging

from .base import BaseService
from ..models.user import User
from ..core.exceptions import Unauthorized, ValidationError
from ..core.security import verify_password, get_password_hash, create_access_token
from ..schemas.auth import UserRegister, UserLogin
from ..schemas.validation import validate_or_raise
from ..utils.strings import title_case, lower_trim

logger = logging.getLogger(__name__)

class AuthService(BaseService):

    def find_by_email(self, email: str) -> User:
        return self.db.query(User).filter(
            func.lower(User.email) == lower_trim(email)
        ).first()

    def save_user(self, user: User, password: Optional[str] = None) -> User:
        """Normalize and persist a user, hashing password when one is given."""
        user.name = title_case(user.name)
        user.email = lower_trim(user.email)
        if password is not None:
            user.password_hash = get_password_hash(password)
        self.db.add(user)
        self._commit(user)
        return user

    def register_user(self, payload: Any) -> Tuple[User, str]:
        """Register a new user and issue a session token."""
        user_data = validate_or_raise(UserRegister, payload)

        # Check if user already exists
        if self.find_by_email(user_data.email):
            raise ValidationError("Email already registered")

        new_user = User(
            name=user_data.name,
            email=user_data.email,
            role=user_data.role,
            phone=user_data.phone,
        )
        try:
            self.save_user(new_user, password=user_data.password)
        except IntegrityError:
            raise ValidationError("Email already registered")

        logger.info(f"Registered user {new_user.id} with role {new_user.role.value}")
        return new_user, create_access_token(new_user.id)

    def authenticate_user(self, payload: Any) -> Tuple[User, str]:
        """Check credentials and issue a session token."""
        login_data = validate_or_raise(UserLogin, payload)

        user = self.find_by_email(login_data.email)
        if not user or not verify_password(login_data.password, user.password_hash):
            logger.info("Failed login attempt")
            raise Unauthorized("Invalid credentials")

        logger.info(f"User {user.id} logged in")
        return user, create_access_token(user.id)
