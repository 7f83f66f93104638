"""Authentication service: registration and login."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings
from ..core.exceptions import AuthenticationError, ValidationError
from ..core.observability import metrics_collector
from ..core.security import create_access_token, hash_password, verify_password
from ..models.user import User, UserType
from ..schemas.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Service for account creation and credential checks."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def get_user_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    def issue_token(self, user: User) -> str:
        return create_access_token(
            self.settings,
            user_id=user.id,
            email=user.email,
            user_type=UserType(user.user_type).value,
        )

    async def register(self, request: RegisterRequest) -> tuple[User, str]:
        """
        Create a user and issue a token.

        Args:
            request: Registration request

        Returns:
            The created user and its bearer token

        Raises:
            ValidationError: If the email is already registered
        """
        email = request.email.lower()
        if await self.get_user_by_email(email):
            logger.warning("Registration failed - email already registered", extra={"email": email})
            raise ValidationError("Email already registered", email=email)

        user = User(
            name=request.name,
            email=email,
            password_hash=await hash_password(request.password),
            user_type=request.user_type,
        )

        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except IntegrityError:
            # Concurrent registration with the same email
            await self.db.rollback()
            raise ValidationError("Email already registered", email=email)

        metrics_collector.record_user_registered(request.user_type.value)
        logger.info(
            "User registered",
            extra={"user_id": user.id, "user_type": request.user_type.value}
        )
        return user, self.issue_token(user)

    async def login(self, request: LoginRequest) -> tuple[User, str]:
        """
        Check credentials and issue a token.

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        user = await self.get_user_by_email(request.email)
        if not user or not await verify_password(request.password, user.password_hash):
            logger.info("Login failed", extra={"email": request.email.lower()})
            raise AuthenticationError("Invalid credentials")

        logger.info("User logged in", extra={"user_id": user.id})
        return user, self.issue_token(user)
