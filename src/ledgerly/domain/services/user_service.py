"""User account service.

Covers self-registration, credential checks at login, admin user CRUD,
and the bootstrap admin account.
"""

import uuid
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.role import ADMIN_ROLE, USER_ROLE
from ledgerly.infrastructure.auth.password_hasher import (
    hash_password,
    needs_rehash,
    verify_password,
)
from ledgerly.infrastructure.persistence.models import UserModel
from ledgerly.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)

# Profile columns an admin may change directly
UPDATABLE_FIELDS = ("email", "first_name", "last_name", "company_name", "role", "is_active")


class UserService:
    """Service for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the user service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.user_repo = UserRepository(session)

    async def _insert(
        self,
        email: str,
        password: str,
        role: str,
        is_active: bool = True,
        first_name: str | None = None,
        last_name: str | None = None,
        company_name: str | None = None,
    ) -> UserModel:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")
        if not role or not role.strip():
            raise ValidationError("Role is required")

        try:
            if await self.user_repo.email_exists(email):
                raise ConflictError("User already exists")
            user = UserModel(
                id=str(uuid.uuid4()),
                email=email.lower(),
                password_hash=hash_password(password),
                role=role.strip(),
                is_active=is_active,
                first_name=first_name or None,
                last_name=last_name or None,
                company_name=company_name or None,
            )
            return await self.user_repo.create(user)
        except IntegrityError as e:
            raise ConflictError("User already exists") from e
        except SQLAlchemyError as e:
            logger.error("Failed to create user", email=email, error=str(e))
            raise PersistenceError("Failed to create user") from e

    async def register(
        self,
        email: str,
        password: str,
        company_name: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> UserModel:
        """Self-register a new account. Self-registered users always get the User role."""
        user = await self._insert(
            email=email,
            password=password,
            role=USER_ROLE,
            first_name=first_name,
            last_name=last_name,
            company_name=company_name,
        )
        logger.info("User registered", user_id=user.id, email=user.email)
        return user

    async def authenticate(self, email: str, password: str) -> UserModel:
        """Check credentials and record the login.

        Raises:
            AuthenticationError: For unknown email, wrong password, or an
                inactive account.
        """
        try:
            user = await self.user_repo.get_by_email((email or "").strip())
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch user") from e

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed", email=email)
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            logger.info("Login rejected for inactive account", user_id=user.id)
            raise AuthenticationError("Account is deactivated")

        try:
            if needs_rehash(user.password_hash):
                user.password_hash = hash_password(password)
            await self.user_repo.update_last_login(user.id)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to record login") from e

        logger.info("User logged in", user_id=user.id, role=user.role)
        return user

    async def list_users(self) -> list[UserModel]:
        try:
            return await self.user_repo.list_all()
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch users") from e

    async def get_user(self, user_id: str) -> UserModel:
        """Get a user by ID.

        Raises:
            NotFoundError: If no such user exists.
        """
        try:
            user = await self.user_repo.get_by_id(user_id)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch user") from e
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def create_user(
        self,
        email: str | None,
        password: str | None,
        role: str = USER_ROLE,
        is_active: bool = True,
        first_name: str | None = None,
        last_name: str | None = None,
        company_name: str | None = None,
    ) -> UserModel:
        """Create a user from the admin console.

        Raises:
            ValidationError: If email or password is missing.
            ConflictError: If the email is already registered.
        """
        user = await self._insert(
            email=email or "",
            password=password or "",
            role=role,
            is_active=is_active,
            first_name=first_name,
            last_name=last_name,
            company_name=company_name,
        )
        logger.info("User created", user_id=user.id, email=user.email, role=user.role)
        return user

    async def update_user(self, user_id: str, updates: Mapping[str, Any]) -> UserModel:
        """Apply admin edits to a user.

        Args:
            user_id: User to update.
            updates: Any of the updatable profile fields, plus 'password'.
                Keys with value None are ignored.

        Raises:
            ValidationError: If there is nothing to update.
            NotFoundError: If the user does not exist.
            ConflictError: If the new email belongs to another user.
        """
        changes = {
            key: value
            for key, value in updates.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        password = updates.get("password")
        if not changes and not password:
            raise ValidationError("No fields to update")
        if "role" in changes and not str(changes["role"]).strip():
            raise ValidationError("Role is required")
        if "email" in changes and not str(changes["email"]).strip():
            raise ValidationError("Email is required")

        user = await self.get_user(user_id)
        try:
            if "email" in changes:
                email = changes["email"].strip().lower()
                existing = await self.user_repo.get_by_email(email)
                if existing is not None and existing.id != user.id:
                    raise ConflictError("Email is already in use")
                changes["email"] = email
            for key, value in changes.items():
                setattr(user, key, value.strip() if key == "role" else value)
            if password:
                user.password_hash = hash_password(password)
            await self.session.flush()
            await self.session.refresh(user)
        except IntegrityError as e:
            raise ConflictError("Email is already in use") from e
        except SQLAlchemyError as e:
            logger.error("Failed to update user", user_id=user_id, error=str(e))
            raise PersistenceError("Failed to update user") from e

        logger.info(
            "User updated",
            user_id=user.id,
            fields=sorted(changes) + (["password"] if password else []),
        )
        return user

    async def delete_user(self, user_id: str, actor_id: str) -> None:
        """Delete a user.

        Raises:
            ValidationError: If an admin tries to delete their own account.
            NotFoundError: If the user does not exist.
        """
        if user_id == actor_id:
            raise ValidationError("Cannot delete your own account")

        user = await self.get_user(user_id)
        try:
            await self.user_repo.delete(user)
        except SQLAlchemyError as e:
            logger.error("Failed to delete user", user_id=user_id, error=str(e))
            raise PersistenceError("Failed to delete user") from e
        logger.info("User deleted", user_id=user_id, deleted_by=actor_id)

    async def ensure_admin(
        self,
        email: str,
        password: str,
        company_name: str | None = None,
    ) -> UserModel | None:
        """Create an Admin user unless the email is already registered.

        Returns:
            The new user, or None if a user with that email already exists.
        """
        try:
            if await self.user_repo.email_exists(email):
                return None
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to fetch user") from e

        return await self._insert(
            email=email,
            password=password,
            role=ADMIN_ROLE,
            company_name=company_name,
        )
