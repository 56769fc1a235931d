"""
User profile persistence.

Email uniqueness is checked by the services first, but the unique index on
users.email is what settles two concurrent sign-ups for the same address.
"""

from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from venuebook.core.errors import ConflictError
from venuebook.models.user import UserProfile
from venuebook.repositories.base import Repository
from venuebook.services.interfaces.change_feed import Collection

EMAIL_TAKEN = "Email already registered"


class ProfileRepository(Repository):
    collection = Collection.USERS

    async def get(self, user_id: str) -> Optional[UserProfile]:
        async with self._read() as session:
            return await session.get(UserProfile, user_id)

    async def get_by_email(self, email: str) -> Optional[UserProfile]:
        async with self._read() as session:
            result = await session.execute(
                select(UserProfile).where(func.lower(UserProfile.email) == email.lower())
            )
            return result.scalar_one_or_none()

    async def add(self, profile: UserProfile) -> UserProfile:
        """Raises ConflictError if the email was registered concurrently."""
        try:
            async with self._write() as session:
                session.add(profile)
                await session.flush()
                await session.refresh(profile)
        except IntegrityError as e:
            raise ConflictError(EMAIL_TAKEN) from e
        return profile

    async def update_fields(self, user_id: str, values: dict) -> Optional[UserProfile]:
        try:
            async with self._write() as session:
                profile = await session.get(UserProfile, user_id)
                if profile is None:
                    return None
                for field, value in values.items():
                    setattr(profile, field, value)
                await session.flush()
                await session.refresh(profile)
        except IntegrityError as e:
            # uq users.email: another account took the address first
            raise ConflictError(EMAIL_TAKEN) from e
        return profile

    async def list_by_role(self, role: str) -> list[UserProfile]:
        async with self._read() as session:
            result = await session.execute(
                select(UserProfile)
                .where(UserProfile.role == role)
                .order_by(UserProfile.created_at.desc())
            )
            return list(result.scalars().all())
