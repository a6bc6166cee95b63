# gymapp/repositories/user_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from gymapp.models import User
from gymapp.repositories.base import BaseRepository

PROFILE_FIELDS = frozenset({
    "username", "display_name", "avatar_url", "bio", "date_of_birth", "gender",
    "height_cm", "weight_kg", "unit_system", "fitness_goal", "experience_level",
})

class UserRepository(BaseRepository[User]):
    model = User

    # READS
    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_customer(self, customer_id: str) -> Optional[User]:
        stmt = select(User).where(User.stripe_customer_id == customer_id)
        return self.db.execute(stmt).scalars().first()

    # WRITES
    def create(self, *, email: str, username: str, password_hash: str) -> User:
        user = User(email=email, username=username, display_name=username, password_hash=password_hash)
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user
        except IntegrityError:
            self.db.rollback()
            # Re-raise a clean marker the router maps to 400
            raise ValueError("email_already_exists")

    def update_profile(self, user: User, **fields) -> User:
        unknown = set(fields) - PROFILE_FIELDS
        if unknown:
            raise TypeError(f"unknown profile fields: {', '.join(sorted(unknown))}")
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_subscription(self, user: User, **fields) -> User:
        """Billing columns only; called from checkout and webhook handling."""
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user
