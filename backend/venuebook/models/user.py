"""
User profile and local credential.

Key design decisions:
- `id` is an opaque UUID string, stable for the life of the account
- `role` is fixed at creation; hotel accounts only come from admin provisioning
- Accounts are deactivated, never deleted
"""

from sqlalchemy import Column, String, Boolean, CheckConstraint

from venuebook.db.base import Base, TimestampMixin, new_id


class UserProfile(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone_number = Column(String(50), nullable=False, default="")
    role = Column(String(20), nullable=False, default="consumer", index=True)
    profile_image_url = Column(String(1024), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        CheckConstraint("role IN ('consumer', 'hotel', 'admin')", name="check_user_role"),
    )

    def __repr__(self) -> str:
        return f"<UserProfile(id={self.id}, email={self.email}, role={self.role})>"
