# wanderai/api/users.py
"""In-memory user repository."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from werkzeug.security import check_password_hash, generate_password_hash

logger = logging.getLogger(__name__)

ROLES = ("user", "admin")


@dataclass
class User:
    id: str
    email: str
    name: str
    role: str
    password_hash: str = field(repr=False)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> dict:
        """Public representation; the password hash is never included."""
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "createdAt": self.created_at.isoformat(),
        }


class UserRepository:
    """Thread-safe user store backed by a list in process memory.

    Users do not survive a restart.
    """

    def __init__(self):
        self._users: List[User] = []
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Optional[User]:
        email = (email or "").strip().lower()
        with self._lock:
            return next((u for u in self._users if u.email == email), None)

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users if u.id == str(user_id)), None)

    def create(self, email: str, name: str, password: str, role: str = "user") -> User:
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role}")
        email = email.strip().lower()
        password_hash = generate_password_hash(password)
        with self._lock:
            if any(u.email == email for u in self._users):
                raise ValueError("An account with this email already exists")
            user = User(
                id=str(len(self._users) + 1),
                email=email,
                name=name,
                role=role,
                password_hash=password_hash,
            )
            self._users.append(user)
        logger.info(f"Created {role} account {user.id}")
        return user

    def list_all(self) -> List[User]:
        with self._lock:
            return list(self._users)

    def seed_demo_users(self) -> None:
        """Create the demo admin and user accounts if the store is empty."""
        if self.list_all():
            return
        self.create("admin@wanderai.com", "Admin User", "admin123", role="admin")
        self.create("user@wanderai.com", "Demo User", "password123")
        logger.info("Seeded demo users")


__all__ = ["User", "UserRepository", "ROLES"]
