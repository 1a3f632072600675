"""Custom user manager handling bcrypt hashing and verification."""

import uuid

import bcrypt
from django.contrib.auth.base_user import BaseUserManager

# bcrypt only reads this many bytes; newer releases raise instead of truncating.
BCRYPT_MAX_BYTES = 72


def _password_bytes(raw_password: str) -> bytes:
    return raw_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class UserManager(BaseUserManager):
    """Manager to create users with bcrypt password hashes."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields):
        if not email:
            raise ValueError("The Email must be set")
        email = email.strip().lower()
        username = (extra_fields.pop("username", None) or email.split("@", 1)[0]).strip().lower()
        extra_fields.setdefault("display_name", username)
        user = self.model(id=uuid.uuid4(), email=email, username=username, **extra_fields)
        user.password_hash = self.hash_password(password) if password else ""
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields):
        """Create a regular user with bcrypt-hashed password."""
        extra_fields.setdefault("role", "user")
        if password is None:
            raise ValueError("Password must be provided")
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str, **extra_fields):
        """Create an admin account; used by ``createsuperuser`` and the seed command."""
        extra_fields.setdefault("role", "admin")
        extra_fields.setdefault("is_active", True)
        if extra_fields.get("role") != "admin":
            raise ValueError("Superuser must have role='admin'.")
        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def hash_password(raw_password: str) -> str:
        """Hash a raw password using bcrypt and return the utf-8 string."""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(_password_bytes(raw_password), salt)
        return hashed.decode()

    @staticmethod
    def verify_password(user, raw_password: str) -> bool:
        """Verify raw password against stored bcrypt hash.

        Accounts created through a social provider have no password hash and
        never verify.
        """

        if not user.password_hash:
            return False
        return bcrypt.checkpw(_password_bytes(raw_password), user.password_hash.encode("utf-8"))


__all__ = ["UserManager"]
