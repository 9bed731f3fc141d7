"""Admin credential utilities: venue password hashing and the super-admin secret."""

import hmac

from passlib.context import CryptContext

from courtfinder.core.config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def is_password_hash(value: str) -> bool:
    """True if ``value`` is already a hash this context understands."""
    return pwd_context.identify(value) is not None


def check_admin_password(plain_password: str, stored: str) -> bool:
    """Match a login attempt against one venue's stored admin password.

    Rows written before hashing was introduced still hold plaintext; those
    are compared directly until ``scripts.hash_admin_passwords`` rewrites them.
    """
    if is_password_hash(stored):
        return verify_password(plain_password, stored)
    return hmac.compare_digest(plain_password.encode(), stored.encode())


def is_super_admin_secret(candidate: str | None, settings: Settings) -> bool:
    """Constant-time check against the configured super-admin secret.

    An empty configured secret disables super-admin access entirely.
    """
    if not candidate or not settings.super_admin_secret:
        return False
    return hmac.compare_digest(candidate.encode(), settings.super_admin_secret.encode())
