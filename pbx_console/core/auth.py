"""
Password hashing and temporary password utilities
"""

from passlib.context import CryptContext
from typing import Optional
import secrets

from pbx_console.core.config import get_settings

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Excludes look-alikes 0, O, 1, I and l
TEMP_PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789!?@#$"


def hash_password(password: str) -> str:
    """Salted one-way hash for storage"""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash"""
    if not password or not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def generate_temp_password(length: Optional[int] = None) -> str:
    """Random temporary password from TEMP_PASSWORD_ALPHABET"""
    length = length or settings.TEMP_PASSWORD_LENGTH
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))
