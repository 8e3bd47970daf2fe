# notehub/core/security.py
"""
Security module for credential storage.
Handles hashing and verification of login passwords and security passwords.
"""
from passlib.context import CryptContext

# Password hashing context
# Argon2 is a modern, secure password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)


def hash_secret(plain: str) -> str:
    """
    Hash a plain text secret (login password or security password) using Argon2.

    Args:
        plain: Plain text secret to hash

    Returns:
        Hashed string (safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_secret(plain: str, hashed: str) -> bool:
    """
    Verify a plain text secret against a stored hash.

    Comparison is exact and case-sensitive, the same contract as comparing
    the plain values directly.

    Args:
        plain: Plain text secret supplied by the client
        hashed: Hash read from the database

    Returns:
        True if the secret matches, False otherwise
    """
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)
