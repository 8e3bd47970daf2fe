"""
Account Workflow

Signup, login and password recovery. Recovery relies on the security
password chosen at signup; there is no email verification step.
"""
import logging

from notehub.core.errors import (
    DuplicateEmail,
    InvalidCredentials,
    InvalidInput,
    InvalidSecurityPass,
    UserNotFound,
)
from notehub.core.security import hash_secret, verify_secret
from notehub.models.user import User

logger = logging.getLogger("uvicorn.error")


def user_summary(u: User, with_stats: bool = True) -> dict:
    """Fields safe to return to clients; credentials are never included."""
    data = {"id": str(u.id), "username": u.username, "email": u.email}
    if with_stats:
        data["credits"] = u.credits
        data["uploadCount"] = u.upload_count
    return data


async def get_user_by_email(email: str) -> User:
    u = await User.get_or_none(email=email)
    if not u:
        raise UserNotFound()
    return u


async def email_exists(email: str) -> bool:
    return await User.filter(email=email).exists()


async def signup(username: str, email: str, password: str, security_pass: str) -> User:
    """
    Create an account.

    Raises:
        InvalidInput: A required field is blank
        DuplicateEmail: The email is already registered
    """
    if not username or not email or not password or not security_pass:
        raise InvalidInput("username, email, password and securityPass are required")
    if await email_exists(email):
        raise DuplicateEmail()
    u = await User.create(
        username=username,
        email=email,
        password=hash_secret(password),
        security_pass=hash_secret(security_pass),
        verified=True,  # No email confirmation step
    )
    logger.info("[accounts] signup -> %s", u.email)
    return u


async def verify_security_pass(email: str, security_pass: str) -> None:
    u = await get_user_by_email(email)
    if not verify_secret(security_pass, u.security_pass):
        raise InvalidSecurityPass()


async def login(email: str, password: str) -> User:
    u = await User.get_or_none(email=email)
    if not u:
        raise UserNotFound("No account found. Please sign up first.")
    if not verify_secret(password, u.password):
        raise InvalidCredentials()
    return u


async def update_password(email: str, new_password: str) -> None:
    """
    Overwrite the login password.

    The caller is expected to have passed ``verify_security_pass`` first;
    this operation does not check it.
    """
    u = await get_user_by_email(email)
    if not new_password:
        raise InvalidInput("newPassword is required")
    u.password = hash_secret(new_password)
    await u.save(update_fields=["password"])
