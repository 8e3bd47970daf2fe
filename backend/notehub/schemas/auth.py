"""
Pydantic schemas for account endpoints.
Defines request/response models for signup, login and password recovery.
"""
from pydantic import BaseModel

__all__ = [
    "CheckEmailIn",
    "CheckEmailOut",
    "SignupIn",
    "VerifySecurityPassIn",
    "LoginIn",
    "UpdatePasswordIn",
    "UserOut",
    "UserProfileOut",
    "MessageOut",
]


class CheckEmailIn(BaseModel):
    email: str


class CheckEmailOut(BaseModel):
    exists: bool


class SignupIn(BaseModel):
    """
    Request model for account creation.
    The security password is the only way to recover the account later.
    """
    username: str
    email: str  # Institutional address; the domain is checked by the client
    password: str
    securityPass: str


class VerifySecurityPassIn(BaseModel):
    email: str
    securityPass: str


class LoginIn(BaseModel):
    email: str
    password: str  # Compared exactly (case-sensitive)


class UpdatePasswordIn(BaseModel):
    email: str
    newPassword: str


class UserOut(BaseModel):
    """User information returned by signup and login; never includes credentials."""
    id: str
    username: str
    email: str
    credits: int | None = None
    uploadCount: int | None = None


class UserProfileOut(BaseModel):
    username: str
    email: str
    credits: int
    uploadCount: int


class MessageOut(BaseModel):
    message: str
