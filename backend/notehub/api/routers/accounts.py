# notehub/api/routers/accounts.py
from fastapi import APIRouter

from notehub.core.errors import db_errors
from notehub.schemas.auth import (
    CheckEmailIn,
    CheckEmailOut,
    LoginIn,
    MessageOut,
    SignupIn,
    UpdatePasswordIn,
    UserProfileOut,
    VerifySecurityPassIn,
)
from notehub.services import account_service
from notehub.services.account_service import user_summary

router = APIRouter(tags=["accounts"])


@router.post("/check-email", response_model=CheckEmailOut)
async def check_email(body: CheckEmailIn):
    """
    Check whether an email is already registered.

    Used by the signup form before creating the account and by the reset
    flow before asking for the security password.

    Returns:
        dict: {"exists": bool}

    Raises:
        PersistenceError (500): If the database cannot be reached
    """
    with db_errors("Error checking email"):
        exists = await account_service.email_exists(body.email)
    return {"exists": exists}


@router.post("/signup")
async def signup(body: SignupIn):
    """
    Register a new account.

    The account is verified immediately (there is no email confirmation).
    Both the password and the security password are stored as hashes.

    Returns:
        dict: message plus the new user's id, username and email

    Error codes:
        - BAD_REQUEST (400): A required field is blank
        - EMAIL_EXISTS (400): Email already registered
    """
    with db_errors("Failed to create account"):
        u = await account_service.signup(body.username, body.email, body.password, body.securityPass)
    return {
        "message": "Account created successfully! Remember your security password for account recovery.",
        "user": user_summary(u, with_stats=False),
    }


@router.post("/verify-security-pass", response_model=MessageOut)
async def verify_security_pass(body: VerifySecurityPassIn):
    """
    First step of password recovery: check the security password.

    Error codes:
        - USER_NOT_FOUND (404)
        - INVALID_SECURITY_PASS (400)
    """
    with db_errors("Security password verification failed"):
        await account_service.verify_security_pass(body.email, body.securityPass)
    return {"message": "Security password verified successfully"}


@router.post("/login")
async def login(body: LoginIn):
    """
    Authenticate with email and password.

    Returns:
        dict: message plus id, username, email, credits and uploadCount

    Error codes:
        - USER_NOT_FOUND (404): No account with this email
        - AUTH_INVALID_CREDENTIALS (401): Wrong password
    """
    with db_errors("Internal server error."):
        u = await account_service.login(body.email, body.password)
    return {"message": "Login successful!", "user": user_summary(u)}


@router.get("/user/{email}", response_model=UserProfileOut)
async def get_user(email: str):
    """Profile numbers shown on the profile page."""
    with db_errors("Error fetching user data"):
        u = await account_service.get_user_by_email(email)
    return {"username": u.username, "email": u.email, "credits": u.credits, "uploadCount": u.upload_count}


@router.post("/update-password", response_model=MessageOut)
async def update_password(body: UpdatePasswordIn):
    """
    Set a new password after the security password was verified.

    Note:
        This endpoint does not re-check the security password; the client
        calls /verify-security-pass first.
    """
    with db_errors("Error updating password."):
        await account_service.update_password(body.email, body.newPassword)
    return {"message": "Password updated successfully!"}
