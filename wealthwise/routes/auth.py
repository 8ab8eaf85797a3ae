"""Authentication routes."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from wealthwise.core.dependencies import get_user_store
from wealthwise.core.errors import DuplicateKeyError, StorageError
from wealthwise.core.security import get_password_hash, verify_password
from wealthwise.services.user_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


# Request/Response schemas
class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class UserResponse(BaseModel):
    name: str
    email: str


class LoginResponse(BaseModel):
    message: str
    user: UserResponse


def _error(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    content = {"message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


@router.post(
    "/signup",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def signup(
    request: Optional[SignupRequest] = None,
    store: UserStore = Depends(get_user_store),
):
    """
    Register a new user.

    - A missing body is treated as an empty object
    - Stores the bcrypt hash of the password, never the password itself
    - Duplicate emails are rejected with 400
    - Storage failures answer 500 "Server error"; any other exception is
      left to the app-wide handler
    """
    if request is None:
        request = SignupRequest()
    if not (request.name and request.email and request.password):
        return _error(status.HTTP_400_BAD_REQUEST, "All fields are required")

    try:
        # Check if user already exists
        if store.find_by_email(request.email):
            return _error(status.HTTP_400_BAD_REQUEST, "User already exists")

        store.create(
            name=request.name,
            email=request.email,
            password_hash=get_password_hash(request.password),
        )
    except DuplicateKeyError:
        # Lost the race against a concurrent signup for the same email
        return _error(status.HTTP_400_BAD_REQUEST, "User already exists")
    except StorageError as e:
        logger.exception("Signup error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error", str(e))

    logger.info("Registered new user %s", request.email)
    return MessageResponse(message="Registered Successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    request: Optional[LoginRequest] = None,
    store: UserStore = Depends(get_user_store),
):
    """
    Login with email and password.

    Returns the user's name and email; no token is issued. Storage failures
    answer 500 "Server error"; any other exception is left to the app-wide
    handler.
    """
    if request is None:
        request = LoginRequest()
    if not (request.email and request.password):
        return _error(status.HTTP_400_BAD_REQUEST, "Email and password are required")

    try:
        user = store.find_by_email(request.email)
    except StorageError as e:
        logger.exception("Login error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error", str(e))

    if not user:
        return _error(status.HTTP_400_BAD_REQUEST, "User not found")

    if not verify_password(request.password, user.password_hash):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid credentials")

    return LoginResponse(
        message="Login successful",
        user=UserResponse(name=user.name, email=user.email),
    )
