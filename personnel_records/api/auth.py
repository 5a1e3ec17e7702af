"""
Authentication API endpoints.

Login is public. Registration is restricted to admins: there
is no self sign-up.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from personnel_records.api.deps import get_token_service, require_admin
from personnel_records.exceptions import ConflictError, InvalidCredentialsError
from personnel_records.models.base import get_db
from personnel_records.models.user import User
from personnel_records.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    RegisteredUser,
    UserSummary,
)
from personnel_records.services.auth_service import AuthService
from personnel_records.services.token_service import TokenService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange email and password for a 24-hour bearer token."""
    service = AuthService(db)
    try:
        user = service.authenticate(request.email, request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return LoginResponse(
        token=tokens.issue(user.id),
        user=UserSummary(
            id=user.id,
            username=user.username,
            email=user.email,
            is_admin=user.is_admin,
        ),
    )


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    request: RegisterRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Create a staff account (admin only)."""
    service = AuthService(db)
    try:
        user = service.register(
            username=request.username,
            email=request.email,
            password=request.password,
            is_admin=request.is_admin,
        )
        db.commit()
    except ConflictError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    return RegisterResponse(user=RegisteredUser.model_validate(user))
