from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_admin_registry, get_admin_session
from app.api.schemas.auth import LoginRequest, TokenResponse
from app.models.admin_session import AdminSession, AdminSessionPublic
from app.services.auth_service import (
    AdminSessionRegistry,
    login_admin,
    logout_admin,
    session_to_public,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    registry: AdminSessionRegistry = Depends(get_admin_registry),
) -> TokenResponse:
    result = login_admin(registry, body.email, body.password)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    _, token, expires_in = result
    return TokenResponse(access_token=token, expires_in=expires_in)


@router.post("/logout")
async def logout(
    session: AdminSession = Depends(get_admin_session),
    registry: AdminSessionRegistry = Depends(get_admin_registry),
) -> dict:
    logout_admin(registry, session.session_id)
    return {"message": "Logged out"}


@router.get("/me", response_model=AdminSessionPublic)
async def me(session: AdminSession = Depends(get_admin_session)) -> AdminSessionPublic:
    return session_to_public(session)
