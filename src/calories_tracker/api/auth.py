"""Account endpoints backed by the local user store."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from calories_tracker.api.request_models import LoginRequest, SignupRequest
from calories_tracker.domain.errors import DuplicateEmailError, InvalidCredentialsError

if TYPE_CHECKING:
    from calories_tracker.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup")
def signup(payload: SignupRequest, request: Request) -> dict[str, object]:
    """Create an account and sign it in."""
    container: AppContainer = request.app.state.container
    try:
        user = container.auth_service.signup(
            payload.name, payload.email, payload.password
        )
    except DuplicateEmailError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return {"user": asdict(user)}


@router.post("/login")
def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Sign in with email and password."""
    container: AppContainer = request.app.state.container
    try:
        user = container.auth_service.login(payload.email, payload.password)
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)
        ) from exc
    return {"user": asdict(user)}


@router.post("/logout")
def logout(request: Request) -> dict[str, str]:
    """Clear the signed-in user."""
    container: AppContainer = request.app.state.container
    container.auth_service.logout()
    return {"status": "ok"}


@router.get("/me")
def me(request: Request) -> dict[str, object]:
    """Return the signed-in user, or null."""
    container: AppContainer = request.app.state.container
    user = container.auth_service.current_user()
    return {"user": asdict(user) if user is not None else None}
