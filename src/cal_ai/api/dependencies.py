"""Shared FastAPI dependencies."""

from fastapi import Depends, HTTPException, Request, status

from cal_ai.containers import AppContainer
from cal_ai.domain.models import UserData

NO_ACTIVE_USER = "No user is logged in."


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def require_current_user(
    container: AppContainer = Depends(get_container),
) -> UserData:
    """Resolve the active user or answer 409."""
    user = container.registry.current_user()
    if user is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=NO_ACTIVE_USER)
    return user


def updated_or_conflict(user: UserData | None) -> UserData:
    """Turn a dropped update into a 409 response."""
    if user is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=NO_ACTIVE_USER)
    return user
