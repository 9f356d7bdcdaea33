"""Profile selector endpoints: registration, login and logout."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from cal_ai.api.dependencies import get_container
from cal_ai.api.models import LoginRequest, RegisterRequest
from cal_ai.containers import AppContainer
from cal_ai.domain.models import UserData
from cal_ai.domain.profile import UserProfile

router = APIRouter(tags=["users"])


@router.get("/users")
async def list_users(
    container: AppContainer = Depends(get_container),
) -> list[UserProfile]:
    """Return every registered profile."""
    return container.registry.users()


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def register_user(
    body: RegisterRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    """Create a user and make it the active one."""
    return container.tracker.register(
        body.profile.to_profile_data(), body.current_weight
    )


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str, container: AppContainer = Depends(get_container)
) -> Response:
    if not container.registry.delete_user(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/session")
async def get_session(
    container: AppContainer = Depends(get_container),
) -> dict[str, str | None]:
    return {"user_id": container.registry.current_user_id}


@router.post("/session")
async def login(
    body: LoginRequest, container: AppContainer = Depends(get_container)
) -> UserData:
    """Switch the active user."""
    if not container.registry.login(body.user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    user = container.registry.current_user()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return user


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
async def logout(container: AppContainer = Depends(get_container)) -> Response:
    container.registry.logout()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
