"""Users API routes."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from portal.actions import user_actions
from portal.core.page_cache import USERS_PATH, page_cache
from portal.database import get_db
from portal.schemas.user import UserActionResult, UserResponse, UserUpsert
from portal.services import user_service

router = APIRouter()


@router.get("", response_model=List[UserResponse])
async def list_users(
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Get all users."""
    async def load():
        users = await user_service.get_users(db)
        return [UserResponse.from_user(user).to_document() for user in users]

    return await page_cache.get_or_load(USERS_PATH, request.url.query, load)


@router.post("", response_model=UserActionResult)
async def create_or_update_user(
    data: UserUpsert,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create a user, or update it when an id is given."""
    result = await user_actions.create_or_update_user_action(db, data)
    if not result.success:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a user by ID."""
    user = await user_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return UserResponse.from_user(user)
