"""
User record API routes
Four routes, each backed by a single statement in the users service.
"""

import logging
from typing import List
from fastapi import APIRouter, HTTPException, Response, status

from record_store.config import settings
from record_store.models.user import UserCreateRequest, UserUpdateRequest, UserResponse
from record_store.services.users_service import get_users_service

router = APIRouter()
logger = logging.getLogger(__name__)


def _raise_for_missing(user_id: int, count: int) -> None:
    if count == 0 and settings.REPORT_MISSING_RECORDS:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")


@router.get("", response_model=List[UserResponse])
async def list_users():
    """List every user record"""
    users_service = get_users_service()

    try:
        result = await users_service.list_users()

        if not result.success:
            raise HTTPException(status_code=500, detail=result.error)

        return [UserResponse(**row) for row in result.data]

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to list users: {e}")
        raise HTTPException(status_code=500, detail=f"Service error: {str(e)}")

@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: UserCreateRequest):
    """Create a user record"""
    users_service = get_users_service()

    try:
        result = await users_service.create_user(name=request.name, email=request.email)

        if not result.success:
            raise HTTPException(status_code=500, detail=result.error)

        return UserResponse(**result.data[0])

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to create user: {e}")
        raise HTTPException(status_code=500, detail=f"Service error: {str(e)}")

@router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: int, request: UserUpdateRequest):
    """Update name and email of a user record"""
    users_service = get_users_service()

    try:
        result = await users_service.update_user(user_id, name=request.name, email=request.email)

        if not result.success:
            raise HTTPException(status_code=500, detail=result.error)

        _raise_for_missing(user_id, result.count)
        return UserResponse(**result.data[0])

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update user: {e}")
        raise HTTPException(status_code=500, detail=f"Service error: {str(e)}")

@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int):
    """Delete a user record"""
    users_service = get_users_service()

    try:
        result = await users_service.delete_user(user_id)

        if not result.success:
            raise HTTPException(status_code=500, detail=result.error)

        _raise_for_missing(user_id, result.count)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete user: {e}")
        raise HTTPException(status_code=500, detail=f"Service error: {str(e)}")
