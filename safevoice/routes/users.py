"""
User management endpoints - dashboard staff and their roles.
"""

from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query, status
import logging

from safevoice.models.user import UserCreate, UserResponse, UserRole, UserUpdate
from safevoice.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
def list_users(role: Optional[UserRole] = Query(None, description="Only users with this role")):
    try:
        service = UserService()
        return service.get_by_role(role.value) if role else service.get_all()
    except Exception as e:
        logger.error(f"Failed to list users: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve users: {str(e)}")


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str):
    user = UserService().get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return user


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate):
    try:
        user_id = UserService().create(user.model_dump(mode="json"))
        return {"id": user_id}
    except Exception as e:
        logger.error(f"❌ User creation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"User creation failed: {str(e)}")


@router.patch("/{user_id}")
def update_user(user_id: str, user: UserUpdate):
    changes = user.model_dump(mode="json", exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    service = UserService()
    if service.get_by_id(user_id) is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    try:
        service.update(user_id, changes)
        return {"id": user_id, "updated_fields": sorted(changes)}
    except Exception as e:
        logger.error(f"❌ Update of user {user_id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"User update failed: {str(e)}")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: str):
    service = UserService()
    if service.get_by_id(user_id) is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    service.delete(user_id)
