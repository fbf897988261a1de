from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from typing import Any, Dict, List

from iot_monitor.database import get_db
from iot_monitor.services.users import UserService
from iot_monitor.schemas.user import UserResponse, UserDeleted
from iot_monitor.schemas.device import DeviceResponse

router = APIRouter(prefix="/api/v1/users", tags=["users"])

@router.get("/", response_model=List[UserResponse])
async def list_users(db: Session = Depends(get_db)):
    """Get all users"""
    return UserService(db).find_all()

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: Session = Depends(get_db)):
    """Get user by sequential ID"""
    return UserService(db).find_one(user_id)

@router.get("/{user_id}/devices", response_model=List[DeviceResponse])
async def get_user_devices(user_id: int, db: Session = Depends(get_db)):
    """Get the devices owned by a user"""
    return UserService(db).find_devices(user_id)

@router.post("/", response_model=UserResponse, status_code=201)
async def create_user(data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """Create new user"""
    return UserService(db).create(data)

@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(user_id: int, data: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """Partially update a user"""
    return UserService(db).update(user_id, data)

@router.delete("/{user_id}", response_model=UserDeleted)
async def delete_user(user_id: int, db: Session = Depends(get_db)):
    """Delete a user without devices"""
    user = UserService(db).delete(user_id)
    return {"message": "Usuario eliminado correctamente", "user": user}
