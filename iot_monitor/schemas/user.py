from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class UserResponse(BaseModel):
    id: int
    id_user: int = Field(alias="idUser")
    name: str
    email: str
    role: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
        populate_by_name = True

class UserDeleted(BaseModel):
    message: str
    user: UserResponse
