from pydantic import BaseModel
from typing import Optional


class AuthUser(BaseModel):
    id: str
    college_id: Optional[str] = None
    contact: Optional[str] = None
    role: str = "student"
    batch: Optional[str] = None
    department: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


class MeResponse(BaseModel):
    success: bool = True
    user: AuthUser
