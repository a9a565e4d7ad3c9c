from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from .deps import get_current_user
from .schemas import AuthUser, MeResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=MeResponse)
async def me(user: AuthUser = Depends(get_current_user)):
    return MeResponse(user=user)


@router.get("/test")
async def auth_test(user: AuthUser = Depends(get_current_user)):
    return {
        "success": True,
        "message": "Authentication successful!",
        "user": user.college_id,
        "role": user.role,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
