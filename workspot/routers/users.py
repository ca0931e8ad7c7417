from fastapi import APIRouter, Depends

from workspot.core.security import get_current_user
from workspot.models.user import User, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)):
    return current_user
