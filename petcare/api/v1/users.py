from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.responses import success_response
from ...api.deps import get_current_user
from ...services.user_service import UserService
from ...schemas.auth import UserResponse, UserSummary
from ...models.user import User

router = APIRouter(prefix="/users", tags=["Users"])

@router.get("/veterinarians")
def list_veterinarians(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Veterinarians available for booking."""
    veterinarians = UserService(db).list_veterinarians()
    return success_response(
        request,
        {"veterinarians": [UserSummary.model_validate(vet) for vet in veterinarians]},
        "Veterinarians retrieved successfully",
    )

@router.get("")
def list_users(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List all users (admin only)."""
    users = UserService(db).list_users(current_user)
    return success_response(
        request,
        {"users": [UserResponse.model_validate(user) for user in users]},
        "Users retrieved successfully",
    )

@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete a user with no pets or appointments (admin only)."""
    UserService(db).delete_user(current_user, user_id)
    return success_response(request, None, "User deleted successfully")
