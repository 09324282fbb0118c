from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.responses import success_response
from ...api.deps import get_current_user
from ...services.dashboard_service import DashboardService
from ...models.user import User

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

@router.get("/stats")
def dashboard_stats(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Counters for the current user's dashboard."""
    stats = DashboardService(db).get_stats(current_user)
    return success_response(request, {"stats": stats}, "Dashboard statistics retrieved")
