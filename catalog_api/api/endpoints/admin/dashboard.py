from fastapi import APIRouter

from catalog_api.api.deps import DB
from catalog_api.services.dashboard_service import DashboardService


router = APIRouter(tags=["Admin Dashboard"])


@router.get("")
async def get_dashboard_stats(db: DB):
    """
    Dashboard statistics: overview counters with 30-day growth, enquiry
    status breakdowns, daily enquiry trends, top categories by product
    count and the most recent activity.
    """
    stats = await DashboardService(db).get_stats()
    return {"success": True, "data": stats}
