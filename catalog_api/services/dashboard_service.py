"""
Admin dashboard aggregation.

Everything the dashboard landing page shows is computed here in one call:
overview counters, enquiry status breakdowns, 30-day trends, products per
category and a merged recent activity feed.
"""
import logging
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.models.category import Category
from catalog_api.models.enquiry import ContactEnquiry, ProductEnquiry, EnquiryStatus
from catalog_api.models.navbar_category import NavbarCategory
from catalog_api.models.product import Product
from catalog_api.models.subcategory import SubCategory


logger = logging.getLogger(__name__)

TREND_DAYS = 30
TOP_CATEGORIES = 5
RECENT_PER_SOURCE = 5
RECENT_ACTIVITY = 8


def format_growth(current: int, previous: int) -> str:
    """
    Period-over-period growth as shown on the dashboard cards.

    format_growth(5, 10) -> "-50.0%"; with no previous activity the result
    is "+100%" when there is current activity and "+0%" otherwise.
    """
    if previous > 0:
        return f"{round((current - previous) / previous * 100, 1):+.1f}%"
    return "+100%" if current > 0 else "+0%"


class DashboardService:
    """Read-only statistics for the admin dashboard."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _count(self, model, *criteria) -> int:
        stmt = select(func.count(model.id))
        for criterion in criteria:
            stmt = stmt.where(criterion)
        return (await self.db.execute(stmt)).scalar() or 0

    async def _status_counts(self, model) -> Dict[str, int]:
        result = await self.db.execute(
            select(model.status, func.count(model.id)).group_by(model.status)
        )
        counts = {status.value: 0 for status in EnquiryStatus}
        for status, count in result.all():
            if status in counts:
                counts[status] = count
        counts["total"] = sum(counts.values())
        return counts

    async def _trend(self, model, since: datetime) -> List[Dict[str, Any]]:
        """Enquiries per calendar day since `since`, oldest day first; empty days omitted."""
        result = await self.db.execute(
            select(model.created_at).where(model.created_at >= since)
        )
        per_day = Counter(created_at.date().isoformat() for created_at in result.scalars())
        return [{"date": day, "count": per_day[day]} for day in sorted(per_day)]

    async def _growth(self, model, now: datetime) -> str:
        current_start = now - timedelta(days=TREND_DAYS)
        previous_start = now - timedelta(days=TREND_DAYS * 2)
        current = await self._count(model, model.created_at >= current_start)
        previous = await self._count(
            model,
            model.created_at >= previous_start,
            model.created_at < current_start,
        )
        return format_growth(current, previous)

    async def _products_by_category(self) -> List[Dict[str, Any]]:
        product_count = func.count(Product.id).label("count")
        result = await self.db.execute(
            select(Category.name, product_count)
            .join(Product, Product.category_id == Category.id)
            .group_by(Category.id, Category.name)
            .order_by(product_count.desc(), Category.name)
            .limit(TOP_CATEGORIES)
        )
        return [{"name": name, "count": count} for name, count in result.all()]

    async def _recent(self, model: Type) -> List[Any]:
        result = await self.db.execute(
            select(model).order_by(model.created_at.desc()).limit(RECENT_PER_SOURCE)
        )
        return list(result.scalars().all())

    async def _recent_activity(self) -> List[Dict[str, Any]]:
        events: List[Dict[str, Optional[Any]]] = []
        for product in await self._recent(Product):
            events.append({
                "type": "product",
                "title": product.name,
                "subtitle": None,
                "date": product.created_at,
            })
        for enquiry in await self._recent(ProductEnquiry):
            events.append({
                "type": "product_enquiry",
                "title": f"Enquiry for {enquiry.product_name}",
                "subtitle": f"by {enquiry.name}",
                "date": enquiry.created_at,
            })
        for enquiry in await self._recent(ContactEnquiry):
            events.append({
                "type": "contact_enquiry",
                "title": enquiry.subject,
                "subtitle": f"by {enquiry.name}",
                "date": enquiry.created_at,
            })
        events.sort(key=lambda event: event["date"], reverse=True)
        return events[:RECENT_ACTIVITY]

    async def get_stats(self) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        trend_start = now - timedelta(days=TREND_DAYS)

        total_products = await self._count(Product)
        active_products = await self._count(Product, Product.is_active == True)

        product_enquiries = await self._status_counts(ProductEnquiry)
        contact_enquiries = await self._status_counts(ContactEnquiry)

        total_categories = (
            await self._count(NavbarCategory)
            + await self._count(Category)
            + await self._count(SubCategory)
        )

        stats = {
            "overview": {
                "totalProducts": total_products,
                "activeProducts": active_products,
                "inactiveProducts": total_products - active_products,
                "totalProductEnquiries": product_enquiries["total"],
                "totalContactEnquiries": contact_enquiries["total"],
                "totalEnquiries": product_enquiries["total"] + contact_enquiries["total"],
                "totalCategories": total_categories,
                "productEnquiryGrowth": await self._growth(ProductEnquiry, now),
                "contactEnquiryGrowth": await self._growth(ContactEnquiry, now),
            },
            "enquiries": {
                "product": product_enquiries,
                "contact": contact_enquiries,
                "statusDistribution": {
                    status.value: product_enquiries[status.value] + contact_enquiries[status.value]
                    for status in EnquiryStatus
                },
            },
            "charts": {
                "productEnquiriesTrend": await self._trend(ProductEnquiry, trend_start),
                "contactEnquiriesTrend": await self._trend(ContactEnquiry, trend_start),
                "productsByCategory": await self._products_by_category(),
            },
            "recentActivity": await self._recent_activity(),
        }

        logger.debug("Dashboard stats computed: %s", stats["overview"])
        return stats
