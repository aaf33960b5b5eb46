from datetime import datetime, timedelta, timezone

import pytest

from catalog_api.models import ContactEnquiry, ProductEnquiry
from catalog_api.services.dashboard_service import format_growth


# ==================== growth math ====================

@pytest.mark.parametrize(
    "current, previous, expected",
    [
        (5, 0, "+100%"),
        (5, 10, "-50.0%"),
        (0, 0, "+0%"),
        (5, 4, "+25.0%"),
        (10, 10, "+0.0%"),
        (1, 3, "-66.7%"),
        (0, 7, "-100.0%"),
    ],
)
def test_format_growth(current, previous, expected):
    assert format_growth(current, previous) == expected


# ==================== aggregation ====================

def product_enquiry(days_ago: float, status: str = "pending", name: str = "Lead") -> ProductEnquiry:
    return ProductEnquiry(
        product_name="Switch-24",
        name=name,
        email="lead@acme-networks.com",
        mobile="0500000000",
        description="Quote please",
        status=status,
        created_at=datetime.now(timezone.utc) - timedelta(days=days_ago),
    )


def contact_enquiry(days_ago: float, status: str = "pending") -> ContactEnquiry:
    return ContactEnquiry(
        name="Visitor",
        email="visitor@acme-networks.com",
        subject="Hello",
        message="Question",
        status=status,
        created_at=datetime.now(timezone.utc) - timedelta(days=days_ago),
    )


async def test_empty_dashboard(admin_client):
    response = await admin_client.get("/api/admin/dashboard")
    assert response.status_code == 200
    data = response.json()["data"]

    assert data["overview"]["totalProducts"] == 0
    assert data["overview"]["productEnquiryGrowth"] == "+0%"
    assert data["overview"]["contactEnquiryGrowth"] == "+0%"
    assert data["charts"]["productEnquiriesTrend"] == []
    assert data["recentActivity"] == []


async def test_dashboard_counts_and_growth(admin_client, factory, db_session):
    tree = await factory.tree()
    await factory.product(tree["category"], name="Flex Mini", isActive=False)
    routers = await factory.category(tree["navbar"], "Routers")
    await factory.product(routers, name="Edge Router")

    # Product enquiries: 5 in the last 30 days, 10 in the 30 days before
    db_session.add_all([product_enquiry(1 + i, status="pending") for i in range(5)])
    db_session.add_all([product_enquiry(35 + i, status="resolved") for i in range(10)])
    # Contact enquiries: 3 current, none previously
    db_session.add_all([contact_enquiry(2, status="contacted") for _ in range(3)])
    # Outside both windows
    db_session.add(product_enquiry(90, status="contacted"))
    await db_session.commit()

    data = (await admin_client.get("/api/admin/dashboard")).json()["data"]
    overview = data["overview"]

    assert overview["totalProducts"] == 3
    assert overview["activeProducts"] == 2
    assert overview["inactiveProducts"] == 1
    assert overview["totalProductEnquiries"] == 16
    assert overview["totalContactEnquiries"] == 3
    assert overview["totalEnquiries"] == 19
    # navbar + 2 categories + 1 sub-category
    assert overview["totalCategories"] == 4
    assert overview["productEnquiryGrowth"] == "-50.0%"
    assert overview["contactEnquiryGrowth"] == "+100%"

    assert data["enquiries"]["product"] == {"pending": 5, "contacted": 1, "resolved": 10, "total": 16}
    assert data["enquiries"]["contact"] == {"pending": 0, "contacted": 3, "resolved": 0, "total": 3}
    assert data["enquiries"]["statusDistribution"] == {"pending": 5, "contacted": 4, "resolved": 10}


async def test_dashboard_trends_and_top_categories(admin_client, factory, db_session):
    tree = await factory.tree()
    await factory.product(tree["category"], name="Flex Mini")
    routers = await factory.category(tree["navbar"], "Routers")
    await factory.product(routers, name="Edge Router")

    db_session.add_all([product_enquiry(3), product_enquiry(3), product_enquiry(10), product_enquiry(45)])
    await db_session.commit()

    data = (await admin_client.get("/api/admin/dashboard")).json()["data"]

    trend = data["charts"]["productEnquiriesTrend"]
    assert [point["count"] for point in trend] == [1, 2]
    assert trend == sorted(trend, key=lambda point: point["date"])
    assert data["charts"]["contactEnquiriesTrend"] == []

    assert data["charts"]["productsByCategory"] == [
        {"name": "Switches", "count": 2},
        {"name": "Routers", "count": 1},
    ]


async def test_recent_activity_merges_sources(admin_client, factory, db_session):
    tree = await factory.tree()
    db_session.add_all([product_enquiry(0.01 * (i + 1), name=f"Lead {i}") for i in range(6)])
    db_session.add_all([contact_enquiry(0.5) for _ in range(6)])
    await db_session.commit()

    activity = (await admin_client.get("/api/admin/dashboard")).json()["data"]["recentActivity"]

    assert len(activity) == 8
    dates = [event["date"] for event in activity]
    assert dates == sorted(dates, reverse=True)
    # Only five candidates are taken per source
    assert sum(1 for event in activity if event["type"] == "product_enquiry") == 5
    assert activity[0]["type"] == "product"
    assert activity[0]["title"] == tree["product"]["name"]
    assert activity[1] == {
        "type": "product_enquiry",
        "title": "Enquiry for Switch-24",
        "subtitle": "by Lead 0",
        "date": activity[1]["date"],
    }
