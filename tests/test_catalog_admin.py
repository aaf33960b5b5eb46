import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from catalog_api.core.exceptions import ConflictError
from catalog_api.models.navbar_category import NavbarCategory
from catalog_api.services.navbar_category_service import NavbarCategoryService


# ==================== NAVBAR CATEGORIES ====================

async def test_create_navbar_category_derives_slug(factory):
    navbar = await factory.navbar_category("  Wireless Access  ", description=" Wi-Fi gear ", order=2)

    assert navbar["name"] == "Wireless Access"
    assert navbar["slug"] == "wireless-access"
    assert navbar["description"] == "Wi-Fi gear"
    assert navbar["order"] == 2
    assert navbar["isActive"] is True
    assert "createdAt" in navbar and "updatedAt" in navbar


async def test_navbar_category_defaults(factory):
    navbar = await factory.navbar_category("Security")
    assert navbar["description"] == ""
    assert navbar["order"] == 0


async def test_navbar_category_name_is_required(admin_client):
    response = await admin_client.post("/api/admin/navbar-category", json={"name": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": "Name is required"}


async def test_navbar_category_duplicate_name_is_case_insensitive(admin_client, factory):
    await factory.navbar_category("Networking")
    response = await admin_client.post("/api/admin/navbar-category", json={"name": "NETWORKING"})
    assert response.status_code == 409
    assert response.json() == {"error": "Category with this name already exists"}


async def test_slug_collision_is_not_auto_suffixed(admin_client, factory):
    await factory.navbar_category("Wi-Fi")
    response = await admin_client.post("/api/admin/navbar-category", json={"name": "Wi Fi"})

    assert response.status_code == 409
    assert response.json() == {
        "error": 'A navbar category with the slug "wi-fi" already exists. Try a different name.'
    }
    listing = await admin_client.get("/api/admin/navbar-category")
    assert [n["slug"] for n in listing.json()["data"]] == ["wi-fi"]


async def test_name_without_alphanumerics_is_rejected(admin_client):
    response = await admin_client.post("/api/admin/navbar-category", json={"name": "!!!"})
    assert response.status_code == 400


async def test_rename_regenerates_slug(admin_client, factory):
    navbar = await factory.navbar_category("Networking")
    response = await admin_client.put(
        f"/api/admin/navbar-category/{navbar['id']}", json={"name": "Enterprise Networking"}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["slug"] == "enterprise-networking"
    assert response.json()["message"] == "Navbar category updated successfully"


async def test_admin_listing_orders_by_order_then_newest(admin_client, factory):
    await factory.navbar_category("B", order=1)
    await factory.navbar_category("A", order=0)
    await factory.navbar_category("C", order=1)

    response = await admin_client.get("/api/admin/navbar-category")
    names = [n["name"] for n in response.json()["data"]]
    assert names[0] == "A"
    assert set(names[1:]) == {"B", "C"}


# ==================== SLUG SCOPING ====================

async def test_same_category_name_allowed_in_different_navbars(factory):
    networking = await factory.navbar_category("Networking")
    security = await factory.navbar_category("Security")

    first = await factory.category(networking, "Accessories")
    second = await factory.category(security, "Accessories")

    assert first["slug"] == second["slug"] == "accessories"
    assert first["navbarCategory"]["slug"] == "networking"
    assert second["navbarCategory"]["slug"] == "security"


async def test_same_category_name_rejected_in_same_navbar(admin_client, factory):
    networking = await factory.navbar_category("Networking")
    await factory.category(networking, "Switches")

    response = await admin_client.post(
        "/api/admin/category",
        json={"name": "sWiTcHeS", "navbarCategory": networking["id"]},
    )
    assert response.status_code == 409
    assert response.json() == {
        "error": "Category with this name already exists in this navbar category"
    }


async def test_same_subcategory_name_rejected_in_same_category(admin_client, factory):
    tree = await factory.tree()
    response = await admin_client.post(
        "/api/admin/subcategory",
        json={"name": "poe switches", "category": tree["category"]["id"]},
    )
    assert response.status_code == 409
    assert response.json() == {
        "error": "Sub-category with this name already exists in this category"
    }


async def test_product_name_unique_within_scope_only(admin_client, factory):
    tree = await factory.tree()

    duplicate = await admin_client.post("/api/admin/product", json={
        "name": "SWITCH-24",
        "description": "again",
        "image1": "https://cdn.example.org/again.png",
        "category": tree["category"]["id"],
        "subcategory": tree["subcategory"]["id"],
    })
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "Product with this name already exists in this category"}

    # Directly under the category is a different scope
    direct = await factory.product(tree["category"], name="Switch-24")
    assert direct["slug"] == "switch-24"
    assert direct["subcategory"] is None


# ==================== CATEGORIES & SUB-CATEGORIES ====================

async def test_category_requires_name_and_navbar(admin_client, factory):
    navbar = await factory.navbar_category()

    response = await admin_client.post("/api/admin/category", json={"navbarCategory": navbar["id"]})
    assert response.json() == {"error": "Category name is required"}

    response = await admin_client.post("/api/admin/category", json={"name": "Switches"})
    assert response.status_code == 400
    assert response.json() == {"error": "Navbar category is required"}


async def test_category_unknown_navbar_is_404(admin_client):
    response = await admin_client.post(
        "/api/admin/category", json={"name": "Switches", "navbarCategory": str(uuid.uuid4())}
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Navbar category not found"}


async def test_subcategory_requires_existing_parent(admin_client):
    response = await admin_client.post("/api/admin/subcategory", json={"name": "PoE"})
    assert response.status_code == 400
    assert response.json() == {"error": "Parent category is required"}

    response = await admin_client.post(
        "/api/admin/subcategory", json={"name": "PoE", "category": str(uuid.uuid4())}
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Parent category not found"}


async def test_subcategory_response_populates_category_and_navbar(factory):
    tree = await factory.tree()
    subcategory = tree["subcategory"]
    assert subcategory["category"]["slug"] == "switches"
    assert subcategory["category"]["navbarCategory"]["slug"] == "networking"


async def test_moving_category_moves_its_products(admin_client, factory):
    tree = await factory.tree()
    security = await factory.navbar_category("Security")

    response = await admin_client.put(
        f"/api/admin/category/{tree['category']['id']}",
        json={"navbarCategory": security["id"]},
    )
    assert response.status_code == 200
    assert response.json()["data"]["navbarCategory"]["id"] == security["id"]

    product = (await admin_client.get(f"/api/admin/product/{tree['product']['id']}")).json()["data"]
    assert product["navbarCategory"]["id"] == security["id"]


async def test_moving_subcategory_carries_products(admin_client, factory):
    tree = await factory.tree()
    security = await factory.navbar_category("Security")
    cameras = await factory.category(security, "Cameras")

    response = await admin_client.put(
        f"/api/admin/subcategory/{tree['subcategory']['id']}",
        json={"category": cameras["id"]},
    )
    assert response.status_code == 200

    product = (await admin_client.get(f"/api/admin/product/{tree['product']['id']}")).json()["data"]
    assert product["category"]["id"] == cameras["id"]
    assert product["navbarCategory"]["id"] == security["id"]
    assert product["subcategory"]["id"] == tree["subcategory"]["id"]


# ==================== PRODUCTS ====================

async def test_product_required_fields(admin_client, factory):
    tree = await factory.tree()
    base = {
        "name": "Router",
        "description": "Fast",
        "image1": "https://cdn.example.org/router.png",
        "category": tree["category"]["id"],
    }

    cases = [
        ("name", "Product name is required"),
        ("description", "Product description is required"),
        ("image1", "At least one product image is required"),
        ("category", "Category is required"),
    ]
    for field, message in cases:
        payload = {k: v for k, v in base.items() if k != field}
        response = await admin_client.post("/api/admin/product", json=payload)
        assert response.status_code == 400, field
        assert response.json() == {"error": message}


async def test_product_populated_response(factory):
    tree = await factory.tree()
    product = tree["product"]

    assert product["slug"] == "switch-24"
    assert product["keyFeatures"] == ["24 ports", "Layer 2"]
    assert product["image2"] == product["image3"] == product["image4"] == ""
    assert product["images"] == [product["image1"]]
    assert product["navbarCategory"] == {
        "id": tree["navbar"]["id"], "name": "Networking", "slug": "networking"
    }
    assert product["category"]["name"] == "Switches"
    assert product["subcategory"]["name"] == "PoE Switches"


async def test_product_subcategory_must_belong_to_category(admin_client, factory):
    tree = await factory.tree()
    routers = await factory.category(tree["navbar"], "Routers")

    response = await admin_client.post("/api/admin/product", json={
        "name": "Edge Router",
        "description": "Routing",
        "image1": "https://cdn.example.org/er.png",
        "category": routers["id"],
        "subcategory": tree["subcategory"]["id"],
    })
    assert response.status_code == 400
    assert response.json() == {"error": "Subcategory does not belong to the selected category"}


async def test_cross_entity_rule_checked_when_only_category_changes(admin_client, factory):
    tree = await factory.tree()
    routers = await factory.category(tree["navbar"], "Routers")

    response = await admin_client.put(
        f"/api/admin/product/{tree['product']['id']}", json={"category": routers["id"]}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Subcategory does not belong to the selected category"}


async def test_cross_entity_rule_checked_when_only_subcategory_changes(admin_client, factory):
    tree = await factory.tree()
    routers = await factory.category(tree["navbar"], "Routers")
    edge = await factory.subcategory(routers, "Edge")
    direct = await factory.product(tree["category"], name="Flex Mini")

    response = await admin_client.put(
        f"/api/admin/product/{direct['id']}", json={"subcategory": edge["id"]}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Subcategory does not belong to the selected category"}


async def test_product_can_move_category_and_subcategory_together(admin_client, factory):
    tree = await factory.tree()
    routers = await factory.category(tree["navbar"], "Routers")
    edge = await factory.subcategory(routers, "Edge")

    response = await admin_client.put(
        f"/api/admin/product/{tree['product']['id']}",
        json={"category": routers["id"], "subcategory": edge["id"]},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["category"]["id"] == routers["id"]
    assert data["subcategory"]["id"] == edge["id"]


async def test_product_subcategory_can_be_detached(admin_client, factory):
    tree = await factory.tree()
    response = await admin_client.put(
        f"/api/admin/product/{tree['product']['id']}", json={"subcategory": ""}
    )
    assert response.status_code == 200
    assert response.json()["data"]["subcategory"] is None


async def test_mismatched_navbar_category_is_rejected(admin_client, factory):
    tree = await factory.tree()
    security = await factory.navbar_category("Security")

    response = await admin_client.post("/api/admin/product", json={
        "name": "Switch-48",
        "description": "48 ports",
        "image1": "https://cdn.example.org/48.png",
        "category": tree["category"]["id"],
        "navbarCategory": security["id"],
    })
    assert response.status_code == 400


async def test_partial_update_changes_only_given_field(admin_client, factory):
    tree = await factory.tree()
    before = tree["product"]

    response = await admin_client.put(
        f"/api/admin/product/{before['id']}", json={"isActive": False}
    )
    assert response.status_code == 200
    after = response.json()["data"]

    assert after["isActive"] is False
    unchanged = {k: v for k, v in after.items() if k not in ("isActive", "updatedAt")}
    expected = {k: v for k, v in before.items() if k not in ("isActive", "updatedAt")}
    assert unchanged == expected


async def test_partial_update_of_category_keeps_other_fields(admin_client, factory):
    navbar = await factory.navbar_category()
    category = await factory.category(navbar, "Switches", description="L2 and L3", image="https://cdn.example.org/s.png", order=3)

    response = await admin_client.put(f"/api/admin/category/{category['id']}", json={"isActive": False})
    data = response.json()["data"]
    assert data["isActive"] is False
    assert (data["name"], data["slug"], data["description"], data["image"], data["order"]) == (
        "Switches", "switches", "L2 and L3", "https://cdn.example.org/s.png", 3
    )


# ==================== IDS, 404s & DELETES ====================

@pytest.mark.parametrize("entity", ["navbar-category", "category", "subcategory", "product"])
async def test_malformed_id_is_400(admin_client, entity):
    for method in ("GET", "PUT", "DELETE"):
        kwargs = {"json": {"name": "x"}} if method == "PUT" else {}
        response = await admin_client.request(method, f"/api/admin/{entity}/507f1f77bcf86cd799439011", **kwargs)
        assert response.status_code == 400, method
        assert response.json()["error"].startswith("Invalid")


@pytest.mark.parametrize(
    "entity, message",
    [
        ("navbar-category", "Navbar category not found"),
        ("category", "Category not found"),
        ("subcategory", "Sub-category not found"),
        ("product", "Product not found"),
    ],
)
async def test_unknown_id_is_404(admin_client, entity, message):
    response = await admin_client.get(f"/api/admin/{entity}/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"error": message}


async def test_delete_returns_deleted_document(admin_client, factory):
    tree = await factory.tree()

    response = await admin_client.delete(f"/api/admin/product/{tree['product']['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Switch-24"

    response = await admin_client.get(f"/api/admin/product/{tree['product']['id']}")
    assert response.status_code == 404


async def test_parents_with_children_cannot_be_deleted(admin_client, factory):
    tree = await factory.tree()

    for entity in ("navbar-category", "category", "subcategory"):
        key = {"navbar-category": "navbar", "category": "category", "subcategory": "subcategory"}[entity]
        response = await admin_client.delete(f"/api/admin/{entity}/{tree[key]['id']}")
        assert response.status_code == 409, entity

    # Bottom-up deletion works
    await admin_client.delete(f"/api/admin/product/{tree['product']['id']}")
    for entity, key in (("subcategory", "subcategory"), ("category", "category"), ("navbar-category", "navbar")):
        response = await admin_client.delete(f"/api/admin/{entity}/{tree[key]['id']}")
        assert response.status_code == 200, entity


async def test_admin_listing_includes_inactive(admin_client, factory):
    await factory.navbar_category("Hidden", isActive=False)
    response = await admin_client.get("/api/admin/navbar-category")
    assert response.json()["count"] == 1
    assert response.json()["data"][0]["isActive"] is False


async def test_malformed_body_is_400(admin_client):
    response = await admin_client.post("/api/admin/navbar-category", json={"name": "X", "order": "first"})
    assert response.status_code == 400
    assert "error" in response.json()


# ==================== CONCURRENT WRITES ====================
# Two writes that both pass the pre-checks collide on the unique indexes.

async def test_concurrent_slug_collision_is_409(db_session):
    service = NavbarCategoryService(db_session)
    db_session.add(NavbarCategory(name="Wi-Fi", slug="wi-fi"))
    await db_session.commit()

    db_session.add(NavbarCategory(name="Wi Fi", slug="wi-fi"))
    with pytest.raises(ConflictError) as exc_info:
        await service.commit_unique("wi-fi")

    assert exc_info.value.message == 'A navbar category with the slug "wi-fi" already exists. Try a different name.'


async def test_concurrent_name_collision_is_409_with_name_message(db_session):
    service = NavbarCategoryService(db_session)
    db_session.add(NavbarCategory(name="Networking", slug="networking"))
    await db_session.commit()

    db_session.add(NavbarCategory(name="Networking", slug="networking-gear"))
    with pytest.raises(ConflictError) as exc_info:
        await service.commit_unique("networking-gear")

    assert exc_info.value.message == "A navbar category with this name already exists"


async def test_other_integrity_errors_are_not_reported_as_conflicts(db_session):
    service = NavbarCategoryService(db_session)
    db_session.add(NavbarCategory(name="Networking", slug=None))

    with pytest.raises(IntegrityError):
        await service.commit_unique("networking")
