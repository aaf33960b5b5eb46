async def test_navbar_page(client, factory):
    tree = await factory.tree()
    await factory.navbar_category("Security")

    response = await client.get("/api/pages/networking")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["level"] == "navbar"
    assert data["navbarCategory"]["id"] == tree["navbar"]["id"]
    assert {n["slug"] for n in data["navbarCategories"]} == {"networking", "security"}
    assert [c["slug"] for c in data["categories"]] == ["switches"]


async def test_category_page_lists_children_and_siblings(client, factory):
    tree = await factory.tree()
    await factory.category(tree["navbar"], "Routers")

    response = await client.get("/api/pages/networking/switches")
    data = response.json()["data"]
    assert data["level"] == "category"
    assert data["category"]["slug"] == "switches"
    assert {c["slug"] for c in data["categories"]} == {"switches", "routers"}
    assert [s["slug"] for s in data["subcategories"]] == ["poe-switches"]
    assert [p["slug"] for p in data["products"]] == ["switch-24"]


async def test_subcategory_page(client, factory):
    tree = await factory.tree()
    await factory.product(tree["category"], name="Flex Mini")

    response = await client.get("/api/pages/networking/switches/poe-switches")
    data = response.json()["data"]
    assert data["level"] == "subcategory"
    assert data["subcategory"]["id"] == tree["subcategory"]["id"]
    assert [p["name"] for p in data["products"]] == ["Switch-24"]


async def test_product_page_with_related_products(client, factory):
    tree = await factory.tree()
    await factory.product(tree["category"], tree["subcategory"], name="Switch-48")

    response = await client.get("/api/pages/networking/switches/poe-switches/switch-24")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["level"] == "product"
    assert data["product"]["name"] == "Switch-24"
    assert [p["name"] for p in data["relatedProducts"]] == ["Switch-48"]


async def test_subcategory_of_another_category_is_not_found(client, factory):
    tree = await factory.tree()
    routers = await factory.category(tree["navbar"], "Routers")
    await factory.subcategory(routers, "Edge")

    response = await client.get("/api/pages/networking/switches/edge")
    assert response.status_code == 404
    assert response.json() == {"error": "Sub-category not found"}


async def test_unknown_navbar_is_not_found(client, database):
    response = await client.get("/api/pages/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Navbar category not found"}


async def test_unknown_category_and_product(client, factory):
    await factory.tree()

    response = await client.get("/api/pages/networking/cameras")
    assert response.json() == {"error": "Category not found"}

    response = await client.get("/api/pages/networking/switches/poe-switches/switch-99")
    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


async def test_inactive_entities_do_not_resolve(client, admin_client, factory):
    tree = await factory.tree()
    await admin_client.put(f"/api/admin/category/{tree['category']['id']}", json={"isActive": False})

    response = await client.get("/api/pages/networking/switches")
    assert response.status_code == 404


async def test_too_deep_path_is_not_found(client, factory):
    await factory.tree()
    response = await client.get("/api/pages/networking/switches/poe-switches/switch-24/extra")
    assert response.status_code == 404
