from core.supabase import SupabaseError

CATEGORY = {
    "page_title": "Plumbers - Abbotsford's Best",
    "category_name": "Plumbers",
    "slug": "plumbers",
    "description": "Find the best plumbers.",
}


def seed(admin_db, **overrides):
    row = {
        "id": overrides.pop("id", 1),
        **CATEGORY,
        "icon_name": "Wrench",
        "featured_business_1_id": None,
        "featured_business_2_id": None,
        "featured_business_3_id": None,
        **overrides,
    }
    admin_db.tables.setdefault("category_pages", []).append(row)
    return row


def test_get_category(client, admin_db):
    seed(admin_db, id=7)

    resp = client.get("/api/admin/categories/7")

    assert resp.status_code == 200
    assert resp.json()["slug"] == "plumbers"


def test_get_category_not_found(client):
    resp = client.get("/api/admin/categories/404")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Category not found"}


def test_create_category_applies_defaults(client, admin_db):
    resp = client.post("/api/admin/categories/create", json={**CATEGORY, "featured_business_1_id": ""})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    created = body["data"][0]
    assert created["icon_name"] == "Building"
    assert created["featured_business_1_id"] is None
    assert len(admin_db.tables["category_pages"]) == 1


def test_create_category_missing_fields(client, admin_db):
    resp = client.post("/api/admin/categories/create", json={**CATEGORY, "description": ""})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields"}
    assert "category_pages" not in admin_db.tables


def test_create_category_duplicate_slug(client, admin_db):
    seed(admin_db)

    resp = client.post("/api/admin/categories/create", json=CATEGORY)

    assert resp.status_code == 409
    assert resp.json()["error"] == "Slug already exists"


def test_create_category_unique_violation_on_write(client, admin_db):
    admin_db.errors["insert"] = SupabaseError("duplicate key value", code="23505", status_code=409)

    resp = client.post("/api/admin/categories/create", json=CATEGORY)

    assert resp.status_code == 409
    assert resp.json() == {"error": "Slug already exists", "code": "23505"}


def test_create_category_database_error(client, admin_db):
    admin_db.errors["insert"] = SupabaseError("relation does not exist", code="42P01", status_code=404)

    resp = client.post("/api/admin/categories/create", json=CATEGORY)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Database error", "details": "relation does not exist", "code": "42P01"}


def test_create_category_empty_body(client):
    resp = client.post("/api/admin/categories/create", content=b"")

    assert resp.status_code == 400
    assert resp.json() == {"error": "Empty request body"}


def test_create_category_malformed_json(client):
    resp = client.post(
        "/api/admin/categories/create",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Malformed JSON in request body"}


def test_create_from_submission(client, admin_db):
    resp = client.post("/api/admin/categories/create-from-submission", json={"new_category": "  Dog Groomers "})

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == 'Category "Dog Groomers" created successfully'
    data = body["data"]
    assert data["slug"] == "dog-groomers"
    assert data["page_title"] == "Dog Groomers - Abbotsford's Best"
    assert "dog groomers businesses in Abbotsford, BC" in data["description"]
    assert data["icon_name"] == "Building"


def test_create_from_submission_requires_name(client):
    resp = client.post("/api/admin/categories/create-from-submission", json={"new_category": "   "})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Category name is required"}


def test_create_from_submission_unsluggable_name(client):
    resp = client.post("/api/admin/categories/create-from-submission", json={"new_category": "???"})

    assert resp.status_code == 400
    assert "cannot generate valid slug" in resp.json()["error"]


def test_create_from_submission_existing_slug(client, admin_db):
    seed(admin_db)

    resp = client.post("/api/admin/categories/create-from-submission", json={"new_category": "Plumbers"})

    assert resp.status_code == 409
    assert resp.json()["error"] == 'Category already exists: "Plumbers" (slug: plumbers)'


def test_update_category_keeps_own_slug(client, admin_db):
    seed(admin_db, id=1)

    resp = client.post(
        "/api/admin/categories/update",
        json={"id": 1, **CATEGORY, "page_title": "Top Plumbers", "icon_name": "Wrench"},
    )

    assert resp.status_code == 200
    row = resp.json()["data"][0]
    assert row["page_title"] == "Top Plumbers"
    assert row["icon_name"] == "Wrench"
    assert row["updated_at"]


def test_update_category_rejects_slug_of_other_row(client, admin_db):
    seed(admin_db, id=1)
    seed(admin_db, id=2, slug="electricians", category_name="Electricians")

    resp = client.post("/api/admin/categories/update", json={"id": 2, **CATEGORY})

    assert resp.status_code == 409
    assert resp.json()["error"] == "Slug already exists"
    assert admin_db.tables["category_pages"][1]["slug"] == "electricians"


def test_update_category_requires_id(client):
    resp = client.post("/api/admin/categories/update", json=CATEGORY)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields"}


def test_update_category_unknown_id(client):
    resp = client.post("/api/admin/categories/update", json={"id": 99, **CATEGORY})

    assert resp.status_code == 404


def test_delete_category(client, admin_db):
    seed(admin_db, id=3)

    resp = client.post("/api/admin/categories/delete", json={"id": 3})

    assert resp.status_code == 200
    assert resp.json()["data"][0]["id"] == 3
    assert admin_db.tables["category_pages"] == []


def test_delete_category_requires_id(client):
    resp = client.post("/api/admin/categories/delete", json={})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing category ID"}


def test_featured_status(client, admin_db):
    seed(admin_db, id=1, featured_business_2_id=42)
    seed(admin_db, id=2, slug="drain-cleaning", featured_business_1_id=42, featured_business_3_id=42)
    seed(admin_db, id=3, slug="other", featured_business_1_id=5)

    resp = client.get("/api/admin/get-business-featured-status", params={"businessId": "42"})

    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "featuredCategories": [
            {"slug": "plumbers", "position": 2},
            {"slug": "drain-cleaning", "position": 1},
            {"slug": "drain-cleaning", "position": 3},
        ],
    }


def test_featured_status_requires_business_id(client):
    resp = client.get("/api/admin/get-business-featured-status")

    assert resp.status_code == 400


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_featured_status_quotes_business_id(client, admin_db):
    seed(admin_db, id=1, featured_business_3_id="a,b)")
    seed(admin_db, id=2, slug="other", featured_business_1_id="a")

    resp = client.get("/api/admin/get-business-featured-status", params={"businessId": "a,b)"})

    assert resp.status_code == 200
    assert resp.json()["featuredCategories"] == [{"slug": "plumbers", "position": 3}]
    filters = admin_db.calls[-1][2]
    assert filters["or"].startswith('(featured_business_1_id.eq."a,b)",')
