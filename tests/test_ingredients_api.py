"""Ingredient API tests."""

from datetime import date, timedelta


def create(client, **fields):
    response = client.post("/api/v1/ingredients", json=fields)
    assert response.status_code == 201, response.text
    return response.json()


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_ingredient(client, clock):
    """Test creating an ingredient with a picked date."""
    data = create(
        client,
        name="Cheddar",
        brand="Tillamook",
        category="dairy",
        location="fridge",
        confection_type="cured",
        expiration_date="2026-04-01",
    )
    assert data["name"] == "Cheddar"
    assert data["brand"] == "Tillamook"
    assert data["open"] is False
    assert data["expiration_date"] == "2026-04-01"
    assert data["expiration_status"]["kind"] == "expiring_in_days"
    assert data["expiration_status"]["days_until"] == 22
    assert data["expiration_status"]["label"] == "Expires in 22 days"
    assert data["needs_ripeness_check"] is False


def test_create_requires_name(client):
    """Test that a blank name is rejected."""
    response = client.post("/api/v1/ingredients", json={"name": "  "})
    assert response.status_code == 422
    assert "name" in response.json()["detail"]


def test_create_rejects_unknown_location(client):
    """Test that values outside the vocabulary are rejected."""
    response = client.post("/api/v1/ingredients", json={"name": "Rice", "location": "garage"})
    assert response.status_code == 422


def test_create_vegetable_with_day_count(client, clock):
    """Test that vegetables get today plus the chosen shelf life."""
    data = create(client, name="Broccoli", category="vegetable", shelf_life_days=14)
    assert data["expiration_date"] == (clock.today + timedelta(days=14)).isoformat()

    clock.today = clock.today + timedelta(days=13)
    response = client.get(f"/api/v1/ingredients/{data['id']}")
    assert response.json()["expiration_status"]["kind"] == "expiring_tomorrow"

    clock.today = clock.today + timedelta(days=1)
    response = client.get(f"/api/v1/ingredients/{data['id']}")
    assert response.json()["expiration_status"]["kind"] == "expired"


def test_create_rejects_unknown_day_count(client):
    """Test that only the offered vegetable shelf lives are accepted."""
    response = client.post(
        "/api/v1/ingredients",
        json={"name": "Leeks", "category": "vegetable", "shelf_life_days": 5},
    )
    assert response.status_code == 422


def test_frozen_extension_applied_once(client):
    """Test that freezing adds six months on save and never again."""
    data = create(
        client,
        name="Chicken",
        category="meat",
        location="freezer",
        confection_type="frozen",
        expiration_date="2026-03-20",
    )
    assert data["expiration_date"] == "2026-09-20"

    # Reading and editing other fields leaves the date alone
    assert client.get(f"/api/v1/ingredients/{data['id']}").json()["expiration_date"] == "2026-09-20"
    response = client.put(f"/api/v1/ingredients/{data['id']}", json={"brand": "Perdue"})
    assert response.json()["expiration_date"] == "2026-09-20"


def test_create_opened_ingredient(client, clock):
    """Test that an ingredient saved as open gets four days."""
    data = create(client, name="Cream", category="dairy", open=True, expiration_date="2026-06-01")
    assert data["open"] is True
    assert data["expiration_date"] == "2026-03-14"


def test_create_drops_ripeness_for_non_fresh(client):
    """Test that ripeness only sticks to fresh ingredients."""
    canned = create(client, name="Peaches", confection_type="canned", ripeness="ripe")
    fresh = create(client, name="Pear", confection_type="fresh", ripeness="green")
    assert canned["ripeness"] is None
    assert fresh["ripeness"] == "green"
    assert fresh["needs_ripeness_check"] is True


def test_list_and_search(client):
    """Test listing ingredients and searching by name."""
    create(client, name="Green Apple")
    create(client, name="Apple Juice", category="liquid")
    create(client, name="Pear")

    response = client.get("/api/v1/ingredients")
    assert response.status_code == 200
    assert [i["name"] for i in response.json()] == ["Green Apple", "Apple Juice", "Pear"]

    response = client.get("/api/v1/ingredients", params={"q": "apple"})
    assert [i["name"] for i in response.json()] == ["Green Apple", "Apple Juice"]


def test_update_ingredient(client):
    """Test editing an ingredient."""
    data = create(client, name="Tomato", confection_type="fresh", ripeness="green")

    response = client.put(
        f"/api/v1/ingredients/{data['id']}",
        json={"ripeness": "ripe", "location": "pantry", "expiration_date": "2026-03-15"},
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["ripeness"] == "ripe"
    assert updated["location"] == "pantry"
    assert updated["expiration_date"] == "2026-03-15"
    assert updated["name"] == "Tomato"


def test_update_to_non_fresh_clears_ripeness(client):
    """Test that changing confection type away from fresh drops ripeness."""
    data = create(client, name="Tomato", confection_type="fresh", ripeness="ripe")
    response = client.put(f"/api/v1/ingredients/{data['id']}", json={"confection_type": "canned"})
    assert response.json()["ripeness"] is None


def test_update_can_clear_expiration(client):
    """Test that null clears a field."""
    data = create(client, name="Bread", expiration_date="2026-03-12")
    response = client.put(f"/api/v1/ingredients/{data['id']}", json={"expiration_date": None})
    assert response.json()["expiration_date"] is None
    assert response.json()["expiration_status"]["kind"] == "no_date"


def test_update_rejects_empty_name(client):
    """Test that the name cannot be blanked."""
    data = create(client, name="Bread")
    response = client.put(f"/api/v1/ingredients/{data['id']}", json={"name": ""})
    assert response.status_code == 422


def test_delete_ingredient(client):
    """Test deleting an ingredient."""
    data = create(client, name="To Delete")

    response = client.delete(f"/api/v1/ingredients/{data['id']}")
    assert response.status_code == 204

    items = client.get("/api/v1/ingredients").json()
    assert not any(i["id"] == data["id"] for i in items)


def test_ingredient_not_found(client):
    """Test 404 for non-existent ingredients."""
    assert client.get("/api/v1/ingredients/99999").status_code == 404
    assert client.delete("/api/v1/ingredients/99999").status_code == 404
    assert client.post("/api/v1/ingredients/99999/checks").status_code == 404


def test_open_toggle(client, clock):
    """Test opening overrides the date and closing clears it."""
    data = create(client, name="Milk", category="liquid", expiration_date="2026-05-01")

    response = client.post(f"/api/v1/ingredients/{data['id']}/open", json={"open": True})
    assert response.status_code == 200
    assert response.json()["open"] is True
    assert response.json()["expiration_date"] == "2026-03-14"
    assert response.json()["expiration_status"]["label"] == "Expires in 4 days"

    response = client.post(f"/api/v1/ingredients/{data['id']}/open", json={"open": False})
    assert response.json()["open"] is False
    assert response.json()["expiration_date"] is None


def test_ripeness_check_in(client, clock):
    """Test recording ripeness check-ins."""
    data = create(client, name="Avocado", confection_type="fresh", ripeness="green")

    response = client.post(f"/api/v1/ingredients/{data['id']}/checks")
    assert response.status_code == 201
    assert response.json()["ingredient_id"] == data["id"]
    assert response.json()["date"] == "2026-03-10"

    clock.today = date(2026, 3, 12)
    client.post(f"/api/v1/ingredients/{data['id']}/checks")

    ingredient = client.get(f"/api/v1/ingredients/{data['id']}").json()
    assert ingredient["last_checked_date"] == "2026-03-12"

    history = client.get(f"/api/v1/ingredients/{data['id']}/checks").json()
    assert [c["date"] for c in history] == ["2026-03-12", "2026-03-10"]


def test_ripeness_check_rejected_for_non_fresh(client):
    """Test that canned goods cannot be checked for ripeness."""
    data = create(client, name="Beans", confection_type="canned")
    response = client.post(f"/api/v1/ingredients/{data['id']}/checks")
    assert response.status_code == 409
    assert "fresh" in response.json()["detail"]


def test_stale_check_marks_open_on_load(client, clock):
    """Test that listing marks ingredients open once their check is over three days old."""
    data = create(client, name="Banana", confection_type="fresh", ripeness="green")
    client.post(f"/api/v1/ingredients/{data['id']}/checks")

    clock.today = date(2026, 3, 13)
    items = client.get("/api/v1/ingredients").json()
    assert items[0]["open"] is False

    clock.today = date(2026, 3, 14)
    items = client.get("/api/v1/ingredients").json()
    assert items[0]["open"] is True

    # The flag was persisted, not just reported
    assert client.get(f"/api/v1/ingredients/{data['id']}").json()["open"] is True


def test_expiring_filter(client, clock):
    """Test the expiring-within filter."""
    create(client, name="Later", expiration_date="2026-03-16")
    create(client, name="Soon", expiration_date="2026-03-11")
    create(client, name="Far", expiration_date="2026-05-01")
    create(client, name="Undated")

    response = client.get("/api/v1/ingredients/filters/expiring", params={"days": 7})
    assert response.status_code == 200
    assert [i["name"] for i in response.json()] == ["Soon", "Later"]

    response = client.get("/api/v1/ingredients/filters/expiring", params={"days": -1})
    assert response.status_code == 422


def test_watchlist_filter(client):
    """Test that the watchlist holds ripe or open food but never frozen food."""
    create(client, name="Peach", confection_type="fresh", ripeness="ripe")
    create(client, name="Kiwi", confection_type="fresh", ripeness="green")
    create(client, name="Juice", category="liquid", open=True)
    create(client, name="Frozen Berries", confection_type="frozen", open=True)

    response = client.get("/api/v1/ingredients/filters/watchlist")
    assert [i["name"] for i in response.json()] == ["Peach", "Juice"]


def test_recent_filter(client):
    """Test that the recent filter returns the last five added."""
    for n in range(7):
        create(client, name=f"Item {n}")

    names = [i["name"] for i in client.get("/api/v1/ingredients/filters/recent").json()]
    assert names == ["Item 6", "Item 5", "Item 4", "Item 3", "Item 2"]


def test_missing_data_filter(client):
    """Test the missing-data filter."""
    create(
        client,
        name="Complete",
        category="dairy",
        location="fridge",
        confection_type="fresh",
        expiration_date="2026-03-20",
    )
    create(
        client,
        name="No Category",
        location="fridge",
        confection_type="fresh",
        expiration_date="2026-03-20",
    )

    names = [i["name"] for i in client.get("/api/v1/ingredients/filters/missing-data").json()]
    assert names == ["No Category"]


def test_location_and_group_filters(client):
    """Test the same-location and same-category-or-type filters."""
    create(client, name="Salmon", category="fish", location="fridge", confection_type="fresh")
    create(client, name="Ham", category="meat", location="pantry", confection_type="cured")

    response = client.get("/api/v1/ingredients/filters/location/pantry")
    assert [i["name"] for i in response.json()] == ["Ham"]

    response = client.get("/api/v1/ingredients/filters/group/fish")
    assert [i["name"] for i in response.json()] == ["Salmon"]

    response = client.get("/api/v1/ingredients/filters/group/cured")
    assert [i["name"] for i in response.json()] == ["Ham"]

    assert client.get("/api/v1/ingredients/filters/location/garage").status_code == 422
    assert client.get("/api/v1/ingredients/filters/group/legume").status_code == 422


def test_ripeness_filter(client):
    """Test the ripeness check-in list."""
    create(client, name="Mango", confection_type="fresh", ripeness="advanced")
    create(client, name="Lettuce", confection_type="fresh")
    create(client, name="Jam", confection_type="canned")

    names = [i["name"] for i in client.get("/api/v1/ingredients/filters/ripeness").json()]
    assert names == ["Mango"]
