"""
Tests for the search route
"""


def test_search_by_name_substring(client, register):
    register(client, "Drill", "cordless")
    register(client, "Hammer")

    response = client.post("/search", json={"query": "dri"})
    assert response.status_code == 200
    assert [item["inventory_name"] for item in response.json()] == ["Drill"]


def test_search_is_case_insensitive(client, register):
    register(client, "Drill")

    response = client.post("/search", json={"query": "DRI"})
    assert len(response.json()) == 1


def test_search_without_matches(client, register):
    register(client, "Drill")

    response = client.post("/search", json={"query": "zzz"})
    assert response.status_code == 200
    assert response.json() == []


def test_search_requires_query(client):
    response = client.post("/search", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "query is required"}


def test_search_empty_query(client):
    response = client.post("/search", json={"query": ""})
    assert response.status_code == 400


def test_search_by_id_strips_photo(client, register):
    created = register(client, "Camera", photo=("cam.png", b"cam")).json()

    response = client.post("/search", data={"id": str(created["id"])})
    assert response.status_code == 200
    data = response.json()
    assert data["inventory_name"] == "Camera"
    assert "photo" not in data


def test_search_by_id_with_photo(client, register):
    created = register(client, "Camera", photo=("cam.png", b"cam")).json()

    response = client.post(
        "/search", data={"id": str(created["id"]), "has_photo": "on"}
    )
    assert response.status_code == 200
    assert response.json()["photo"] == created["photo"]


def test_search_by_id_json(client, register):
    created = register(client, "Drill").json()

    response = client.post("/search", json={"id": created["id"], "has_photo": True})
    assert response.status_code == 200
    assert response.json() == created


def test_search_by_missing_id(client):
    response = client.post("/search", data={"id": "404"})
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_search_by_malformed_id(client):
    response = client.post("/search", data={"id": "abc"})
    assert response.status_code == 404


def test_search_by_id_beyond_integer_range(client):
    response = client.post("/search", data={"id": "99999999999999999999"})
    assert response.status_code == 404
