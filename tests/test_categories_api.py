"""
API tests for categories: public reads, admin-only writes, unique names.
"""
import uuid

from conftest import quiz_payload


def test_list_is_public(client, category):
    r = client.get("/api/categories")
    assert r.status_code == 200
    assert [c["name"] for c in r.json()] == ["Geography"]


def test_create_requires_token(client):
    r = client.post("/api/categories", json={"name": "History"})
    assert r.status_code == 401


def test_create_requires_admin(client, user_headers):
    r = client.post("/api/categories", json={"name": "History"}, headers=user_headers)
    assert r.status_code == 403
    assert r.json()["message"] == "Not authorized as an admin"


def test_create_duplicate_name(client, admin_headers, category):
    r = client.post("/api/categories", json={"name": "Geography"}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Category already exists"


def test_create_empty_name_rejected(client, admin_headers):
    r = client.post("/api/categories", json={"name": ""}, headers=admin_headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "name"


def test_get_missing_category(client):
    r = client.get(f"/api/categories/{uuid.uuid4()}")
    assert r.status_code == 404
    assert r.json()["message"] == "Category not found"


def test_get_malformed_id_is_validation_error(client):
    r = client.get("/api/categories/not-a-uuid")
    assert r.status_code == 400
    assert r.json()["message"] == "Validation Error"


def test_update_partial(client, admin_headers, category):
    r = client.put(f"/api/categories/{category['id']}", json={"description": "Rivers"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["name"] == "Geography"
    assert r.json()["description"] == "Rivers"


def test_update_to_taken_name(client, admin_headers, category):
    client.post("/api/categories", json={"name": "History"}, headers=admin_headers)
    r = client.put(f"/api/categories/{category['id']}", json={"name": "History"}, headers=admin_headers)
    assert r.status_code == 400


def test_update_missing(client, admin_headers):
    r = client.put(f"/api/categories/{uuid.uuid4()}", json={"name": "X"}, headers=admin_headers)
    assert r.status_code == 404


def test_delete(client, admin_headers, category):
    r = client.delete(f"/api/categories/{category['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Category removed"}
    assert client.get(f"/api/categories/{category['id']}").status_code == 404


def test_delete_with_quizzes_rejected(client, admin_headers, category):
    client.post("/api/quizzes", json=quiz_payload(category["id"]), headers=admin_headers)
    r = client.delete(f"/api/categories/{category['id']}", headers=admin_headers)
    assert r.status_code == 400
    assert client.get(f"/api/categories/{category['id']}").status_code == 200
