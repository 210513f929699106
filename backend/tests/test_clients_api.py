"""Tests for /api/clients."""

import pytest

pytestmark = pytest.mark.api


@pytest.fixture
def created_client(client, client_payload, agent_headers):
    resp = client.post("/api/clients", json=client_payload, headers=agent_headers)
    assert resp.status_code == 201, resp.json()
    return resp.json()


def test_create_client(created_client, agent):
    assert created_client["email"] == "carol@example.com"
    assert created_client["assigned_agent_id"] == agent.id
    assert created_client["assigned_agent"]["name"] == "Alice Agent"
    assert created_client["status"] == "active"
    assert created_client["source"] == "website"
    assert created_client["notes"] == []
    assert created_client["property_ids"] == []


def test_create_duplicate_email(client, created_client, client_payload, other_agent_headers):
    resp = client.post(
        "/api/clients",
        json={**client_payload, "email": "CAROL@example.com"},
        headers=other_agent_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Client with this email already exists"


def test_create_rejects_bad_preferences(client, client_payload, agent_headers):
    payload = {**client_payload, "preferences": {"min_price": 500, "max_price": 100}}

    resp = client.post("/api/clients", json=payload, headers=agent_headers)
    assert resp.status_code == 400
    assert {"field": "preferences.max_price", "message": "must be >= min_price"} in resp.json()["violations"]


def test_create_missing_type(client, client_payload, agent_headers):
    payload = {k: v for k, v in client_payload.items() if k != "type"}

    resp = client.post("/api/clients", json=payload, headers=agent_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation failed"
    assert "type" in [v["field"] for v in resp.json()["violations"]]


def test_plain_user_can_read_but_not_write(client, created_client, client_payload, user_headers):
    assert client.get("/api/clients", headers=user_headers).status_code == 200
    assert client.get(f"/api/clients/{created_client['id']}", headers=user_headers).status_code == 200

    resp = client.post("/api/clients", json={**client_payload, "email": "x@example.com"}, headers=user_headers)
    assert resp.status_code == 403


def test_read_requires_token(client, created_client):
    resp = client.get("/api/clients")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Please authenticate"}


def test_get_missing_client(client, agent_headers):
    resp = client.get("/api/clients/999", headers=agent_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Client not found"


def test_update_by_owner(client, created_client, agent_headers):
    resp = client.put(
        f"/api/clients/{created_client['id']}",
        json={"status": "inactive", "phone": "555-0111"},
        headers=agent_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "inactive"
    assert resp.json()["phone"] == "555-0111"
    assert resp.json()["name"] == "Carol Client"


def test_update_by_other_agent_is_forbidden(client, created_client, other_agent_headers):
    resp = client.put(
        f"/api/clients/{created_client['id']}",
        json={"status": "inactive"},
        headers=other_agent_headers,
    )
    assert resp.status_code == 403
    assert resp.json()["message"] == "Not authorized to update this client"


def test_admin_overrides_ownership(client, created_client, admin_headers):
    resp = client.put(f"/api/clients/{created_client['id']}", json={"type": "both"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["type"] == "both"


def test_update_rejects_field_outside_allow_list(client, created_client, agent_headers, other_agent):
    resp = client.put(
        f"/api/clients/{created_client['id']}",
        json={"name": "Changed", "assigned_agent_id": other_agent.id},
        headers=agent_headers,
    )
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid updates"}

    current = client.get(f"/api/clients/{created_client['id']}", headers=agent_headers).json()
    assert current["name"] == "Carol Client"
    assert current["assigned_agent_id"] == created_client["assigned_agent_id"]


def test_update_rejects_unknown_status(client, created_client, agent_headers):
    resp = client.put(f"/api/clients/{created_client['id']}", json={"status": "archived"}, headers=agent_headers)
    assert resp.status_code == 400
    assert resp.json()["violations"][0]["field"] == "status"


def test_update_email_collision(client, created_client, client_payload, agent_headers):
    other = client.post(
        "/api/clients", json={**client_payload, "email": "dave@example.com"}, headers=agent_headers
    ).json()

    resp = client.put(f"/api/clients/{other['id']}", json={"email": "carol@example.com"}, headers=agent_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Client with this email already exists"


def test_delete(client, created_client, agent_headers, other_agent_headers):
    assert client.delete(f"/api/clients/{created_client['id']}", headers=other_agent_headers).status_code == 403

    resp = client.delete(f"/api/clients/{created_client['id']}", headers=agent_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Client deleted successfully"}
    assert client.get(f"/api/clients/{created_client['id']}", headers=agent_headers).status_code == 404


def test_add_notes_keeps_order(client, created_client, agent, agent_headers):
    url = f"/api/clients/{created_client['id']}/notes"
    client.post(url, json={"content": "Called, no answer"}, headers=agent_headers)
    resp = client.post(url, json={"content": "Booked a viewing"}, headers=agent_headers)

    assert resp.status_code == 200
    notes = resp.json()["notes"]
    assert [n["content"] for n in notes] == ["Called, no answer", "Booked a viewing"]
    assert all(n["created_by"] == agent.id for n in notes)


def test_add_note_by_other_agent(client, created_client, other_agent_headers):
    resp = client.post(
        f"/api/clients/{created_client['id']}/notes",
        json={"content": "hi"},
        headers=other_agent_headers,
    )
    assert resp.status_code == 403


def test_empty_note_rejected(client, created_client, agent_headers):
    resp = client.post(f"/api/clients/{created_client['id']}/notes", json={"content": ""}, headers=agent_headers)
    assert resp.status_code == 400


def test_add_document(client, created_client, agent_headers):
    resp = client.post(
        f"/api/clients/{created_client['id']}/documents",
        json={"name": "Pre-approval", "url": "https://files.example.com/pa.pdf", "type": "pdf"},
        headers=agent_headers,
    )
    assert resp.status_code == 200
    [document] = resp.json()["documents"]
    assert document["name"] == "Pre-approval"
    assert document["uploaded_at"] is not None


def test_record_contact(client, created_client, agent_headers):
    resp = client.post(f"/api/clients/{created_client['id']}/contact", headers=agent_headers)
    assert resp.status_code == 200
    assert resp.json()["last_contact"] is not None


def test_link_property_once(client, created_client, property_payload, agent_headers):
    prop = client.post("/api/properties", json=property_payload, headers=agent_headers).json()
    url = f"/api/clients/{created_client['id']}/properties/{prop['id']}"

    assert client.post(url, headers=agent_headers).json()["property_ids"] == [prop["id"]]
    assert client.post(url, headers=agent_headers).json()["property_ids"] == [prop["id"]]


def test_link_missing_property(client, created_client, agent_headers):
    resp = client.post(f"/api/clients/{created_client['id']}/properties/999", headers=agent_headers)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Property not found"


def test_agent_clients(client, created_client, client_payload, agent_headers, other_agent_headers, user_headers):
    client.post("/api/clients", json={**client_payload, "email": "erin@example.com"}, headers=other_agent_headers)

    resp = client.get("/api/clients/agent", headers=agent_headers)
    assert [c["id"] for c in resp.json()] == [created_client["id"]]
    assert client.get("/api/clients/agent", headers=user_headers).status_code == 403


def test_search(client, created_client, client_payload, agent_headers):
    seller = client.post(
        "/api/clients",
        json={**client_payload, "name": "Sam Seller", "email": "sam@example.com", "type": "seller"},
        headers=agent_headers,
    ).json()

    def ids(**params):
        resp = client.get("/api/clients/search", params=params, headers=agent_headers)
        assert resp.status_code == 200
        return [c["id"] for c in resp.json()]

    assert ids(name="carol") == [created_client["id"]]
    assert ids(email="EXAMPLE") == [seller["id"], created_client["id"]]
    assert ids(type="seller") == [seller["id"]]
    assert ids(type="buyer", status="inactive") == []


def test_delete_client_of_converted_lead_is_refused(client, lead_payload, agent_headers):
    lead = client.post("/api/leads", json=lead_payload, headers=agent_headers).json()
    converted = client.post(f"/api/leads/{lead['id']}/convert", headers=agent_headers).json()
    client_id = converted["client"]["id"]

    resp = client.delete(f"/api/clients/{client_id}", headers=agent_headers)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Cannot delete a client created from a converted lead"}

    assert client.get(f"/api/clients/{client_id}", headers=agent_headers).status_code == 200
    stored = client.get(f"/api/leads/{lead['id']}", headers=agent_headers).json()
    assert stored["status"] == "converted"
    assert stored["converted_to"] == client_id


def test_deleted_property_is_unlinked(client, created_client, property_payload, agent_headers):
    prop = client.post("/api/properties", json=property_payload, headers=agent_headers).json()
    client.post(f"/api/clients/{created_client['id']}/properties/{prop['id']}", headers=agent_headers)

    assert client.delete(f"/api/properties/{prop['id']}", headers=agent_headers).status_code == 200
    client.post("/api/properties", json={**property_payload, "title": "Unrelated"}, headers=agent_headers)

    current = client.get(f"/api/clients/{created_client['id']}", headers=agent_headers).json()
    assert current["property_ids"] == []
