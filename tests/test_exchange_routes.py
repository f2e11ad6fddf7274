from services import ExchangeService, get_exchange_service
from main import app


def propose(client, proposed_id, requested_id, **extra):
    return client.post(
        "/api/exchanges",
        json={"proposedObject": {"id": proposed_id}, "requestedObject": {"id": requested_id}, **extra},
    )


def test_propose_accept_and_fetch(client, marketplace):
    response = propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"], message="swap?")
    assert response.status_code == 200
    exchange = response.json()
    assert exchange["status"] == "PENDING"
    assert exchange["proposedObject"]["name"] == "bike"
    assert exchange["requestedObject"]["owner_id"] == marketplace["bob"]["id"]
    assert exchange["message"] == "swap?"

    accepted = client.post(f"/api/exchanges/{exchange['id']}/accept")
    assert accepted.status_code == 200
    assert accepted.text == "Exchange accepted successfully."

    fetched = client.get(f"/api/exchanges/{exchange['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["status"] == "ACCEPTED"


def test_reject(client, marketplace):
    exchange = propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"]).json()

    response = client.post(f"/api/exchanges/{exchange['id']}/reject")

    assert response.status_code == 200
    assert response.text == "Exchange rejected successfully."
    assert client.get(f"/api/exchanges/{exchange['id']}").json()["status"] == "REJECTED"


def test_accept_unknown_exchange_is_bad_request(client):
    response = client.post("/api/exchanges/12345/accept")
    assert response.status_code == 400
    assert "not found" in response.text


def test_second_accept_is_bad_request(client, marketplace):
    exchange = propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"]).json()
    client.post(f"/api/exchanges/{exchange['id']}/accept")

    again = client.post(f"/api/exchanges/{exchange['id']}/accept")
    reject = client.post(f"/api/exchanges/{exchange['id']}/reject")

    assert again.status_code == 400
    assert "ACCEPTED" in again.text
    assert reject.status_code == 400


def test_create_with_unknown_object_is_bad_request(client, marketplace):
    response = propose(client, 9999, marketplace["guitar"]["id"])
    assert response.status_code == 400
    assert response.text == "Proposed object with id 9999 not found"
    assert client.get("/api/exchanges").json() == []


def test_create_with_missing_id_is_bad_request(client, marketplace):
    response = client.post("/api/exchanges", json={"requestedObject": {"id": marketplace["guitar"]["id"]}})
    assert response.status_code == 400
    assert response.text == "Proposed object ID must not be null"

    response = client.post(
        "/api/exchanges",
        json={"proposedObject": {"id": marketplace["bike"]["id"]}, "requestedObject": {}},
    )
    assert response.status_code == 400
    assert response.text == "Requested object ID must not be null"


def test_list_all_is_always_ok(client, marketplace):
    assert client.get("/api/exchanges").json() == []

    propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"])
    propose(client, marketplace["guitar"]["id"], marketplace["bike"]["id"])

    response = client.get("/api/exchanges")
    assert response.status_code == 200
    assert len(response.json()) == 2


def test_get_missing_exchange_is_not_found(client):
    assert client.get("/api/exchanges/77").status_code == 404


def test_received_and_by_user(client, marketplace):
    bob_id = marketplace["bob"]["id"]
    assert client.get(f"/api/exchanges/received?userId={bob_id}").status_code == 204
    assert client.get(f"/api/exchanges/user/{bob_id}").status_code == 404

    exchange = propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"]).json()

    received = client.get("/api/exchanges/received", params={"userId": bob_id})
    assert received.status_code == 200
    assert [e["id"] for e in received.json()] == [exchange["id"]]

    alice_received = client.get("/api/exchanges/received", params={"userId": marketplace["alice"]["id"]})
    assert alice_received.status_code == 204
    assert alice_received.content == b""

    by_alice = client.get(f"/api/exchanges/user/{marketplace['alice']['id']}")
    assert by_alice.status_code == 200
    assert by_alice.json()[0]["id"] == exchange["id"]


def test_received_requires_user_id(client):
    assert client.get("/api/exchanges/received").status_code == 422


def test_update_status(client, marketplace):
    exchange = propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"]).json()

    response = client.put(f"/api/exchanges/{exchange['id']}", json={"status": "REJECTED"})
    assert response.status_code == 200
    assert response.json()["status"] == "REJECTED"
    assert response.json()["proposedObject"]["id"] == marketplace["bike"]["id"]

    back = client.put(f"/api/exchanges/{exchange['id']}", json={"status": "PENDING"})
    assert back.status_code == 409


def test_update_errors(client, marketplace):
    exchange = propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"]).json()

    assert client.put("/api/exchanges/999", json={"status": "ACCEPTED"}).status_code == 404
    assert client.put(f"/api/exchanges/{exchange['id']}", json={}).status_code == 400
    assert client.put(f"/api/exchanges/{exchange['id']}", json={"status": "DONE"}).status_code == 422


def test_update_in_permissive_mode(client, mock_db, marketplace):
    app.dependency_overrides[get_exchange_service] = lambda: ExchangeService(mock_db, strict=False)
    exchange = propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"]).json()
    client.post(f"/api/exchanges/{exchange['id']}/accept")

    again = client.post(f"/api/exchanges/{exchange['id']}/accept")
    reopened = client.put(f"/api/exchanges/{exchange['id']}", json={"status": "PENDING"})

    assert again.status_code == 200
    assert reopened.status_code == 200
    assert reopened.json()["status"] == "PENDING"


def test_delete(client, marketplace):
    exchange = propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"]).json()

    response = client.delete(f"/api/exchanges/{exchange['id']}")
    assert response.status_code == 204
    assert client.get(f"/api/exchanges/{exchange['id']}").status_code == 404
    assert client.get(f"/api/objects/{marketplace['bike']['id']}").status_code == 200

    assert client.delete(f"/api/exchanges/{exchange['id']}").status_code == 204


def test_timestamps_match_between_create_and_fetch(client, marketplace):
    created = propose(client, marketplace["bike"]["id"], marketplace["guitar"]["id"]).json()

    fetched = client.get(f"/api/exchanges/{created['id']}").json()

    assert fetched["created_at"] == created["created_at"]
    assert "+" not in created["created_at"]
