import random

from services.chaos import AlwaysFail, NeverFail, RandomFailure


def _create(client, title="Groceries", body="milk, eggs", key="_intent"):
    return client.post("/notes", data={key: "create", "title": title, "body": body})


def _delete(client, note_id, key="_intent"):
    return client.post("/notes", data={key: "delete", "id": note_id})


def test_root_and_health(client, chaos) -> None:
    assert client.get("/").json() == {"status": "ok"}
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "notes": 0,
        "delete": {"delay_seconds": 0.0, "failure_strategy": "NeverFail", "failure_probability": None},
    }

    chaos.strategy = RandomFailure(0.25)
    _create(client)
    payload = client.get("/api/health").json()
    assert payload["notes"] == 1
    assert payload["delete"]["failure_strategy"] == "RandomFailure"
    assert payload["delete"]["failure_probability"] == 0.25


def test_list_starts_empty(client) -> None:
    response = client.get("/notes")
    assert response.status_code == 200
    assert response.json() == []


def test_create_returns_record_with_server_fields(client) -> None:
    response = _create(client)
    assert response.status_code == 201
    payload = response.json()
    assert payload["title"] == "Groceries"
    assert payload["body"] == "milk, eggs"
    assert payload["id"]
    assert payload["created_at"]

    notes = client.get("/notes").json()
    assert [n["id"] for n in notes] == [payload["id"]]


def test_create_accepts_action_discriminator(client) -> None:
    response = _create(client, key="_action")
    assert response.status_code == 201


def test_create_requires_title(client) -> None:
    response = client.post("/notes", data={"_intent": "create", "body": "text"})
    assert response.status_code == 400
    assert response.json() == {"error": "Title is required"}
    assert client.get("/notes").json() == []


def test_create_rejects_empty_body(client) -> None:
    response = _create(client, body="")
    assert response.status_code == 400
    assert response.json() == {"error": "Body is required"}
    assert client.get("/notes").json() == []


def test_unknown_intent_has_no_side_effects(client) -> None:
    _create(client)
    before = client.get("/notes").json()

    response = client.post("/notes", data={"_intent": "archive", "id": before[0]["id"]})
    assert response.status_code == 400
    assert response.json() == {"error": "Unknown intent"}

    response = client.post("/notes", data={"title": "x", "body": "y"})
    assert response.json() == {"error": "Unknown intent"}

    assert client.get("/notes").json() == before


def test_delete_requires_id(client) -> None:
    _create(client)
    response = client.post("/notes", data={"_intent": "delete"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing id"}
    assert len(client.get("/notes").json()) == 1


def test_delete_success_returns_removed_record(client, chaos) -> None:
    chaos.strategy = NeverFail()
    created = _create(client).json()

    response = _delete(client, created["id"])
    assert response.status_code == 200
    assert response.json() == created
    assert client.get("/notes").json() == []


def test_delete_transient_failure_keeps_record(client, chaos) -> None:
    chaos.strategy = AlwaysFail()
    created = _create(client).json()

    response = _delete(client, created["id"], key="_action")
    assert response.status_code == 503
    assert response.json() == {"error": "Failed to delete note", "id": created["id"]}
    assert client.get("/notes").json() == [created]

    # retry succeeds once the backend behaves
    chaos.strategy = NeverFail()
    assert _delete(client, created["id"]).status_code == 200
    assert client.get("/notes").json() == []


def test_delete_unknown_note_is_404(client) -> None:
    response = _delete(client, "does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Note not found", "id": "does-not-exist"}


def test_random_failure_splits_deletes_without_corrupting_records(client, chaos) -> None:
    chaos.strategy = RandomFailure(0.5, rng=random.Random(20240501))
    created = [_create(client, title=f"note {i}", body=f"body {i}").json() for i in range(100)]

    failed, deleted = [], []
    for note in created:
        response = _delete(client, note["id"])
        if response.status_code == 503:
            assert response.json()["id"] == note["id"]
            failed.append(note)
        else:
            assert response.status_code == 200
            deleted.append(note)

    assert 30 <= len(failed) <= 70
    remaining = client.get("/notes").json()
    assert sorted(remaining, key=lambda n: n["id"]) == sorted(failed, key=lambda n: n["id"])
    remaining_ids = {n["id"] for n in remaining}
    assert not remaining_ids & {n["id"] for n in deleted}


def test_list_is_ordered_by_creation(client) -> None:
    ids = [_create(client, title=f"t{i}").json()["id"] for i in range(3)]
    assert [n["id"] for n in client.get("/notes").json()] == ids
