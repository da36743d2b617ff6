"""Feeding reminder tests."""


def test_create_reminder_with_defaults(client, owner, pet_id) -> None:
    r = client.post(f"/api/pets/{pet_id}/feeding-reminders", json={}, headers=owner)
    assert r.status_code == 201
    body = r.json()
    assert body["petId"] == pet_id
    assert body["label"] == "Feeding reminder"
    assert body["time"] == "08:00"
    assert body["enabled"] is True


def test_reminders_are_listed_by_time(client, owner, pet_id) -> None:
    url = f"/api/pets/{pet_id}/feeding-reminders"
    client.post(url, json={"label": "Dinner", "time": "18:30"}, headers=owner)
    client.post(url, json={"label": "Breakfast", "time": "07:30"}, headers=owner)
    client.post(url, json={"label": "Lunch", "time": "12:30", "enabled": False}, headers=owner)

    reminders = client.get(url, headers=owner).json()
    assert [r["label"] for r in reminders] == ["Breakfast", "Lunch", "Dinner"]
    assert reminders[1]["enabled"] is False


def test_rejects_invalid_time(client, owner, pet_id) -> None:
    url = f"/api/pets/{pet_id}/feeding-reminders"
    for bad in ("24:00", "7:30", "noon", "12:60"):
        assert client.post(url, json={"time": bad}, headers=owner).status_code == 400, bad


def test_patch_updates_only_given_fields(client, owner, pet_id) -> None:
    url = f"/api/pets/{pet_id}/feeding-reminders"
    created = client.post(url, json={"label": "Breakfast", "time": "07:30"}, headers=owner).json()

    r = client.patch(f"{url}/{created['id']}", json={"enabled": False}, headers=owner)
    assert r.status_code == 200
    assert r.json() == {**created, "enabled": False}

    r = client.patch(f"{url}/{created['id']}", json={"time": "06:45", "label": "Early breakfast"}, headers=owner)
    assert r.json()["time"] == "06:45"
    assert r.json()["label"] == "Early breakfast"
    assert r.json()["enabled"] is False


def test_patch_validation_and_lookup(client, owner, stranger, pet_id) -> None:
    url = f"/api/pets/{pet_id}/feeding-reminders"
    created = client.post(url, json={"label": "Breakfast"}, headers=owner).json()

    assert client.patch(f"{url}/{created['id']}", json={"label": "  "}, headers=owner).status_code == 400
    assert client.patch(f"{url}/{created['id']}", json={"enabled": None}, headers=owner).status_code == 400
    assert client.patch(f"{url}/9999", json={"enabled": False}, headers=owner).status_code == 404
    assert client.patch(f"{url}/abc", json={"enabled": False}, headers=owner).status_code == 400
    assert client.patch(f"{url}/{created['id']}", json={"enabled": False}, headers=stranger).status_code == 403


def test_reminders_are_scoped_to_their_pet(client, owner, pet_id) -> None:
    other = client.post("/api/pets", json={"name": "Mochi", "species": "cat"}, headers=owner).json()
    created = client.post(f"/api/pets/{pet_id}/feeding-reminders", json={"label": "Breakfast"}, headers=owner).json()

    assert client.get(f"/api/pets/{other['id']}/feeding-reminders", headers=owner).json() == []
    r = client.patch(
        f"/api/pets/{other['id']}/feeding-reminders/{created['id']}",
        json={"enabled": False},
        headers=owner,
    )
    assert r.status_code == 404
