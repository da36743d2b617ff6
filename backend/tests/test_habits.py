"""Habit check-in, trend and analytics endpoint tests."""
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from petcare.db.models.habit_entry import HabitEntry


def _habit_rows(app, pet_id: str) -> int:
    with app.state.database.SessionLocal() as session:
        return session.execute(
            select(func.count()).select_from(HabitEntry).where(HabitEntry.pet_id == int(pet_id))
        ).scalar_one()


def test_record_habit_entry(client, owner, pet_id) -> None:
    r = client.post(
        f"/api/pets/{pet_id}/habits",
        json={
            "date": "2024-10-20",
            "feedingGrams": 320,
            "exerciseMinutes": 30,
            "weightKg": 11.2,
            "completedTasks": ["feeding", "walking"],
            "notes": "Good appetite",
        },
        headers=owner,
    )
    assert r.status_code == 201
    body = r.json()
    assert isinstance(body["id"], str)
    assert body["date"] == "2024-10-20"
    assert body["feedingGrams"] == 320
    assert body["exerciseMinutes"] == 30
    assert body["weightKg"] == 11.2
    assert body["completedTasks"] == ["feeding", "walking"]
    assert body["notes"] == "Good appetite"


def test_same_day_check_in_overwrites(app, client, owner, pet_id) -> None:
    url = f"/api/pets/{pet_id}/habits"
    first = client.post(url, json={"date": "2024-10-20", "feedingGrams": 320, "completedTasks": ["feeding"]}, headers=owner)
    second = client.post(url, json={"date": "2024-10-20", "feedingGrams": 280, "exerciseMinutes": 45}, headers=owner)

    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["feedingGrams"] == 280
    assert second.json()["exerciseMinutes"] == 45
    assert second.json()["completedTasks"] == []
    assert _habit_rows(app, pet_id) == 1

    history = client.get(url, headers=owner).json()
    assert len(history) == 1
    assert history[0]["feedingGrams"] == 280


def test_non_numeric_values_are_stored_as_null(client, owner, pet_id) -> None:
    r = client.post(
        f"/api/pets/{pet_id}/habits",
        json={"date": "2024-10-20", "feedingGrams": "lots", "exerciseMinutes": 29.6, "weightKg": 11.234},
        headers=owner,
    )
    assert r.status_code == 201
    body = r.json()
    assert body["feedingGrams"] is None
    assert body["exerciseMinutes"] == 30
    assert body["weightKg"] == 11.23

    r = client.post(
        f"/api/pets/{pet_id}/habits",
        json={"date": "2024-10-21", "feedingGrams": True, "weightKg": None},
        headers=owner,
    )
    assert r.json()["feedingGrams"] is None
    assert r.json()["weightKg"] is None


def test_rejects_malformed_dates(app, client, owner, pet_id) -> None:
    url = f"/api/pets/{pet_id}/habits"
    for bad in ("2024-02-30", "20241020", "2024/10/20", "", "yesterday"):
        r = client.post(url, json={"date": bad, "feedingGrams": 100}, headers=owner)
        assert r.status_code == 400, bad
        assert "detail" in r.json()

    assert client.post(url, json={"feedingGrams": 100}, headers=owner).status_code == 400
    assert _habit_rows(app, pet_id) == 0


def test_history_is_newest_first_and_limited(client, owner, pet_id) -> None:
    url = f"/api/pets/{pet_id}/habits"
    for day in ("2024-10-18", "2024-10-20", "2024-10-19"):
        client.post(url, json={"date": day, "feedingGrams": 300}, headers=owner)

    dates = [e["date"] for e in client.get(url, headers=owner).json()]
    assert dates == ["2024-10-20", "2024-10-19", "2024-10-18"]

    limited = client.get(url, params={"limit": 2}, headers=owner).json()
    assert [e["date"] for e in limited] == ["2024-10-20", "2024-10-19"]

    # Non-positive limits fall back to the default.
    assert len(client.get(url, params={"limit": 0}, headers=owner).json()) == 3


def test_history_defaults_to_five_entries(client, owner, pet_id) -> None:
    url = f"/api/pets/{pet_id}/habits"
    for day in range(1, 9):
        client.post(url, json={"date": f"2024-10-{day:02d}"}, headers=owner)

    entries = client.get(url, headers=owner).json()
    assert len(entries) == 5
    assert entries[0]["date"] == "2024-10-08"


def test_trend_scenario_zero_fills_missing_days(client, register_user) -> None:
    headers, _ = register_user(name="Jamie")
    pet = client.post(
        "/api/pets",
        json={"name": "Coco", "species": "dog", "ageInMonths": 18},
        headers=headers,
    ).json()

    saved = client.post(
        f"/api/pets/{pet['id']}/habits",
        json={
            "date": "2024-10-20",
            "feedingGrams": 320,
            "exerciseMinutes": 30,
            "completedTasks": ["feeding", "walking"],
        },
        headers=headers,
    )
    assert saved.status_code == 201

    r = client.get(f"/api/pets/{pet['id']}/health/trends", params={"endDate": "2024-10-20"}, headers=headers)
    assert r.status_code == 200
    report = r.json()
    assert report["petId"] == pet["id"]

    points = report["points"]
    assert [p["date"] for p in points] == [f"2024-10-{day}" for day in range(14, 21)]
    assert points[-1] == {"date": "2024-10-20", "feedingGrams": 320, "exerciseMinutes": 30, "weightKg": 0}
    for point in points[:-1]:
        assert point["feedingGrams"] == 0
        assert point["exerciseMinutes"] == 0
        assert point["weightKg"] == 0


def test_trends_default_to_today(client, owner, pet_id) -> None:
    today = date.today()
    client.post(
        f"/api/pets/{pet_id}/habits",
        json={"date": today.isoformat(), "feedingGrams": 250},
        headers=owner,
    )

    points = client.get(f"/api/pets/{pet_id}/health/trends", headers=owner).json()["points"]
    assert len(points) == 7
    assert points[0]["date"] == (today - timedelta(days=6)).isoformat()
    assert points[-1]["date"] == today.isoformat()
    assert points[-1]["feedingGrams"] == 250


def test_trends_without_entries_are_all_zero(client, owner, pet_id) -> None:
    points = client.get(
        f"/api/pets/{pet_id}/health/trends", params={"endDate": "2024-03-01"}, headers=owner
    ).json()["points"]
    # Window crosses the leap day.
    assert points[0]["date"] == "2024-02-24"
    assert "2024-02-29" in [p["date"] for p in points]
    assert all(p["feedingGrams"] == 0 and p["exerciseMinutes"] == 0 and p["weightKg"] == 0 for p in points)


def test_trends_reject_bad_end_date(client, owner, pet_id) -> None:
    r = client.get(f"/api/pets/{pet_id}/health/trends", params={"endDate": "20-10-2024"}, headers=owner)
    assert r.status_code == 400


def test_habit_endpoints_enforce_ownership(client, owner, stranger, pet_id) -> None:
    assert client.get(f"/api/pets/{pet_id}/habits", headers=stranger).status_code == 403
    assert client.get(f"/api/pets/{pet_id}/health/trends", headers=stranger).status_code == 403
    assert client.get(f"/api/pets/{pet_id}/habit-analytics", headers=stranger).status_code == 403
    assert client.get("/api/pets/424242/health/trends", headers=owner).status_code == 404
    assert client.get(f"/api/pets/{pet_id}/health/trends").status_code == 401


def test_habit_analytics_for_a_full_week(client, owner, pet_id) -> None:
    url = f"/api/pets/{pet_id}/habits"
    for day in range(14, 21):
        client.post(
            url,
            json={"date": f"2024-10-{day}", "exerciseMinutes": 30, "completedTasks": ["feeding"]},
            headers=owner,
        )

    r = client.get(f"/api/pets/{pet_id}/habit-analytics", params={"endDate": "2024-10-20"}, headers=owner)
    assert r.status_code == 200
    body = r.json()
    assert body["petId"] == pet_id
    assert body["streakDays"] == 7
    assert body["consistencyScore"] == 100
    assert body["companionshipScore"] == 100
    assert any("streak" in line for line in body["insights"])


def test_storage_failure_returns_500(client, owner, pet_id, monkeypatch) -> None:
    def _broken(*args, **kwargs):
        raise OperationalError("SELECT habit_entries", {}, Exception("database is locked"))

    monkeypatch.setattr("petcare.services.habits.list_recent_entries", _broken)

    r = client.get(f"/api/pets/{pet_id}/health/trends", headers=owner)
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error, please try again later"}


def test_out_of_range_metrics_are_stored_as_null(client, owner, pet_id) -> None:
    r = client.post(
        f"/api/pets/{pet_id}/habits",
        json={"date": "2024-10-20", "feedingGrams": 1e20, "exerciseMinutes": 2**40, "weightKg": 1000},
        headers=owner,
    )
    assert r.status_code == 201
    body = r.json()
    assert body["feedingGrams"] is None
    assert body["exerciseMinutes"] is None
    assert body["weightKg"] is None

    r = client.post(
        f"/api/pets/{pet_id}/habits",
        json={"date": "2024-10-21", "feedingGrams": -5, "exerciseMinutes": 2_147_483_647, "weightKg": 999.99},
        headers=owner,
    )
    assert r.status_code == 201
    body = r.json()
    assert body["feedingGrams"] is None
    assert body["exerciseMinutes"] == 2_147_483_647
    assert body["weightKg"] == 999.99


def test_null_completed_tasks_is_an_empty_list(client, owner, pet_id) -> None:
    r = client.post(
        f"/api/pets/{pet_id}/habits",
        json={"date": "2024-10-20", "feedingGrams": 300, "completedTasks": None},
        headers=owner,
    )
    assert r.status_code == 201
    assert r.json()["completedTasks"] == []


def test_trends_cover_last_seven_of_fourteen_entries(client, owner, pet_id) -> None:
    url = f"/api/pets/{pet_id}/habits"
    for day in range(7, 21):
        client.post(url, json={"date": f"2024-10-{day:02d}", "feedingGrams": day * 10}, headers=owner)

    points = client.get(
        f"/api/pets/{pet_id}/health/trends", params={"endDate": "2024-10-20"}, headers=owner
    ).json()["points"]
    assert [p["date"] for p in points] == [f"2024-10-{day}" for day in range(14, 21)]
    assert [p["feedingGrams"] for p in points] == [day * 10 for day in range(14, 21)]
