"""PetCareClient against the in-process app."""
import httpx
import pytest

from petcare.client import PetCareAPIError, PetCareClient

pytestmark = pytest.mark.anyio


@pytest.fixture
def api(app):
    return PetCareClient("http://testserver/api", transport=httpx.ASGITransport(app=app))


async def test_register_stores_token_and_manages_pets(api) -> None:
    async with api:
        user = await api.register("Alice", "alice@example.com", "secret123")
        assert user["email"] == "alice@example.com"
        assert api.token

        pet = await api.create_pet("Coco", "dog", ageInMonths=18)
        assert pet["name"] == "Coco"

        updated = await api.update_pet(pet["id"], weightKg=10.5)
        assert updated["weightKg"] == 10.5

        pets = await api.list_pets()
        assert [p["id"] for p in pets] == [pet["id"]]

        profile = await api.fetch_health_profile(pet["id"])
        assert profile["age"] == 1
        assert profile["feedingPlan"]["schedule"] == []


async def test_habit_round_trip(api) -> None:
    async with api:
        await api.register("Alice", "alice@example.com", "secret123")
        pet = await api.create_pet("Coco", "dog")

        entry = await api.record_habit_entry(
            pet["id"],
            {"date": "2024-10-20", "feedingGrams": 320, "exerciseMinutes": 30, "completedTasks": ["feeding"]},
        )
        assert entry["feedingGrams"] == 320

        history = await api.fetch_habit_entries(pet["id"], limit=3)
        assert [e["date"] for e in history] == ["2024-10-20"]

        report = await api.fetch_health_trends(pet["id"], end_date="2024-10-20")
        assert len(report["points"]) == 7
        assert report["points"][-1]["exerciseMinutes"] == 30

        analytics = await api.fetch_habit_analytics(pet["id"], end_date="2024-10-20")
        assert analytics["streakDays"] == 1


async def test_feeding_reminders(api) -> None:
    async with api:
        await api.register("Alice", "alice@example.com", "secret123")
        pet = await api.create_pet("Coco", "dog")

        reminder = await api.create_feeding_reminder(pet["id"], "Dinner", "18:30")
        assert reminder["enabled"] is True

        toggled = await api.update_feeding_reminder(pet["id"], reminder["id"], enabled=False)
        assert toggled["enabled"] is False

        reminders = await api.fetch_feeding_reminders(pet["id"])
        assert [r["label"] for r in reminders] == ["Dinner"]


async def test_errors_raise_with_server_detail(api) -> None:
    async with api:
        with pytest.raises(PetCareAPIError) as excinfo:
            await api.list_pets()
        assert excinfo.value.status_code == 401

        await api.register("Alice", "alice@example.com", "secret123")
        api.token = None
        with pytest.raises(PetCareAPIError) as excinfo:
            await api.login("alice@example.com", "wrong-password")
        assert excinfo.value.status_code == 401
        assert excinfo.value.detail == "Invalid email or password"

        await api.login("alice@example.com", "secret123")
        assert api.token
