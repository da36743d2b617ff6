"""Module: client.

Async HTTP client for the PetCare API, the Python counterpart of the mobile
app's API layer.

    async with PetCareClient("http://localhost:3000/api") as api:
        await api.login("owner@example.com", "secret1")
        report = await api.fetch_health_trends(pet_id)
"""

from typing import Any

import httpx

DEFAULT_TIMEOUT = 10


class PetCareAPIError(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class PetCareClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "PetCareClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        r = await self._client.request(method, url, headers=self._headers(), **kwargs)
        if r.is_error:
            try:
                detail = r.json().get("detail", r.text)
            except ValueError:
                detail = r.text
            raise PetCareAPIError(r.status_code, str(detail))
        return r.json()

    # -------------------------
    # Auth
    # -------------------------
    async def register(self, name: str, email: str, password: str) -> dict:
        data = await self._request("POST", "/auth/register", json={"name": name, "email": email, "password": password})
        self.token = data["token"]
        return data["user"]

    async def login(self, email: str, password: str) -> dict:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data["user"]

    # -------------------------
    # Pets and health profile
    # -------------------------
    async def list_pets(self) -> list[dict]:
        return await self._request("GET", "/pets")

    async def create_pet(self, name: str, species: str, **fields) -> dict:
        return await self._request("POST", "/pets", json={"name": name, "species": species, **fields})

    async def update_pet(self, pet_id: str, **fields) -> dict:
        return await self._request("PUT", f"/pets/{pet_id}", json=fields)

    async def fetch_health_profile(self, pet_id: str) -> dict:
        return await self._request("GET", f"/pets/{pet_id}/health")

    async def fetch_health_trends(self, pet_id: str, end_date: str | None = None) -> dict:
        params = {"endDate": end_date} if end_date else None
        return await self._request("GET", f"/pets/{pet_id}/health/trends", params=params)

    async def fetch_habit_analytics(self, pet_id: str, end_date: str | None = None) -> dict:
        params = {"endDate": end_date} if end_date else None
        return await self._request("GET", f"/pets/{pet_id}/habit-analytics", params=params)

    # -------------------------
    # Habit check-ins
    # -------------------------
    async def record_habit_entry(self, pet_id: str, payload: dict) -> dict:
        return await self._request("POST", f"/pets/{pet_id}/habits", json=payload)

    async def fetch_habit_entries(self, pet_id: str, limit: int = 5) -> list[dict]:
        return await self._request("GET", f"/pets/{pet_id}/habits", params={"limit": limit})

    # -------------------------
    # Feeding reminders
    # -------------------------
    async def fetch_feeding_reminders(self, pet_id: str) -> list[dict]:
        return await self._request("GET", f"/pets/{pet_id}/feeding-reminders")

    async def create_feeding_reminder(self, pet_id: str, label: str, time: str, enabled: bool = True) -> dict:
        return await self._request(
            "POST",
            f"/pets/{pet_id}/feeding-reminders",
            json={"label": label, "time": time, "enabled": enabled},
        )

    async def update_feeding_reminder(self, pet_id: str, reminder_id: str, **fields) -> dict:
        return await self._request("PATCH", f"/pets/{pet_id}/feeding-reminders/{reminder_id}", json=fields)
