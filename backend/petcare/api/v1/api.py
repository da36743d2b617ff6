"""Module: api."""

# backend/petcare/api/v1/api.py
from fastapi import APIRouter

# Operational routes (liveness/auth).
from petcare.api.v1.routes.health import router as health_router
from petcare.api.v1.routes.auth import router as auth_router

# Domain routes consumed by the mobile app.
from petcare.api.v1.routes.pets import router as pets_router
from petcare.api.v1.routes.habits import router as habits_router
from petcare.api.v1.routes.reminders import router as reminders_router
from petcare.api.v1.routes.community import router as community_router


api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])

# Habit and reminder routes hang off /pets/{pet_id} like the profile routes.
api_router.include_router(pets_router, prefix="/pets", tags=["pets"])
api_router.include_router(habits_router, prefix="/pets", tags=["habits"])
api_router.include_router(reminders_router, prefix="/pets", tags=["reminders"])
api_router.include_router(community_router, tags=["community"])
