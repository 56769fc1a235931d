"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from venuebook.api.routes import auth, events, bookings, hotel, saved_events, admin, media

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(events.router)
api_router.include_router(bookings.router)
api_router.include_router(hotel.router)
api_router.include_router(saved_events.router)
api_router.include_router(admin.router)
api_router.include_router(media.router)
