from fastapi import APIRouter

# Public: catalogue
from app.api.v1.public.movies import router as movies_router
from app.api.v1.public.sessions import router as sessions_router

# Public: bookings
from app.api.v1.public.bookings import router as bookings_router

api_router = APIRouter()

# --- Public: catalogue & seat map ---
api_router.include_router(movies_router)
api_router.include_router(sessions_router)

# --- Public: bookings ---
api_router.include_router(bookings_router)
