"""FastAPI application entry point and configuration."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.schedule_router import router as schedule_router
from backend.config import settings

if settings.debug:
    logging.basicConfig(level=logging.DEBUG)

app = FastAPI(
    title=settings.app_name,
    description="SM-2 review scheduling for flashcard decks",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(schedule_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Return service status."""
    return {"status": "ok"}
