"""FastAPI application factory."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

import httpx
from dotenv import load_dotenv
from fastapi import FastAPI

# Load .env file from project root (must be before other imports)
load_dotenv()
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from vfrplan.api.routes import (  # noqa: E402
    aircraft,
    airports,
    flight_plan,
    geocode,
    navigation,
    weather,
)
from vfrplan.services.aircraft_catalog import list_profiles  # noqa: E402
from vfrplan.services.airports import OurAirportsClient  # noqa: E402

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open one outbound HTTP client for all third-party lookups."""
    client = httpx.AsyncClient(timeout=15.0)
    app.state.http_client = client
    app.state.airport_client = OurAirportsClient(client)
    logger.info("VFR planner API started with %d aircraft profiles", len(list_profiles()))
    try:
        yield
    finally:
        await client.aclose()
        logger.info("Outbound HTTP client closed")


app = FastAPI(
    title="VFR Planner API",
    description="VFR navigation log, fuel planning and weight & balance",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(navigation.router, prefix="/api")
app.include_router(flight_plan.router, prefix="/api")
app.include_router(aircraft.router, prefix="/api")
app.include_router(weather.router, prefix="/api")
app.include_router(geocode.router, prefix="/api")
app.include_router(airports.router, prefix="/api")


@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "aircraft": [p.code for p in list_profiles()],
    }
