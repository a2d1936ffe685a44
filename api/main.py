"""
FastAPI Backend dla Grid Tactics.

Endpoints:
    GET  /api/health       - health check
    GET  /api/units        - katalog jednostek
    GET  /api/units/{id}   - szczegóły jednostki
    POST /api/generate     - wygeneruj armię pod limit punktów
    POST /api/path         - najkrótsza ścieżka na siatce
    POST /api/simulate     - uruchom bitwę
    GET  /api/grid-config  - wymiary siatek
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api.routers import units, simulation


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    print("🚀 Grid Tactics API starting...")
    yield
    print("👋 Grid Tactics API shutting down...")


app = FastAPI(
    title="Grid Tactics API",
    description="Backend API for the Grid Tactics battle engine",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(units.router, prefix="/api", tags=["Units"])
app.include_router(simulation.router, prefix="/api", tags=["Simulation"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
