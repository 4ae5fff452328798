"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import routing, search

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create app
app = FastAPI(
    title="RO InfraMap API",
    description="Location search and route planning for the Romanian infrastructure map",
    version="0.1.0",
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(search.router, prefix="/search", tags=["search"])
app.include_router(routing.router, prefix="/route", tags=["route"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "RO InfraMap API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
