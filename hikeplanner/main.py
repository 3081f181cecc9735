"""
HikePlanner HTTP service.

Run with `python -m hikeplanner.main` or `uvicorn hikeplanner.main:app`.
Environment:
    HIKEPLANNER_LOG_LEVEL   log level name (default INFO)
    HIKEPLANNER_LOG_JSON    "1" for JSON log lines
    HIKEPLANNER_CORS_ORIGINS  comma-separated origins (default "*")
"""

import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hikeplanner.graph.route_planner_api import router as route_planner_router
from hikeplanner.shared.logging.config import setup_logging

load_dotenv()

setup_logging(
    level=getattr(logging, os.getenv("HIKEPLANNER_LOG_LEVEL", "INFO").upper(), logging.INFO),
    json_output=os.getenv("HIKEPLANNER_LOG_JSON") == "1",
)

API_VERSION = "0.1.0"

app = FastAPI(
    title="HikePlanner",
    description="Multi-modal hiking routes from free-text queries",
    version=API_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("HIKEPLANNER_CORS_ORIGINS", "*").split(","),
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(route_planner_router)


@app.get("/")
async def root():
    """Service name and the route planner endpoints."""
    return {
        "name": "HikePlanner",
        "version": API_VERSION,
        "endpoints": {
            "plan": "POST /api/routes/plan",
            "history": "GET /api/routes/history/{user_id}",
            "user_stats": "GET /api/routes/stats/{user_id}",
            "stats": "GET /api/routes/stats",
        },
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
