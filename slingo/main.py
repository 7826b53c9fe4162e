"""FastAPI entry point for the Slingo Advisor API."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from slingo.config import LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Slingo Advisor API",
    version="0.1.0",
    description="Recommends wild and super wild placements on a Slingo board",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Import and include routers
from slingo.api.routes_analyze import router as analyze_router

app.include_router(analyze_router, prefix="/api", tags=["analysis"])


@app.get("/api/health")
async def health():
    return {"status": "ok"}
