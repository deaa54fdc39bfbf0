import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.config import settings
from portal.routers import search, warehouses

logger = logging.getLogger("portal")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pooled upstream client for the whole process
    app.state.http_client = httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.api_timeout_seconds,
    )
    logger.info("Upstream API: %s", settings.api_base_url)
    yield
    await app.state.http_client.aclose()


app = FastAPI(
    title="Portal Search",
    description="Universal search for the logistics customer portal",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(search.router, prefix=settings.api_prefix)
app.include_router(warehouses.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
