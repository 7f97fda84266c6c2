from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dex_pool_api.api.deps import build_pool_data_context
from dex_pool_api.api.routers import pools
from dex_pool_api.shared.config import get_settings


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    context = build_pool_data_context(settings)
    app.state.pool_data = context
    logger.info("main: pool_data_context_ready cache_ttl_seconds=%s", settings.pool_cache_ttl_seconds)
    try:
        yield
    finally:
        await context.chain_reader.close()
        app.state.pool_data = None


app = FastAPI(title="DEX Pool API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def health():
    return {"status": "healthy", "message": "Crypto API is running"}


app.include_router(pools.router, prefix="/api/v1/crypto")
