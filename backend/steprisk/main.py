import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from steprisk.models.config import load_engine_config
from steprisk.routers import risk

load_dotenv()

logger = logging.getLogger(__name__)

# Rate limiter: 100 requests/minute per IP by default
# Disable in test mode (TESTING env var set by conftest.py)
_rate_limit_enabled = os.getenv("TESTING", "").lower() != "true"
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["100/minute"],
    enabled=_rate_limit_enabled,
)

app = FastAPI(
    title="Step Risk API",
    description="걸음수 기반 낙상/노쇠/정신건강 위험도 평가",
    version="1.0.0"
)

# Attach rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Engine configuration is built once and shared read-only
app.state.engine_config = load_engine_config()
logger.info("Engine configuration loaded: %s", app.state.engine_config)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(risk.router, prefix="/api/risk", tags=["risk"])


@app.get("/")
async def root():
    return {"message": "Step Risk API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
