"""Main FastAPI application for Squash Match."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from squash_match.exceptions import BookingError
from squash_match.models import Error
from squash_match.rate_limit import limiter
from squash_match.routers import advice, auth, bookings, confirmations, courts, health, matches, players
from squash_match.services.registry import registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await registry.start()
    logger.info(
        "Squash Match ready: %d courts, %d active bookings",
        len(registry.reference.list_courts()),
        len(registry.store),
    )
    yield
    await registry.stop()


app = FastAPI(
    title="Squash Match API",
    description="Book squash courts and find opponents through open matches",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    logger.info("%s: %s", exc.error, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=Error(error=exc.error, message=exc.message, details=exc.details).model_dump(),
    )


app.include_router(health.router)
app.include_router(auth.router)
app.include_router(courts.router)
app.include_router(players.router)
app.include_router(bookings.router)
app.include_router(confirmations.router)
app.include_router(matches.router)
app.include_router(advice.router)
