# docflow/main.py

import sys

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from loguru import logger

from docflow.core.config import settings
from docflow.api.deps import GateRedirect
from docflow.api.middleware import EdgeGatingMiddleware

# Routers
from docflow.api.endpoints import (
    pages as pages_router,
    reports as reports_router,
)

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.ENV == "dev",
)

# ------------------------------------------------------------
# FASTAPI APP INIT
# ------------------------------------------------------------
app = FastAPI(
    title="Docflow Portal",
    version="1.0.0",
    description="Role-aware page shells and report export for the document workflow system.",
)

# ------------------------------------------------------------
# MIDDLEWARE
# ------------------------------------------------------------
app.add_middleware(EdgeGatingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


# ------------------------------------------------------------
# GATE REDIRECTS
# ------------------------------------------------------------
@app.exception_handler(GateRedirect)
async def gate_redirect_handler(request: Request, exc: GateRedirect):
    logger.debug(f"Gate redirect {request.url.path} -> {exc.target}")
    return RedirectResponse(exc.target, status_code=307)


# ------------------------------------------------------------
# HEALTH
# ------------------------------------------------------------
@app.get("/api/health", tags=["System"])
async def health():
    return {"status": "Online", "version": app.version, "backend": settings.API_BASE_URL}


# ------------------------------------------------------------
# REGISTER ROUTERS
# ------------------------------------------------------------
app.include_router(reports_router.router)
app.include_router(pages_router.router)


@app.on_event("startup")
async def on_startup():
    logger.info(f"Starting Docflow Portal ({settings.ENV}); backend at {settings.API_BASE_URL}")
