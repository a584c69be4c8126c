# backend/xrayfix/main.py
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import time

from xrayfix.api.dependencies import build_orchestrator
from xrayfix.api.v1.router import api_router
from xrayfix.core.config import settings
from xrayfix.core.exceptions import BuildIdentifierError, PayloadError, RemoteCallError
from xrayfix.core.logging import logger
from xrayfix.scanners import PluginManager, XrayScanner
from xrayfix.services import ServiceContainer


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting xrayfix")
    services = ServiceContainer.create()
    app.state.services = services
    app.state.orchestrator = build_orchestrator(services)

    plugin_manager = PluginManager([XrayScanner(graph=services.graph, xray=services.xray)])
    await plugin_manager.initialize()
    app.state.plugin_manager = plugin_manager

    yield

    # Shutdown
    logger.info("Shutting down xrayfix")
    await plugin_manager.cleanup_all()
    await services.close()


app = FastAPI(
    title="xrayfix",
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=("/api/docs" if settings.ENVIRONMENT == "development" else None),
    redoc_url=None,
    lifespan=lifespan
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


# Include routers
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.exception_handler(PayloadError)
@app.exception_handler(BuildIdentifierError)
async def payload_exception_handler(request: Request, exc: Exception):
    logger.warning(f"Rejected request to {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(RemoteCallError)
async def remote_exception_handler(request: Request, exc: RemoteCallError):
    logger.error(f"Upstream failure while handling {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc), "service": exc.service})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.exception("Unhandled exception while handling request", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
