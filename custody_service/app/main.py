# FastAPI Application Entry Point
import logging
import pathlib

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

# Configuration and Observability
from custody_service.app.config import settings
from custody_service.app.observability import setup_opentelemetry, logger

# Initialize OpenTelemetry
setup_opentelemetry(service_name=settings.SERVICE_NAME)

# Import instrumentors after OTel SDK is initialized
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor

# Database connection
from custody_service.infrastructure.database.connection import connect_to_mongo, close_mongo_connection, ensure_indexes
from custody_service.app.service.bootstrap import initialize_data

# API Routers
from custody_service.app.api.v1.endpoints import health as health_router
from custody_service.app.api.v1.endpoints import auth as auth_router
from custody_service.app.api.v1.endpoints import assets as assets_router
from custody_service.app.api.v1.endpoints import documents as documents_router
from custody_service.app.api.v1.endpoints import release_requests as release_requests_router
from custody_service.app.api.v1.endpoints import admin as admin_router
from custody_service.app.api.v1.endpoints import frontend as frontend_router

# --- FastAPI Application Instance ---
app = FastAPI(
    title="Custody Service",
    description="Tracks custodial assets, owner documents and release requests.",
    version="1.0.0"
)

# --- Event Handlers for DB Connection & OTel Instrumentation ---
@app.on_event("startup")
async def startup_event():
    logger.info("FastAPI application startup...")
    try:
        pathlib.Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)

        PymongoInstrumentor().instrument()
        logger.info("PyMongo instrumentation complete.")

        app.state.mongo_client, app.state.db = await connect_to_mongo(settings.MONGO_DETAILS, settings.DB_NAME)
        await ensure_indexes(app.state.db)
        await initialize_data(app.state.db, settings)
    except Exception as e:
        logger.error(f"Failed during startup: {e}", exc_info=True)
        raise

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("FastAPI application shutdown...")
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        close_mongo_connection(client)
        app.state.mongo_client = None
        app.state.db = None

# Malformed bodies are caller errors: answer 400 with the first problem, never a stack trace
@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    logger.info(f"Rejected malformed request to {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"detail": message})

# Instrument FastAPI app
FastAPIInstrumentor.instrument_app(app)
logger.info("FastAPI instrumentation complete.")

# Include API Routers
app.include_router(health_router.router)
app.include_router(auth_router.router, prefix="/api")
app.include_router(assets_router.router, prefix="/api")
app.include_router(documents_router.router, prefix="/api")
app.include_router(release_requests_router.router, prefix="/api")
app.include_router(admin_router.router, prefix="/api")
app.include_router(frontend_router.router) # catch-all GET, keep last

logger.info("API routers included. Application setup complete.")

# To run: uvicorn custody_service.app.main:app --reload --port 5000
