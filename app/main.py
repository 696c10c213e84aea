# /app/main.py

# --- Core FastAPI Imports ---
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .core.config import CORS_ORIGINS
from .core.logging_config import setup_logging
from .db.database import init_db

# --- Application-specific Router Imports ---
from .routers import (
    auth_router,
    users_router,
    classes_router,
    assignments_router,
    submissions_router,
    progress_router,
    dashboard_router,
)

# --- Service Imports for Startup Logic ---
from .services.auth_service import SessionManager

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    setup_logging()
    init_db()
    session_manager = SessionManager()
    session_manager.start()
    app.state.session_manager = session_manager
    logger.info("Classroom backend started")
    yield
    # This code runs ONCE when the application shuts down.
    session_manager.shutdown()
    logger.info("Classroom backend stopped")


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Classroom Progress API",
    description="Classes, assignments, grading, student progress and role-based dashboards.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error Handling ---
@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "A database error occurred."})


# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(users_router.router, prefix="/api/users", tags=["Users"])
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])
app.include_router(assignments_router.router, prefix="/api/assignments", tags=["Assignments"])
app.include_router(submissions_router.router, prefix="/api/submissions", tags=["Submissions"])
app.include_router(progress_router.router, prefix="/api/progress", tags=["Progress"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Classroom backend is running!", "version": app.version}
