from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .database import engine, Base
from .exception_handlers import register_exception_handlers
from .utils.logging import setup_app_logging
from .api import resumes, assistant, export

# This creates the tables. For production, use Alembic migrations.
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Resume Builder API",
    description="API for saving resumes, ATS optimization, cover letters and PDF export.",
    version="1.0.0"
)

setup_app_logging(app, settings.LOG_LEVEL)
register_exception_handlers(app)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Mount Routers ---
api_prefix = "/api"
app.include_router(resumes.router, prefix=api_prefix, tags=["Resumes"])
app.include_router(assistant.router, prefix=api_prefix, tags=["Assistant"])
app.include_router(export.router, prefix=api_prefix, tags=["Export"])

@app.get("/health", tags=["System"])
def health_check():
    return {"status": "ok", "message": "API is running"}
