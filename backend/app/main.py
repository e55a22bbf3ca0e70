import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import SessionLocal, get_db
from app.core.errors import StoreError, TermTrendsError
from app.api.api_v1.api import api_router
from app.initialization import ApplicationInitializer
from settings import APIConfig

# Initialize logger for uvicorn
uvicorn_logger = logging.getLogger("uvicorn")
uvicorn_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""

    initializer = ApplicationInitializer()

    try:
        uvicorn_logger.info("🚀 Starting Term Trends API initialization...")

        with SessionLocal() as db:
            uvicorn_logger.info("📊 Initializing database...")
            db_status = initializer.initialize_database(db)

            if not db_status["schema_ready"]:
                uvicorn_logger.warning("⚠️ Database initialization incomplete")
                if "error" in db_status:
                    uvicorn_logger.error(f"❌ Error: {db_status['error']}")

            app.state.initialization_summary = initializer.get_initialization_summary(db)

        uvicorn_logger.info("🎉 Term Trends API initialization completed! 🚀")

        yield

    except Exception as e:
        uvicorn_logger.error(f"🔥 Startup error: {e}")
        import traceback
        uvicorn_logger.error(f"Full traceback: {traceback.format_exc()}")
        raise

# FastAPI app setup
app = FastAPI(
    title="Term Trends API",
    description="API for tracking how often saved search terms appear in ingested documents over time",
    version="1.0.0",
    lifespan=lifespan
)

# CORS Middleware Setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error mapping
@app.exception_handler(TermTrendsError)
async def term_trends_error_handler(request: Request, exc: TermTrendsError):
    if isinstance(exc, StoreError):
        uvicorn_logger.error(f"💥 {request.method} {request.url.path}: {exc} ({exc.__cause__!r})")
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed query/path/body parameters are client errors (400)."""
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{location}: {err.get('msg')}")
    return JSONResponse(status_code=400, content={"detail": "; ".join(messages) or "Invalid request"})

# API Router Setup
app.include_router(api_router, prefix=APIConfig.API_PREFIX)

@app.get("/")
def read_root():
    """Root endpoint with API information."""
    return {
        "message": "Term Trends API is running!",
        "version": "1.0.0",
        "features": [
            "Search term management",
            "Day/month/year mention buckets",
            "Category-wide term aggregation",
            "Document drill-down",
            "CSV export with per-term scores"
        ],
        "docs": "/docs",
        "health": "/health"
    }

@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint with database status."""
    try:
        summary = ApplicationInitializer(bind=db.get_bind()).get_initialization_summary(db)
        if "error" in summary:
            return {"status": "error", "error": summary["error"], "version": "1.0.0"}
        return {
            "status": "healthy",
            "version": "1.0.0",
            "components": {
                "database": summary.get("database", {}),
            },
            "granularities": summary.get("granularities", []),
        }
    except Exception as e:
        return {
            "status": "error",
            "error": str(e),
            "version": "1.0.0"
        }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
