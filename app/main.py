"""
Workout Builder Service - Main Entry Point

Generates structured workout plans and stores, shares and tracks them.
"""
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.core.config import settings
from app.core.database import init_db
from app.core.logger import logger
from app.core.limiter import limiter
from app.routes import workout, workouts, share, performance
from app.services.catalog import get_catalog


# Validate configuration on startup
try:
    settings.validate()
    logger.info("Configuration validated successfully")
except ValueError as e:
    logger.error(f"Configuration error: {e}")
    raise

init_db()
get_catalog()


# Create FastAPI app
app = FastAPI(
    title="Workout Builder Service",
    description="Workout plan generator with saved workouts, short links and performance tracking",
    version="1.0.0"
)

# Attach rate limiter and its error handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# Include route modules
app.include_router(workout.router, tags=["Workout"])
app.include_router(workouts.router, tags=["Saved Workouts"])
app.include_router(share.router, tags=["Share"])
app.include_router(performance.router, tags=["Performance"])


@app.get("/")
@limiter.limit("60/minute")
def root(request: Request):
    """Health check endpoint."""
    return {"message": "Workout Builder running"}


@app.get("/health")
def health():
    """
    Detailed health status.
    Returns 'degraded' if required environment variables are missing.
    """
    if not settings.INTERNAL_API_SECRET:
        return JSONResponse(
            status_code=200,
            content={
                "status": "degraded",
                "service": "workout-builder",
                "version": "1.0.0",
                "missing_config": ["INTERNAL_API_SECRET"],
                "message": "Missing required environment variables: INTERNAL_API_SECRET"
            }
        )

    return {
        "status": "healthy",
        "service": "workout-builder",
        "version": "1.0.0"
    }


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False
    )
