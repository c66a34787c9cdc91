"""
DOE Studio Web Backend - FastAPI Application.

This is the main entry point for the web backend.
Run with: uvicorn web_frontend.backend.app:app --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder

from doe_studio import OptimizationInProgressError, __version__

from .config import config
from .routes import designs, export, optimize, patterns, preview, templates, validate
from .services.task_manager import task_manager


# Create FastAPI app
app = FastAPI(
    title="DOE Studio",
    description="Parameter preview and optimization service for Diffractive Optical Elements",
    version=__version__,
)

# CORS middleware for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins in development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Validation error handler for debugging
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log validation errors with details before returning 422."""
    errors = exc.errors()
    print(f"[VALIDATION ERROR] {request.url.path}")
    for error in errors:
        print(f"  - {error['loc']}: {error['msg']} (type: {error['type']})")
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(errors)}
    )


@app.exception_handler(OptimizationInProgressError)
async def in_progress_handler(request: Request, exc: OptimizationInProgressError):
    """409 with the id of the task already running for the design."""
    print(f"[Optimize] Rejected: {exc}")
    return JSONResponse(
        status_code=409,
        content={
            "detail": str(exc),
            "task_id": exc.task_id,
            "retryable": exc.retryable,
        },
    )


# Include API routers
app.include_router(preview.router)
app.include_router(validate.router)
app.include_router(designs.router)
app.include_router(optimize.router)
app.include_router(templates.router)
app.include_router(patterns.router)
app.include_router(export.router)


@app.get("/")
async def root():
    return {"message": "DOE Studio API", "docs": "/docs"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.on_event("startup")
async def startup_event():
    """Initialize on startup."""
    print("DOE Studio backend starting...")
    print(f"Pixel ceiling: {config.pixel_ceiling}")
    print(f"Max concurrent tasks: {config.max_concurrent_tasks}")
    print(f"Optimize timeout: {config.optimize_timeout_seconds}s")
    print(f"Optimizer: {task_manager.optimizer.name}")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    print("DOE Studio backend shutting down...")
    task_manager.cleanup_old_tasks()
    task_manager.shutdown(wait=True)


# Development runner
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "web_frontend.backend.app:app",
        host=config.host,
        port=config.port,
        reload=True
    )
