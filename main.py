import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from shortlink_app.config import settings
from shortlink_app.logger import setup_logging
from shortlink_app.api.v1 import urls, redirect
from shortlink_app.audit.worker import AuditWorker
from shortlink_app.dependencies import get_audit_logger, get_audit_queue, get_audit_sink
from shortlink_app.middleware import AuditMiddleware

setup_logging()


def _resolve(dependency):
    """Call a dependency directly, honouring app.dependency_overrides"""
    return app.dependency_overrides.get(dependency, dependency)()


def request_audit_logger():
    """AuditLogger for code running outside FastAPI's dependency injection"""
    return get_audit_logger(queue=_resolve(get_audit_queue))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the audit worker for the lifetime of the app"""
    logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.environment})")
    worker = AuditWorker(
        queue=_resolve(get_audit_queue),
        sink=_resolve(get_audit_sink),
        queue_name=settings.audit_queue_name,
        batch_size=settings.audit_batch_size,
        poll_interval=settings.audit_poll_interval
    )
    worker_task = asyncio.create_task(worker.start())
    await request_audit_logger().log("info", "service", f"{settings.app_name} started")

    yield

    worker.stop()
    await worker_task
    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener with per-click analytics",
    debug=settings.debug,
    lifespan=lifespan
)

app.add_middleware(AuditMiddleware, audit_factory=request_audit_logger)


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    """Fail the single request with a generic 500; the service keeps running"""
    logger.opt(exception=exc).error(f"Unhandled exception in {request.method} {request.url.path}")
    await request_audit_logger().log("fatal", "handler", "unexpected server error")
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(urls.router)
app.include_router(redirect.router)
