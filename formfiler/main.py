"""Main FastAPI application"""
from fastapi import FastAPI
from formfiler.config import get_settings
from formfiler.middleware.error_handler import ErrorHandlerMiddleware
from contextlib import asynccontextmanager
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

RECLASSIFY_JOB_ID = "reclassify_submission_folders"

# APScheduler setup
scheduler = None


def setup_scheduler():
    """
    Start the background scheduler for folder reclassification

    The job is registered under a fixed id with replace_existing, so
    calling this again replaces the job instead of adding a duplicate.
    """
    global scheduler
    interval = get_settings().reclassify_interval_minutes
    if interval <= 0:
        logger.info("Folder reclassification schedule disabled")
        return

    try:
        from apscheduler.schedulers.background import BackgroundScheduler
        from formfiler.routers.folders import run_scheduled_reclassify

        if scheduler is None:
            scheduler = BackgroundScheduler()

        scheduler.add_job(
            run_scheduled_reclassify,
            'interval',
            minutes=interval,
            id=RECLASSIFY_JOB_ID,
            name='Sort submission folders into year/month/status folders',
            replace_existing=True
        )

        if not scheduler.running:
            scheduler.start()
        logger.info(f"Background scheduler started - reclassifying every {interval} minutes")
    except Exception as e:
        logger.error(f"Failed to start scheduler: {e}")


def shutdown_scheduler():
    """Shutdown the scheduler gracefully"""
    global scheduler
    if scheduler and scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Background scheduler stopped")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    setup_scheduler()
    yield
    # Shutdown
    shutdown_scheduler()


# Create FastAPI app with lifespan
app = FastAPI(
    title="Form Filer API",
    description="Files form submissions into named folders and announces them by email",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "formfiler", "scheduler": "running" if scheduler and scheduler.running else "stopped"}

# Import and include routers
from formfiler.routers import submissions, folders

app.include_router(submissions.router, prefix="/api/submissions", tags=["Submissions"])
app.include_router(folders.router, prefix="/api/folders", tags=["Folders"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
