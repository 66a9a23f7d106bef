"""Folder maintenance endpoints"""
from fastapi import APIRouter, Depends
import logging

from formfiler.config import get_settings
from formfiler.database import get_storage
from formfiler.middleware.auth import verify_webhook_secret
from formfiler.services.reclassifier import ReclassifyReport, reclassify_folders

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/reclassify", response_model=ReclassifyReport, dependencies=[Depends(verify_webhook_secret)])
def reclassify(storage=Depends(get_storage)):
    """Sort submission folders into year/month/status folders now"""
    return reclassify_folders(storage, get_settings().destination_container_id)


def run_scheduled_reclassify():
    """Scheduler entry point; errors are logged so the job keeps running"""
    try:
        reclassify_folders(get_storage(), get_settings().destination_container_id)
    except Exception as e:
        logger.error(f"Background reclassify error: {e}")
