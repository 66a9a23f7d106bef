"""Form submission webhook"""
from fastapi import APIRouter, Depends
import logging

from formfiler.config import get_settings
from formfiler.database import get_storage
from formfiler.middleware.auth import verify_webhook_secret
from formfiler.models.outcomes import OrchestratorResult
from formfiler.models.submission import SubmissionEvent
from formfiler.services.notifier import get_notifier
from formfiler.services.orchestrator import process_submission

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=OrchestratorResult, dependencies=[Depends(verify_webhook_secret)])
def receive_submission(
    event: SubmissionEvent,
    storage=Depends(get_storage),
    notifier=Depends(get_notifier)
):
    """
    File one submission (called by the form platform on every submit)

    Fatal failures are reported to the admin and returned with status
    "fatal" but still answer 200, so the platform does not redeliver and
    create a second folder.
    """
    logger.info(f"Received submission {event.response_id or '(no id)'} with {len(event.items)} answers")
    config = get_settings().filing_config()
    return process_submission(event, config, storage, notifier)
