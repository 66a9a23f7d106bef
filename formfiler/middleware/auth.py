"""Webhook authentication dependency"""
from fastapi import Header, HTTPException
from typing import Optional
import hmac
import logging

from formfiler.config import get_settings

logger = logging.getLogger(__name__)


async def verify_webhook_secret(
    x_webhook_secret: Optional[str] = Header(None)
) -> None:
    """
    Check the shared secret the form platform sends with every call

    The check is skipped when no webhook_secret is configured.

    Raises:
        HTTPException: If the header is missing or wrong
    """
    expected = get_settings().webhook_secret
    if not expected:
        return

    if not x_webhook_secret or not hmac.compare_digest(x_webhook_secret, expected):
        logger.warning("Rejected webhook call with missing or invalid secret")
        raise HTTPException(status_code=401, detail="Invalid webhook secret")
