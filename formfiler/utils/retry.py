"""
Retry utility for transient Supabase connection errors.
Used by background jobs that read the bucket; filing itself never retries.
"""
import time
import logging
from typing import Callable, Any

logger = logging.getLogger(__name__)

TRANSIENT_MARKERS = ("connection reset", "errno 104", "timed out", "remote protocol error")


def is_transient(error: Exception) -> bool:
    """True for connection-level failures worth another attempt"""
    if isinstance(error, (ConnectionResetError, ConnectionError, TimeoutError)):
        return True
    message = str(error).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)


def retry_storage_call(call: Callable[[], Any], max_retries: int = 3, base_delay: float = 0.5) -> Any:
    """
    Execute a storage call with retry logic for transient errors.

    Usage:
        containers = retry_storage_call(lambda: storage.list_containers("submissions"))

    Args:
        call: A callable that performs the storage request
        max_retries: Maximum number of retry attempts
        base_delay: First backoff delay in seconds, doubled per attempt (capped at 4s)

    Returns:
        The call result
    """
    for attempt in range(max_retries + 1):
        try:
            return call()
        except Exception as e:
            if attempt >= max_retries or not is_transient(e):
                raise
            delay = min(base_delay * (2 ** attempt), 4.0)
            logger.warning(
                f"Storage connection error, retry {attempt + 1}/{max_retries}. "
                f"Waiting {delay}s..."
            )
            time.sleep(delay)
