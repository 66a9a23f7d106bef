"""Notification emails via Resend"""
from typing import Dict, List, Optional, Sequence, AbstractSet
import logging
import time
import httpx

from formfiler.config import get_settings
from formfiler.models.submission import ItemKind, ItemResponse
from formfiler.services.responses import flatten_answer

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
# Emitted as markup, never escaped
NO_RESPONSE_HTML = "<em>No response provided</em>"

# Rate limiting settings for Resend API
MAX_RETRIES = 3
RETRY_BACKOFF_BASE = 2  # seconds


class NotificationError(Exception):
    """Resend rejected or never received an email"""


def escape_html(text: str) -> str:
    """Escape & < > " ' so answers cannot break the email markup"""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


def build_email_body(items: Sequence[ItemResponse], excluded: AbstractSet[str]) -> str:
    """One "<strong>Title:</strong> answer" line per reportable question"""
    body = ""
    for item in items:
        if item.kind == ItemKind.FILE_UPLOAD or item.question_title in excluded:
            continue
        answer = NO_RESPONSE_HTML if item.answer is None else escape_html(flatten_answer(item))
        body += f"<strong>{escape_html(item.question_title)}:</strong> {answer}<br/><br/>"
    return body


def build_admin_alert(error: BaseException, trace: str, context: Dict[str, Optional[str]]) -> str:
    """Plain-text report of a fatal failure, with enough context to replay it"""
    lines = [
        "The form submission automation has failed.",
        "",
        f"Error: {error}",
        "",
    ]
    for key, value in context.items():
        if value:
            lines.append(f"{key}: {value}")
    lines += ["", "Stack:", trace]
    return "\n".join(lines)


class ResendNotifier:
    """
    Sends email through the Resend HTTP API

    Args:
        api_key: Resend API key
        sender: "Name <address>" used as the from header
        client: Optional pre-built httpx client (tests inject a MockTransport)
    """

    def __init__(self, api_key: str, sender: str, client: Optional[httpx.Client] = None):
        self.api_key = api_key
        self.sender = sender
        self.client = client

    def _post(self, payload: Dict) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        if self.client is not None:
            return self.client.post(RESEND_API_URL, headers=headers, json=payload)
        with httpx.Client(timeout=30.0) as client:
            return client.post(RESEND_API_URL, headers=headers, json=payload)

    def send(
        self,
        to: List[str],
        subject: str,
        html_body: Optional[str] = None,
        text_body: Optional[str] = None
    ) -> Optional[str]:
        """
        Send one email

        Args:
            to: Recipient addresses
            subject: Subject line
            html_body: HTML content
            text_body: Plain text content

        Returns:
            Resend message id

        Raises:
            NotificationError: If Resend does not accept the email
        """
        if not to:
            raise NotificationError("No recipients configured")

        payload = {"from": self.sender, "to": to, "subject": subject}
        if html_body is not None:
            payload["html"] = html_body
        if text_body is not None:
            payload["text"] = text_body

        for retry in range(MAX_RETRIES + 1):
            try:
                response = self._post(payload)
            except httpx.HTTPError as e:
                raise NotificationError(f"Email request failed: {e}") from e

            if response.status_code == 429 and retry < MAX_RETRIES:
                backoff_time = RETRY_BACKOFF_BASE * (2 ** retry)
                logger.warning(f"Rate limited by Resend, retrying in {backoff_time}s (attempt {retry + 1}/{MAX_RETRIES})")
                time.sleep(backoff_time)
                continue

            if response.is_success:
                logger.info(f"Email sent to {', '.join(to)}: {subject}")
                return response.json().get("id")

            raise NotificationError(f"Failed to send email: {response.status_code} - {response.text}")


def get_notifier() -> ResendNotifier:
    """Notifier built from settings (FastAPI dependency)"""
    settings = get_settings()
    return ResendNotifier(settings.resend_api_key, settings.mail_from)
