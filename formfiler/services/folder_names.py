"""Submission folder naming"""
from datetime import datetime
from typing import AbstractSet, Sequence
from zoneinfo import ZoneInfo

from formfiler.models.submission import ItemKind, ItemResponse
from formfiler.services.responses import flatten_answer

PENDING_MARKER = "PENDING"
TIMESTAMP_FORMAT = "%Y%m%d-%H%M"


def format_timestamp(moment: datetime, timezone: str) -> str:
    """Render a moment as yyyyMMdd-HHmm in the given IANA zone"""
    return moment.astimezone(ZoneInfo(timezone)).strftime(TIMESTAMP_FORMAT)


def compose_folder_name(
    items: Sequence[ItemResponse],
    timestamp: str,
    excluded: AbstractSet[str]
) -> str:
    """
    Build the destination folder name for a submission

    Args:
        items: Submission answers in form order
        timestamp: Shared run timestamp
        excluded: Question titles that never appear in folder names

    Returns:
        e.g. "20250710-0930_PENDING_Gift_Acme_Smith"
    """
    parts = []
    for item in items:
        if item.kind == ItemKind.FILE_UPLOAD or item.question_title in excluded:
            continue
        part = flatten_answer(item).strip()
        if part:
            parts.append(part)

    return f"{timestamp}_{PENDING_MARKER}_{'_'.join(parts)}"
