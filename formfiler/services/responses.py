"""Flatten submission answers into a title -> answer lookup"""
import logging
from typing import Dict, Sequence

from formfiler.models.submission import ItemKind, ItemResponse

logger = logging.getLogger(__name__)

ResponseMap = Dict[str, str]


def flatten_answer(item: ItemResponse) -> str:
    """Render an answer as text: lists joined with ", ", unanswered as "" """
    answer = item.answer
    if answer is None:
        return ""
    if isinstance(answer, list):
        return ", ".join(answer)
    return str(answer)


def build_response_map(items: Sequence[ItemResponse]) -> ResponseMap:
    """
    Build the question title -> answer lookup for one submission

    File upload answers are storage ids, not text, so they are left out.
    A repeated title keeps the last answer and is logged, since it means
    the form has two questions with the same title.
    """
    responses: ResponseMap = {}
    for item in items:
        if item.kind == ItemKind.FILE_UPLOAD:
            continue
        title = item.question_title
        if title in responses:
            logger.warning(f"Duplicate question title in submission, keeping last answer: {title!r}")
        responses[title] = flatten_answer(item)
    return responses
