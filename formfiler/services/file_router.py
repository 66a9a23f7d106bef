"""Rename uploaded files and move them into the submission folder"""
import re
import logging
from typing import List, Sequence, Tuple

from formfiler.config import FilingConfig
from formfiler.models.outcomes import Failed, Moved, RouteOutcome
from formfiler.models.submission import ItemKind, ItemResponse
from formfiler.services.responses import ResponseMap
from formfiler.services.storage import ContainerRef
from formfiler.services.templates import resolve_template

logger = logging.getLogger(__name__)

ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:"*?<>|]')
# The form platform appends " - <submitter name>" to every uploaded file name
UPLOAD_SUFFIX_SEPARATOR = " - "


def sanitize_filename(name: str) -> str:
    """Replace characters that are illegal in file names with "-" """
    return ILLEGAL_FILENAME_CHARS.sub("-", name)


def split_extension(name: str) -> Tuple[str, str]:
    """Split "a.b.pdf" into ("a.b", ".pdf"); no dot means no extension"""
    dot = name.rfind(".")
    if dot == -1:
        return name, ""
    return name[:dot], name[dot:]


def strip_upload_suffix(name: str) -> str:
    """
    Drop the " - <submitter>" suffix (and extension) the form platform adds

    "Quote - Jane Doe.pdf" -> "Quote". Without a separator only the
    extension is removed.
    """
    separator = name.rfind(UPLOAD_SUFFIX_SEPARATOR)
    if separator != -1:
        return name[:separator]
    return split_extension(name)[0]


def special_file_name(original_name: str, config: FilingConfig, responses: ResponseMap) -> str:
    """Prefix from the template, then the uploader's own descriptive name"""
    prefix = sanitize_filename(resolve_template(config.special_file_prefix_template, responses))
    _, extension = split_extension(original_name)
    descriptive = sanitize_filename(strip_upload_suffix(original_name))
    return f"{prefix}{UPLOAD_SUFFIX_SEPARATOR}{descriptive}{extension}"


def standard_file_name(
    original_name: str,
    question_title: str,
    index: int,
    total: int,
    config: FilingConfig,
    responses: ResponseMap
) -> str:
    """Name entirely from the template; numbered (1)..(N) when a question has several files"""
    base = sanitize_filename(
        resolve_template(config.standard_file_template, responses, {"QuestionTitle": question_title})
    )
    if total > 1:
        base += f" ({index + 1})"
    _, extension = split_extension(original_name)
    return base + extension


def route_files(
    items: Sequence[ItemResponse],
    destination: ContainerRef,
    responses: ResponseMap,
    config: FilingConfig,
    storage
) -> List[RouteOutcome]:
    """
    Rename and move every uploaded file into the destination folder

    Files are handled in submission order, then upload order. A failure on
    one file is recorded and logged; the remaining files are still processed.

    Args:
        items: Submission answers
        destination: Folder created for this submission
        responses: Question title -> answer lookup
        config: Filing configuration snapshot
        storage: Storage client providing get_file_by_id

    Returns:
        One Moved or Failed outcome per uploaded file
    """
    outcomes: List[RouteOutcome] = []

    for item in items:
        if item.kind != ItemKind.FILE_UPLOAD:
            continue

        question_title = item.question_title
        file_ids = item.answer or []
        is_special = question_title == config.special_question_title

        for index, file_id in enumerate(file_ids):
            try:
                file = storage.get_file_by_id(file_id)
                original_name = file.name

                if is_special:
                    new_name = special_file_name(original_name, config, responses)
                else:
                    new_name = standard_file_name(
                        original_name, question_title, index, len(file_ids), config, responses
                    )

                file.rename(new_name)
                file.move_to(destination)

                logger.info(f'Renamed "{original_name}" to "{new_name}" and moved to "{destination.name}"')
                outcomes.append(Moved(file_id=file_id, original_name=original_name, final_name=new_name))

            except Exception as e:
                logger.error(f'Failed to process file with ID "{file_id}". Reason: {e}')
                outcomes.append(Failed(file_id=file_id, question_title=question_title, reason=str(e)))

    return outcomes
