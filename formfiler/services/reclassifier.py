"""Periodic sorting of submission folders into year/month/status folders"""
from pydantic import BaseModel, Field
from typing import List, Optional, Tuple
import posixpath
import logging
import re

from formfiler.services.storage import ContainerRef
from formfiler.utils.retry import retry_storage_call

logger = logging.getLogger(__name__)

# 20250710-0930_PENDING_Gift_Acme -> 2025 / 07 / PENDING
SUBMISSION_FOLDER_PATTERN = re.compile(r"^(\d{4})(\d{2})\d{2}-\d{4}_([A-Z]+)(?:_|$)")


class ReclassifyReport(BaseModel):
    """What one reclassification pass did"""
    moved: List[str] = Field(default_factory=list)
    already_sorted: int = 0
    failed: List[str] = Field(default_factory=list)


def classify_container(name: str) -> Optional[List[str]]:
    """
    Hierarchy path for a submission folder name

    Returns:
        [year, month, status] or None if the name is not a submission folder
    """
    match = SUBMISSION_FOLDER_PATTERN.match(name)
    if not match:
        return None
    year, month, status = match.groups()
    return [year, month, status]


def _collect(storage, parent_id: str) -> List[Tuple[ContainerRef, str]]:
    """Submission folders under parent_id with their target parents; hierarchy folders are descended"""
    found = []
    for container in retry_storage_call(lambda: storage.list_containers(parent_id)):
        hierarchy = classify_container(container.name)
        if hierarchy is None:
            found.extend(_collect(storage, container.id))
        else:
            found.append((container, parent_id))
    return found


def reclassify_folders(storage, root_id: str) -> ReclassifyReport:
    """
    Move every submission folder under root_id to root/<year>/<month>/<status>

    Folders already in the right place are left alone, so repeated runs are
    no-ops. A folder that fails to move is logged and the pass continues.
    """
    report = ReclassifyReport()

    for container, current_parent in _collect(storage, root_id):
        target_parent = posixpath.join(root_id, *classify_container(container.name))
        if current_parent == target_parent:
            report.already_sorted += 1
            continue
        try:
            moved = storage.move_container(container, target_parent)
            report.moved.append(moved.id)
        except Exception as e:
            logger.error(f"Failed to reclassify folder {container.id!r}: {e}")
            report.failed.append(container.id)

    logger.info(
        f"Reclassify complete: {len(report.moved)} moved, "
        f"{report.already_sorted} already sorted, {len(report.failed)} failed"
    )
    return report
