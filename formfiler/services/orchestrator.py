"""Submission processing: folder, files, notification"""
from datetime import datetime, timezone
from typing import Optional
import traceback
import logging

from formfiler.config import FilingConfig
from formfiler.models.outcomes import OrchestratorResult, RunStatus, Failed
from formfiler.models.submission import SubmissionEvent
from formfiler.services.file_router import route_files
from formfiler.services.folder_names import TIMESTAMP_FORMAT, compose_folder_name, format_timestamp
from formfiler.services.notifier import build_admin_alert, build_email_body
from formfiler.services.responses import build_response_map
from formfiler.services.templates import find_placeholders, resolve_template

logger = logging.getLogger(__name__)

ADMIN_ALERT_SUBJECT = "CRITICAL: Form submission processing failed"


def _log_unresolved(config: FilingConfig, responses) -> None:
    known = set(responses) | {"QuestionTitle"}
    templates = (config.subject_template, config.standard_file_template, config.special_file_prefix_template)
    for template in templates:
        missing = [p for p in find_placeholders(template) if p not in known]
        if missing:
            logger.warning(f"Template {template!r} has no answer for {missing}; they will read N/A")


def process_submission(
    event: SubmissionEvent,
    config: FilingConfig,
    storage,
    notifier,
    now: Optional[datetime] = None
) -> OrchestratorResult:
    """
    File one form submission

    Creates the submission folder, renames and moves the uploads into it and
    emails the recipients. Failures on individual files are reported in the
    outcomes; anything else stops the run and is reported once to the admin.

    Args:
        event: Parsed submission
        config: Filing configuration snapshot for this run
        storage: Storage client (create_container, get_file_by_id)
        notifier: Mail client (send)
        now: Run time; defaults to the current time

    Returns:
        OrchestratorResult with status succeeded, partial or fatal
    """
    moment = now or datetime.now(timezone.utc)
    timestamp = None
    folder_name = None

    try:
        timestamp = format_timestamp(moment, config.timezone)
        responses = build_response_map(event.items)
        _log_unresolved(config, responses)

        folder_name = compose_folder_name(event.items, timestamp, config.folder_name_exclusions)
        subject = resolve_template(config.subject_template, responses)

        folder = storage.create_container(config.destination_container_id, folder_name)
        logger.info(f'Successfully created folder: "{folder.name}" (ID: {folder.id})')

        outcomes = route_files(event.items, folder, responses, config, storage)

        notifier.send(config.recipients, subject, html_body=build_email_body(event.items, config.email_body_exclusions))
        logger.info(f"Notification email sent to {config.recipient_list}.")

        failed = [o for o in outcomes if isinstance(o, Failed)]
        if failed:
            logger.warning(f"Submission filed with {len(failed)} of {len(outcomes)} files failed")

        return OrchestratorResult(
            status=RunStatus.PARTIAL if failed else RunStatus.SUCCEEDED,
            timestamp=timestamp,
            folder_name=folder.name,
            container_id=folder.id,
            outcomes=outcomes,
        )

    except Exception as e:
        trace = traceback.format_exc()
        logger.error(f"Error processing submission: {e}")
        logger.error(trace)

        if timestamp is None:
            # The configured zone could not be used; fall back to UTC
            timestamp = moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)

        context = {
            "Timestamp": timestamp,
            "Submitted at": event.submitted_at.isoformat(),
            "Response ID": event.response_id,
            "Respondent": event.respondent_email,
            "Folder": folder_name,
        }
        admin_notified = False
        try:
            notifier.send([config.admin_address], ADMIN_ALERT_SUBJECT, text_body=build_admin_alert(e, trace, context))
            admin_notified = True
        except Exception as alert_error:
            logger.error(f"Failed to notify admin {config.admin_address}: {alert_error}")

        return OrchestratorResult(
            status=RunStatus.FATAL,
            timestamp=timestamp,
            folder_name=folder_name,
            error=str(e),
            admin_notified=admin_notified,
        )
