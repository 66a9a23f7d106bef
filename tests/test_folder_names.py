"""Tests for submission folder naming."""
from datetime import datetime, timezone

from formfiler.services.folder_names import compose_folder_name, format_timestamp


def test_drops_empty_parts(text):
    items = [text("Vendor", "Acme"), text("Notes", "   "), text("Item", "Widgets")]
    assert compose_folder_name(items, "20250101-0800", set()) == "20250101-0800_PENDING_Acme_Widgets"


def test_excludes_uploads_and_configured_titles(text, choices, upload):
    items = [
        text("First Name", "Jane"),
        text("Last Name", " Doe "),
        upload("Quote", "a/1.pdf"),
        choices("Funding Source", ["Gift", "Grant"]),
    ]
    name = compose_folder_name(items, "20250710-0930", {"First Name"})
    assert name == "20250710-0930_PENDING_Doe_Gift, Grant"


def test_nothing_left_still_has_prefix(upload):
    assert compose_folder_name([upload("Quote")], "20250101-0800", set()) == "20250101-0800_PENDING_"


def test_unanswered_question_is_skipped(text):
    assert compose_folder_name([text("Vendor", None)], "t", set()) == "t_PENDING_"


def test_timestamp_is_local_to_configured_zone():
    moment = datetime(2025, 7, 10, 13, 30, tzinfo=timezone.utc)
    assert format_timestamp(moment, "America/New_York") == "20250710-0930"
    assert format_timestamp(moment, "UTC") == "20250710-1330"
