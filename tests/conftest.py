"""
Test configuration and fixtures.

Provides:
- Environment for Settings (no real Supabase / Resend credentials)
- Filing configuration snapshot used across tests
- In-memory storage and notifier fakes that record every call
- Item factories
"""
import os
import posixpath

import pytest

os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("RESEND_API_KEY", "re_test_key")
os.environ["RECLASSIFY_INTERVAL_MINUTES"] = "0"
os.environ["WEBHOOK_SECRET"] = ""

from formfiler.config import FilingConfig, get_settings
from formfiler.models.submission import (
    ChoiceItemResponse,
    FileUploadItemResponse,
    ItemKind,
    TextItemResponse,
)
from formfiler.services.notifier import NotificationError
from formfiler.services.storage import ContainerRef, StorageError


# =============================================================================
# Fakes
# =============================================================================

class FakeFile:
    def __init__(self, storage, file_id):
        self.storage = storage
        self.id = file_id
        self.name = storage.files[file_id]

    def rename(self, new_name):
        if self.storage.fail_on.get(self.id) == "rename":
            raise StorageError(f"rename refused for {self.id}")
        self.storage.calls.append(("rename", self.id, new_name))
        self.name = new_name

    def move_to(self, container):
        if self.storage.fail_on.get(self.id) == "move":
            raise StorageError(f"move refused for {self.id}")
        self.storage.calls.append(("move", self.id, container.id))


class FakeStorage:
    """Records create/rename/move calls; fail_on maps file id -> lookup|rename|move"""

    def __init__(self, files=None):
        self.files = dict(files or {})
        self.fail_on = {}
        self.fail_create = False
        self.calls = []

    def create_container(self, parent_id, name):
        if self.fail_create:
            raise StorageError("bucket unavailable")
        self.calls.append(("create", parent_id, name))
        return ContainerRef(id=posixpath.join(parent_id, name), name=name)

    def get_file_by_id(self, file_id):
        self.calls.append(("lookup", file_id))
        if self.fail_on.get(file_id) == "lookup" or file_id not in self.files:
            raise StorageError(f"File not found: {file_id}")
        return FakeFile(self, file_id)

    def calls_of(self, kind):
        return [c for c in self.calls if c[0] == kind]


class FakeNotifier:
    """Records sent emails; fail / fail_admin make sends raise"""

    def __init__(self):
        self.sent = []
        self.fail = False
        self.fail_admin = False

    def send(self, to, subject, html_body=None, text_body=None):
        is_admin = text_body is not None and html_body is None
        if (is_admin and self.fail_admin) or (not is_admin and self.fail):
            raise NotificationError("Failed to send email: 500 - boom")
        self.sent.append({"to": list(to), "subject": subject, "html": html_body, "text": text_body})
        return "msg_1"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Clear the settings cache so tests can change the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def config():
    return FilingConfig(
        destination_container_id="submissions",
        recipient_list="buyer@example.com, approver@example.com",
        admin_address="admin@example.com",
        subject_template="PO: {Funding Source} - {Vendor} - {Last Name}",
        standard_file_template="{Funding Source} - {Vendor} - {Last Name} - {QuestionTitle}",
        special_file_prefix_template="{Funding Source} - {Vendor} - {Last Name}",
        special_question_title="Supporting Docs",
        folder_name_exclusions=frozenset({"First Name"}),
        email_body_exclusions=frozenset({"Keywords"}),
        timezone="America/New_York",
    )


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def text():
    def make(title, answer, kind=ItemKind.TEXT):
        return TextItemResponse(question_title=title, kind=kind, answer=answer)
    return make


@pytest.fixture
def choices():
    def make(title, answer):
        return ChoiceItemResponse(question_title=title, kind=ItemKind.CHECKBOX, answer=answer)
    return make


@pytest.fixture
def upload():
    def make(title, *file_ids):
        return FileUploadItemResponse(question_title=title, kind=ItemKind.FILE_UPLOAD, answer=list(file_ids))
    return make
