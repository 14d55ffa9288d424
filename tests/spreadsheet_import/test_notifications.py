from io import StringIO

from django.contrib.messages import constants as message_levels
from django.contrib.messages.storage.fallback import FallbackStorage
from django.core.management.base import BaseCommand
from django.test import RequestFactory

from spreadsheet_import.constants import SEVERITY_DANGER, SEVERITY_SUCCESS
from spreadsheet_import.notifications import CommandNotifier, LoggingNotifier, MessagesNotifier, translate


def test_translate_fills_parameters():
    assert translate("{count} rows imported, {skipped} skipped", count=3, skipped=1) == "3 rows imported, 1 skipped"
    assert translate("Import failed") == "Import failed"


def test_translate_accepts_message_placeholder():
    assert translate("{attribute}: {message}", attribute="Name", message="This field is required.") == (
        "Name: This field is required."
    )


def test_messages_notifier_adds_persistent_message():
    request = RequestFactory().get("/")
    request.session = {}
    request._messages = FallbackStorage(request)

    notifier = MessagesNotifier(request)
    notifier.report(SEVERITY_DANGER, "Import failed", "Line 2: name: This field is required.", persistent=True)
    notifier.report(SEVERITY_SUCCESS, "Import succeeded", "1 rows imported, 0 skipped")

    stored = list(request._messages)
    assert [message.level for message in stored] == [message_levels.ERROR, message_levels.SUCCESS]
    assert stored[0].message == "Import failed: Line 2: name: This field is required."
    assert "persistent" in stored[0].tags
    assert "persistent" not in stored[1].tags


def test_command_notifier_splits_streams():
    command = BaseCommand(stdout=StringIO(), stderr=StringIO(), no_color=True)
    notifier = CommandNotifier(command)

    notifier.report(SEVERITY_SUCCESS, "Import succeeded", "2 rows imported, 0 skipped")
    notifier.report(SEVERITY_DANGER, "Error importing file", "boom")

    assert "Import succeeded: 2 rows imported, 0 skipped" in command.stdout._out.getvalue()
    assert "Error importing file: boom" in command.stderr._out.getvalue()


def test_logging_notifier_does_not_raise():
    LoggingNotifier().report(SEVERITY_DANGER, "Import failed", "Line 2: broken")
