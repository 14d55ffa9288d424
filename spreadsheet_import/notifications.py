"""
Notification sinks for import outcomes.

The engine only needs ``report(severity, title, body, persistent)``; where the
report ends up (log, Django messages, command output) is up to the caller.
"""

import logging
from typing import Protocol

from django.contrib import messages
from django.utils.translation import gettext as _

from .constants import SEVERITY_DANGER, SEVERITY_SUCCESS

logger = logging.getLogger(__name__)

PERSISTENT_TAG = "persistent"


def translate(template: str, **params) -> str:
    """Translate a message template and fill in its named parameters."""
    translated = _(template)
    return translated.format(**params) if params else translated


class Notifier(Protocol):
    def report(self, severity: str, title: str, body: str, persistent: bool = False) -> None: ...


class LoggingNotifier:
    """Write reports to the ``spreadsheet_import`` logger."""

    def report(self, severity: str, title: str, body: str, persistent: bool = False) -> None:
        level = logging.ERROR if severity == SEVERITY_DANGER else logging.INFO
        logger.log(level, f"{title}: {body}")


class MessagesNotifier:
    """
    Forward reports to the Django messages framework of a request.

    Persistent reports carry the ``persistent`` extra tag so templates can
    keep them on screen until dismissed.
    """

    LEVELS = {
        SEVERITY_SUCCESS: messages.SUCCESS,
        SEVERITY_DANGER: messages.ERROR,
    }

    def __init__(self, request):
        self.request = request

    def report(self, severity: str, title: str, body: str, persistent: bool = False) -> None:
        level = self.LEVELS.get(severity, messages.INFO)
        extra_tags = PERSISTENT_TAG if persistent else ""
        messages.add_message(self.request, level, f"{title}: {body}", extra_tags=extra_tags)


class CommandNotifier:
    """Write reports to a management command's stdout (success) or stderr (danger)."""

    def __init__(self, command):
        self.command = command

    def report(self, severity: str, title: str, body: str, persistent: bool = False) -> None:
        if severity == SEVERITY_DANGER:
            self.command.stderr.write(self.command.style.ERROR(f"{title}: {body}"))
        else:
            self.command.stdout.write(self.command.style.SUCCESS(f"{title}: {body}"))
