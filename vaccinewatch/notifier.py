from __future__ import annotations

import logging
import smtplib
import sys
from typing import Protocol, Sequence, TextIO

from vaccinewatch.config import Settings
from vaccinewatch.domain import Location
from vaccinewatch.mailer import send_email
from vaccinewatch.report import render_report

logger = logging.getLogger(__name__)

EMAIL_SUBJECT = "New Vaccine Appointments"


class Notifier(Protocol):
    def notify(self, newly_available: Sequence[Location]) -> None: ...


class ConsoleNotifier:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def notify(self, newly_available: Sequence[Location]) -> None:
        if not newly_available:
            return
        # Resolve stdout late so pytest's capsys sees the output.
        stream = self._stream or sys.stdout
        stream.write(render_report(newly_available))
        stream.flush()


class EmailNotifier:
    """Sends the report as one plain-text email.

    Delivery is best-effort: failures are logged and never propagate into the
    polling loop.
    """

    def __init__(self, *, from_email: str, to_email: str, smtp_host: str, smtp_port: int) -> None:
        self.from_email = from_email
        self.to_email = to_email
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port

    def notify(self, newly_available: Sequence[Location]) -> None:
        if not newly_available:
            return

        try:
            send_email(
                smtp_host=self.smtp_host,
                smtp_port=self.smtp_port,
                from_email=self.from_email,
                to_email=self.to_email,
                subject=EMAIL_SUBJECT,
                body=render_report(newly_available, blank_after_header=True),
            )
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error(
                "Failed to send email from %s to %s (%s: %s)",
                self.from_email,
                self.to_email,
                type(e).__name__,
                e,
            )
            return

        logger.info("Email with %d location(s) sent to %s", len(newly_available), self.to_email)


def build_notifier(settings: Settings) -> Notifier:
    from_email, to_email = settings.from_email, settings.to_email
    if from_email is not None and to_email is not None:
        return EmailNotifier(
            from_email=from_email,
            to_email=to_email,
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
        )
    return ConsoleNotifier()
