from __future__ import annotations

import smtplib
from email.message import EmailMessage
from email.utils import parseaddr


def _check_address(value: str) -> str:
    _, addr = parseaddr(value)
    if not addr or "@" not in addr:
        raise ValueError(f"Invalid email address: {value!r}")
    return value


def build_message(*, from_email: str, to_email: str, subject: str, body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = _check_address(from_email)
    msg["To"] = _check_address(to_email)
    msg["Subject"] = subject
    msg.set_content(body)
    return msg


def send_email(
    *,
    smtp_host: str,
    smtp_port: int,
    from_email: str,
    to_email: str,
    subject: str,
    body: str,
    timeout_seconds: float = 20.0,
) -> None:
    msg = build_message(from_email=from_email, to_email=to_email, subject=subject, body=body)

    # Local relay: no TLS, no auth.
    with smtplib.SMTP(smtp_host, smtp_port, timeout=timeout_seconds) as server:
        server.send_message(msg)
