from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from vaccinewatch.api_client import DEFAULT_API_BASE_URL


def _parse_state_code(raw: str) -> str:
    # vaccinespotter uses two-letter USPS codes, e.g. "CA", "ny"
    code = raw.strip().upper()
    if len(code) != 2 or not code.isalpha() or not code.isascii():
        raise RuntimeError(f"Invalid state code: {raw!r}. Expected a two-letter code like 'CA'.")
    return code


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _int_env(name: str, default: int, *, minimum: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid {name} value: {raw!r}. Expected an integer.") from e
    if value < minimum:
        raise RuntimeError(f"{name} must be >= {minimum}")
    return value


@dataclass(frozen=True)
class Settings:
    state: str

    zips_path: str | None = None
    from_email: str | None = None
    to_email: str | None = None

    check_interval_seconds: int = 60

    api_base_url: str = DEFAULT_API_BASE_URL

    # Outgoing mail goes through a local relay
    smtp_host: str = "localhost"
    smtp_port: int = 25

    log_level: str = "INFO"

    @property
    def email_enabled(self) -> bool:
        return self.from_email is not None and self.to_email is not None


def load_settings(
    *,
    state: str,
    zips_path: str | None = None,
    from_email: str | None = None,
    to_email: str | None = None,
    dotenv_path: str | None = None,
) -> Settings:
    # CLI values come in as arguments; tunables come from env / .env.
    load_dotenv(dotenv_path=dotenv_path, override=False)

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in logging.getLevelNamesMapping():
        raise RuntimeError(f"Invalid LOG_LEVEL value: {log_level!r}")

    return Settings(
        state=_parse_state_code(state),
        zips_path=_optional(zips_path),
        from_email=_optional(from_email),
        to_email=_optional(to_email),
        check_interval_seconds=_int_env("CHECK_INTERVAL_SECONDS", 60, minimum=1),
        api_base_url=os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL).strip() or DEFAULT_API_BASE_URL,
        smtp_host=os.getenv("SMTP_HOST", "localhost").strip() or "localhost",
        smtp_port=_int_env("SMTP_PORT", 25, minimum=1),
        log_level=log_level,
    )
