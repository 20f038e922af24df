"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from formvault.config import get_settings

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                field = item.get("field")
                if message and field:
                    messages.append(f"{field}: {message}")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    return None


def _log_sendgrid_failure(status_code: Any, body: Any, exc: Exception | None = None) -> None:
    """Log a failed SendGrid call with whatever detail the API returned."""

    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        logger.error("SendGrid request failed with status %s: %s", status_code, details)
    elif status_code:
        logger.error("SendGrid request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid request failed: %s", details)
    elif exc is not None:
        logger.error("Error sending email via SendGrid: %s", exc)
    else:
        logger.error("SendGrid request failed without details")


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # sendgrid raises python_http_client errors of many types
        _log_sendgrid_failure(
            getattr(exc, "status_code", None), getattr(exc, "body", None), exc
        )
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(status_code, getattr(response, "body", None))
        return False

    return True


def send_passcode_email(recipient: str, message: str) -> bool:
    """Send the verification ``message`` to ``recipient``."""

    subject = "Your verification code"
    html_content = "".join(
        (
            "<p>Hello,</p>",
            f"<p>{escape(message)}</p>",
            "<p>If you did not request this code you can ignore this email.</p>",
        )
    )
    return send_email(subject, html_content, recipient)


__all__ = ["send_email", "send_passcode_email"]
