from __future__ import annotations

import logging
import re
import smtplib
from dataclasses import dataclass, field
from email.mime.text import MIMEText
from typing import Any, Dict, List, Optional

from ..config import Settings, settings as default_settings
from ..utils.telegram import format_contact_message, send_telegram_message


logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_MESSAGE_LENGTH = 5000


@dataclass
class ContactResult:
    success: bool
    message: str
    errors: List[str] = field(default_factory=list)
    emailed: bool = False
    notified: bool = False


def validate_contact(payload: Dict[str, Any]) -> List[str]:
    errors = []
    if not (payload.get("name") or "").strip():
        errors.append("Please enter your name")
    email = (payload.get("email") or "").strip()
    if not email:
        errors.append("Please enter your email")
    elif not EMAIL_RE.match(email):
        errors.append("Please enter a valid email address")
    message = (payload.get("message") or "").strip()
    if not message:
        errors.append("Please enter a message")
    elif len(message) > MAX_MESSAGE_LENGTH:
        errors.append("Message is too long")
    return errors


class ContactService:
    def __init__(self, config: Optional[Settings] = None) -> None:
        self.config = config or default_settings

    def _send_email(self, body: str, reply_to: str, subject: str) -> bool:
        cfg = self.config
        if not (cfg.EMAIL_HOST and cfg.EMAIL_HOST_USER and cfg.EMAIL_HOST_PASSWORD):
            return False
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = cfg.EMAIL_FROM
        msg["To"] = cfg.CONTACT_EMAIL
        msg["Reply-To"] = reply_to
        try:
            with smtplib.SMTP(cfg.EMAIL_HOST, cfg.EMAIL_PORT, timeout=10) as smtp:
                smtp.starttls()
                smtp.login(cfg.EMAIL_HOST_USER, cfg.EMAIL_HOST_PASSWORD)
                smtp.sendmail(cfg.EMAIL_FROM, [cfg.CONTACT_EMAIL], msg.as_string())
            return True
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("contact email failed: %s", exc)
            return False

    def _notify(self, text: str) -> bool:
        cfg = self.config
        if not (cfg.TELEGRAM_BOT_TOKEN and cfg.TELEGRAM_CHAT_ID):
            return False
        return send_telegram_message(cfg.TELEGRAM_BOT_TOKEN, cfg.TELEGRAM_CHAT_ID, text)

    def submit(self, payload: Dict[str, Any]) -> ContactResult:
        errors = validate_contact(payload)
        if errors:
            return ContactResult(success=False, message="; ".join(errors), errors=errors)
        body = format_contact_message(payload)
        subject = (payload.get("subject") or "").strip() or "Website contact form"
        emailed = self._send_email(body, payload["email"].strip(), subject)
        notified = self._notify(body)
        logger.info("contact message received email_sent=%s telegram_sent=%s", emailed, notified)
        return ContactResult(
            success=True,
            message="Thank you! Your message has been sent.",
            emailed=emailed,
            notified=notified,
        )
