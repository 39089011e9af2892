from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Dict


logger = logging.getLogger(__name__)


def format_contact_message(payload: Dict[str, Any]) -> str:
    lines = [
        "New contact form message",
        f"name: {payload.get('name') or '-'}",
        f"email: {payload.get('email') or '-'}",
    ]
    if payload.get("subject"):
        lines.append(f"subject: {payload['subject']}")
    if payload.get("production"):
        lines.append(f"production: {payload['production']}")
    message = (payload.get("message") or "").strip()
    if message:
        lines.append("")
        lines.append(message)
    return "\n".join(lines)


def send_telegram_message(token: str, chat_id: str, text: str) -> bool:
    url = f"https://api.telegram.org/bot{token}/sendMessage"
    data = json.dumps({"chat_id": chat_id, "text": text}).encode("utf-8")
    req = urllib.request.Request(url, data=data, headers={"Content-Type": "application/json"})
    try:
        with urllib.request.urlopen(req, timeout=10) as resp:
            return 200 <= resp.status < 300
    except (urllib.error.URLError, OSError) as exc:
        logger.warning("telegram send failed: %s", exc)
        return False
