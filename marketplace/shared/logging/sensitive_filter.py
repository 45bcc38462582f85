# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Redaction of credentials before a record reaches any sink."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "***"

# Each rule keeps the key (group 1) and replaces the value that follows it.
_RULES: tuple[re.Pattern[str], ...] = (
    re.compile(r"((?:session[_-]?id|csrf[_-]?token|x-csrf-token)\s*[:=]\s*['\"]?)[\w\-.]{16,}", re.I),
    re.compile(r"((?:password|passwd|secret[_-]?key)\s*[:=]\s*['\"]?)[^'\"\s,;]+", re.I),
    re.compile(r"((?:^|\s)(?:set-)?cookie\s*:\s*)[^\n]+", re.I),
    re.compile(r"(\"token\"\s*:\s*\")[^\"]+", re.I),
)
_URL_CREDENTIALS = re.compile(r"\b((?:redis|rediss|postgres(?:ql)?|mysql)(?:\+\w+)?://[^:/@\s]*:)[^@\s]+@")


def sanitize_message(message: str) -> str:
    for rule in _RULES:
        message = rule.sub(rf"\g<1>{REDACTED}", message)
    return _URL_CREDENTIALS.sub(rf"\g<1>{REDACTED}@", message)


def sanitize_record(record: dict[str, Any]) -> bool:
    record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["REDACTED", "sanitize_message", "sanitize_record"]
