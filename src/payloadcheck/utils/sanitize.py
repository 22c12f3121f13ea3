"""Error message sanitization to prevent credential leakage in reports."""

from __future__ import annotations

import re


def sanitize_error(message: str) -> str:
    """Redact credentials from error text; everything else is kept verbatim."""
    if not message:
        return message

    sanitized = message
    # user:password@ in URLs
    sanitized = re.sub(r"(?<=://)[^/\s:@]+:[^/\s@]+@", "[REDACTED]@", sanitized)
    sanitized = re.sub(r"Bearer\s+\S+", "Bearer [REDACTED]", sanitized)
    sanitized = re.sub(r"api-key:\s*\S+", "api-key: [REDACTED]", sanitized)
    sanitized = re.sub(r"x-api-key:\s*\S+", "x-api-key: [REDACTED]", sanitized)
    sanitized = re.sub(r"Authorization:\s*\S+", "Authorization: [REDACTED]", sanitized)
    # Secret-looking query parameters
    sanitized = re.sub(
        r"([?&](?:api_key|apikey|token|access_token|key)=)[^&\s]+",
        r"\1[REDACTED]",
        sanitized,
        flags=re.IGNORECASE,
    )
    return sanitized
