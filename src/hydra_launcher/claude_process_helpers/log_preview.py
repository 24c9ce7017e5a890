"""Truncation of CLI traffic for log lines."""

LOG_PREVIEW_CHARS = 100


def preview(text: str, limit: int = LOG_PREVIEW_CHARS) -> str:
    if len(text) > limit:
        return f"{text[:limit]}..."
    return text
