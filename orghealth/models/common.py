from datetime import datetime, UTC


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


def humanize_camel(name: str) -> str:
    """Split a camelCase identifier into title-cased words ("cpuTime" -> "Cpu Time")."""
    words: list[str] = []
    current = ""
    for char in name:
        if char.isupper() and current:
            words.append(current)
            current = char
        else:
            current += char
    if current:
        words.append(current)
    return " ".join(word[:1].upper() + word[1:] for word in words)
