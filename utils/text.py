def truncate(text: str, max_chars: int, suffix: str = "... [truncated]") -> str:
    if len(text) <= max_chars:
        return text
    return text[: max_chars - len(suffix)] + suffix
