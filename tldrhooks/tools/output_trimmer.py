"""Bounded previews of tldr output for hook context."""

SUMMARY_MAX_LINES = 5


def summarize(output: str, max_lines: int = SUMMARY_MAX_LINES) -> str:
    """
    Compress tool output into a short preview.

    Strategy:
    1. Strip leading/trailing whitespace from the whole output
    2. If it has max_lines lines or fewer, return it as-is
    3. Otherwise keep the first max_lines lines and note how many were dropped

    Lines are never cut in the middle.

    Args:
        output: Raw tool stdout
        max_lines: Number of lines to keep (default: 5)

    Returns:
        Preview string

    Example:
        >>> summarize("a\\nb\\nc\\nd\\ne\\nf\\ng")
        'a\\nb\\nc\\nd\\ne\\n... (2 more lines)'
    """
    trimmed = (output or "").strip()
    lines = trimmed.split("\n")

    if len(lines) <= max_lines:
        return trimmed

    remaining = len(lines) - max_lines
    return "\n".join(lines[:max_lines]) + f"\n... ({remaining} more lines)"
