"""File size formatting for the file viewer header."""

_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def _rounded(size: float) -> float:
    # One decimal below 10, whole numbers above
    return round(size, 1) if size < 10 else float(round(size))


def format_file_size(size_bytes: int) -> str:
    """
    Format a size in bytes as a short human-readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        e.g. "512 B", "1.5 KB", "12 MB"
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    size = float(size_bytes)
    unit = 0
    # Compare the displayed value so 1023.99 KB rolls over to 1 MB
    while _rounded(size) >= 1024 and unit < len(_UNITS) - 1:
        size /= 1024
        unit += 1

    shown = _rounded(size)
    if shown >= 10 or shown == int(shown):
        return f"{shown:.0f} {_UNITS[unit]}"
    return f"{shown:.1f} {_UNITS[unit]}"
