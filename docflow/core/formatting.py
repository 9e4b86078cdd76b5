# docflow/core/formatting.py

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]
SIZE_BASE = 1024


def format_file_size(size: int | float | None) -> str:
    """
    Human readable size in base-1024 units, rounded to 2 decimals.
    Trailing zeros are dropped: 1024 -> "1 KB", 1536 -> "1.5 KB".
    """
    if not size:
        return "0 Bytes"

    # integer stepping avoids log() rounding at exact powers of 1024
    index = 0
    while size >= SIZE_BASE ** (index + 1) and index < len(SIZE_UNITS) - 1:
        index += 1

    value = round(size / SIZE_BASE ** index, 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[index]}"
