from pathlib import Path
from typing import IO, Union


def ensure_text(source: Union[str, bytes, Path, IO]) -> str:
    # Already text content
    if isinstance(source, str):
        return source

    # Raw bytes
    if isinstance(source, (bytes, bytearray)):
        return bytes(source).decode("utf-8")

    # Path to a file
    if isinstance(source, Path):
        return source.read_text(encoding="utf-8")

    # File-like
    if hasattr(source, "read"):
        data = source.read()
        return data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data

    raise TypeError(
        f"Unsupported type for input: {type(source).__name__}. "
        f"Expected str, bytes, Path, or file-like."
    )


def format_value(value: float | None, digits: int = 4) -> str:
    if value is None:
        return "n/a"
    return f"{value:.{digits}f}"
