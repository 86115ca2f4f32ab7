"""Configuration dataclasses for analysis document serialization."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentConfig:
    """Formatting options for JSON documents written to disk."""

    indent: int = 2
    ensure_ascii: bool = False
    sort_keys: bool = False  # Key order is part of the document layout
    encoding: str = 'utf-8'

    def __post_init__(self) -> None:
        if self.indent < 0:
            raise ValueError(f"Invalid indent: {self.indent}. Must be non-negative")
        if not self.encoding:
            raise ValueError("Encoding cannot be empty")
