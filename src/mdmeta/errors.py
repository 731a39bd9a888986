"""Error types raised by the frontmatter engine and tag generation"""

from pathlib import Path
from typing import Optional


class FrontmatterError(Exception):
    """Base error. Carries the operation and file path once located."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.operation: Optional[str] = None
        self.path: Optional[Path] = None

    def locate(self, operation: str, path: Path) -> "FrontmatterError":
        """Prefix the message with the failed operation and path (once)."""
        if self.path is None:
            self.operation = operation
            self.path = path
            self.args = (f"Failed to {operation} {path}: {self.args[0]}",)
        return self


class NotFoundError(FrontmatterError):
    """File missing or unreadable."""


class ParseError(FrontmatterError):
    """Frontmatter text is not valid YAML or not a mapping."""

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


class EncodeError(FrontmatterError):
    """Metadata could not be rendered as a YAML mapping."""


class NoFrontmatterError(FrontmatterError):
    """A write needed existing frontmatter and creation was not allowed."""


class EmptyGenerationError(FrontmatterError):
    """The tag generator returned no tags."""


class GenerationError(FrontmatterError):
    """The tag generation request or its response failed."""
