"""In-memory document model: one optional metadata block followed by content blocks"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union


# Closed set of values a frontmatter mapping may hold.
Value = Union[str, int, float, bool, None, list["Value"], dict[str, "Value"]]
Frontmatter = dict[str, Value]


class ContentKind(str, Enum):
    """Top-level markdown block types a content block may carry"""
    blank = "blank"
    heading = "heading"
    paragraph = "paragraph"
    list = "list"
    code = "code"
    table = "table"
    html = "html"
    quote = "quote"
    rule = "rule"


@dataclass
class MetadataBlock:
    """Decoded frontmatter plus the exact source it was read from.

    `source` is the fenced text as found in the file (fences included) and is
    only kept while the block is unmodified; a replaced block has no source and
    is rendered from `data` on encode.
    """
    data: Frontmatter
    raw: Optional[str] = None       # YAML text between the fences
    source: Optional[str] = None


@dataclass
class ContentBlock:
    """A raw slice of the document body, trailing blank lines included."""
    text: str
    kind: ContentKind = ContentKind.paragraph


@dataclass
class Document:
    metadata: Optional[MetadataBlock] = None
    content: list[ContentBlock] = field(default_factory=list)
    bom: bool = False           # file started with U+FEFF
    newline: str = "\n"         # line ending used when rendering a new fence

    @property
    def blocks(self) -> Iterator[Union[MetadataBlock, ContentBlock]]:
        """All blocks in document order; the metadata block is always first."""
        if self.metadata is not None:
            yield self.metadata
        yield from self.content

    @property
    def body(self) -> str:
        """Everything after the closing fence, verbatim."""
        return "".join(b.text for b in self.content)

    @property
    def frontmatter(self) -> Optional[Frontmatter]:
        return self.metadata.data if self.metadata is not None else None

    def replace_metadata(self, data: Frontmatter) -> None:
        """Swap in new frontmatter, creating the block if the document had none."""
        self.metadata = MetadataBlock(data=data)
