"""Frontmatter mutation: full replacement, field merge, field removal"""

from pathlib import Path
from typing import Any, Iterable, Optional

from mdmeta.core.extract import PathLike, file_errors, read_document, write_document
from mdmeta.core.models import Document, Frontmatter
from mdmeta.errors import NoFrontmatterError


def _replace(doc: Document, data: Any, create_if_missing: bool) -> None:
    """Install new frontmatter, honouring the create-if-missing policy."""
    if doc.metadata is None and not create_if_missing:
        raise NoFrontmatterError("No frontmatter found and create_if_missing is false")
    doc.replace_metadata(data)


def update_frontmatter(path: PathLike, frontmatter: Frontmatter, create_if_missing: bool = False) -> Frontmatter:
    """Replace the whole frontmatter mapping (no merge)."""
    path = Path(path).resolve()
    with file_errors("update frontmatter in", path):
        doc = read_document(path)
        _replace(doc, frontmatter, create_if_missing)
        write_document(path, doc)
    return frontmatter


def update_fields(path: PathLike, fields: Frontmatter, create_if_missing: bool = False) -> Frontmatter:
    """Shallow-merge fields over the existing frontmatter and write the result."""
    path = Path(path).resolve()
    with file_errors("update fields in", path):
        doc = read_document(path)
        merged = {**(doc.frontmatter or {}), **fields}
        _replace(doc, merged, create_if_missing)
        write_document(path, doc)
    return merged


def remove_fields(path: PathLike, keys: Iterable[str]) -> Optional[Frontmatter]:
    """Drop keys from the frontmatter. Documents without frontmatter are left alone."""
    path = Path(path).resolve()
    with file_errors("remove fields from", path):
        doc = read_document(path)
        if doc.frontmatter is None:
            return None
        remaining = dict(doc.frontmatter)
        for key in keys:
            remaining.pop(key, None)
        doc.replace_metadata(remaining)
        write_document(path, doc)
    return remaining


def get_current_frontmatter(path: PathLike) -> Optional[Frontmatter]:
    """Read the frontmatter without touching the file."""
    path = Path(path).resolve()
    with file_errors("read frontmatter from", path):
        return read_document(path).frontmatter
