"""Read-only frontmatter extraction and shared file I/O"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from mdmeta.core.codec import decode, encode
from mdmeta.core.models import Document, Frontmatter
from mdmeta.errors import FrontmatterError, NotFoundError


PathLike = Union[str, Path]


@contextmanager
def file_errors(operation: str, path: Path) -> Iterator[None]:
    """Turn I/O failures into NotFoundError and tag every error with operation + path."""
    try:
        yield
    except FrontmatterError as e:
        e.locate(operation, path)
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise NotFoundError(str(e)).locate(operation, path) from e


def read_document(path: Path) -> Document:
    # newline="" keeps CRLF endings intact through the round trip
    with open(path, encoding="utf-8", newline="") as f:
        return decode(f.read())


def write_document(path: Path, doc: Document) -> None:
    text = encode(doc)  # encode first so a failure leaves the file untouched
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def project(data: Frontmatter, fields: list[str]) -> Frontmatter:
    """Keep only the requested keys that exist, in request order."""
    return {k: data[k] for k in fields if k in data}


def extract_frontmatter(path: PathLike, fields: Optional[list[str]] = None) -> Optional[Frontmatter]:
    """Return the document's frontmatter, or None when it has no fenced block.

    With `fields`, only those keys are returned; keys missing from the
    document are left out rather than reported.
    """
    path = Path(path).resolve()
    with file_errors("extract frontmatter from", path):
        doc = read_document(path)

    data = doc.frontmatter
    if data is None:
        return None
    if fields:
        return project(data, fields)
    return data
