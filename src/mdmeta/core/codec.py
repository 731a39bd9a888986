"""Frontmatter codec: fence scanning, YAML load/dump, and document round-tripping"""

import datetime
import re
from typing import Any, Optional

import yaml
from markdown_it import MarkdownIt

from mdmeta.core.models import ContentBlock, ContentKind, Document, Frontmatter, MetadataBlock
from mdmeta.errors import EncodeError, ParseError


FENCE = "---"
BOM = "\ufeff"
PARSER_PRESET = "gfm-like"

BLOCK_KIND_MAP: dict[str, ContentKind] = {
    'paragraph_open':    ContentKind.paragraph,
    'heading_open':      ContentKind.heading,
    'bullet_list_open':  ContentKind.list,
    'ordered_list_open': ContentKind.list,
    'fence':             ContentKind.code,
    'code_block':        ContentKind.code,
    'table_open':        ContentKind.table,
    'html_block':        ContentKind.html,
    'blockquote_open':   ContentKind.quote,
    'hr':                ContentKind.rule,
}

_LINE_RE = re.compile(r'(?<=\n)')

# YAML 1.2 core schema: no yes/no/on/off booleans, no base-60 or
# leading-zero octal integers, no implicit timestamps.
CORE_SCHEMA_RESOLVERS = [
    ('tag:yaml.org,2002:bool',
     re.compile(r'^(?:true|True|TRUE|false|False|FALSE)$'),
     list('tTfF')),
    ('tag:yaml.org,2002:int',
     re.compile(r'^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$'),
     list('-+0123456789')),
    ('tag:yaml.org,2002:float',
     re.compile(r'''^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
                    |[-+]?\.(?:inf|Inf|INF)
                    |\.(?:nan|NaN|NAN))$''', re.X),
     list('-+.0123456789')),
    ('tag:yaml.org,2002:null',
     re.compile(r'^(?:~|null|Null|NULL|)$'),
     ['~', 'n', 'N', '']),
]


def _use_core_schema(cls) -> None:
    cls.yaml_implicit_resolvers = {}
    for tag, regexp, first in CORE_SCHEMA_RESOLVERS:
        cls.add_implicit_resolver(tag, regexp, first)


def _construct_int(loader, node) -> int:
    """Decimal, 0o octal or 0x hex; leading zeros are still decimal."""
    value = loader.construct_scalar(node)
    if value.startswith('0o'):
        return int(value[2:], 8)
    if value.startswith('0x'):
        return int(value[2:], 16)
    return int(value)


def _represent_date(dumper, data):
    return dumper.represent_scalar('tag:yaml.org,2002:str', data.isoformat())


class _Loader(yaml.SafeLoader):
    """Safe loader that reads plain scalars by the YAML 1.2 core rules."""


class _Dumper(yaml.SafeDumper):
    """Safe dumper with block sequences indented under their key."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


_use_core_schema(_Loader)
_use_core_schema(_Dumper)
_Loader.add_constructor('tag:yaml.org,2002:int', _construct_int)
_Dumper.add_representer(datetime.date, _represent_date)
_Dumper.add_representer(datetime.datetime, _represent_date)


def load_yaml(text: str) -> Frontmatter:
    """Parse frontmatter YAML into a mapping. Empty text yields {}."""
    try:
        data = yaml.load(text, Loader=_Loader)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML frontmatter: {e}", text=text) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(
            f"Invalid YAML frontmatter: expected a mapping, got {type(data).__name__}", text=text
        )
    return data


def dump_yaml(data: Any) -> str:
    """Render a mapping as block-style YAML without the trailing newline."""
    if not isinstance(data, dict):
        raise EncodeError(f"Frontmatter must be a mapping, got {type(data).__name__}")
    try:
        text = yaml.dump(
            data,
            Dumper=_Dumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=float("inf"),
        )
    except yaml.YAMLError as e:
        raise EncodeError(f"Cannot encode frontmatter: {e}") from e
    return text.strip()


def render_fence(data: Any, newline: str = "\n") -> str:
    lines = [FENCE, *dump_yaml(data).split("\n"), FENCE]
    return newline.join(lines) + newline


def detect_newline(text: str) -> str:
    """Line ending of the first line: '\\r\\n' or '\\n'."""
    first, sep, _ = text.partition("\n")
    return "\r\n" if sep and first.endswith("\r") else "\n"


def _split_lines(text: str) -> list[str]:
    """Split on LF keeping line endings; CR stays attached to its line."""
    return [line for line in _LINE_RE.split(text) if line]


def _is_fence(line: str) -> bool:
    return line.rstrip("\r\n").rstrip(" \t") == FENCE


def split_frontmatter(text: str) -> Optional[tuple[str, str, str]]:
    """Return (fenced_source, yaml_text, body), or None if text has no leading frontmatter."""
    lines = _split_lines(text)
    if not lines or not _is_fence(lines[0]):
        return None
    for i in range(1, len(lines)):
        if _is_fence(lines[i]):
            return "".join(lines[:i + 1]), "".join(lines[1:i]), "".join(lines[i + 1:])
    return None


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def split_blocks(body: str, preset: str = PARSER_PRESET) -> list[ContentBlock]:
    """Cut the body into top-level blocks at the source lines markdown-it reports.

    Each block runs up to the start of the next one, so joining the block texts
    gives back the body unchanged.
    """
    lines = _split_lines(body)
    if not lines:
        return []

    starts: dict[int, ContentKind] = {}
    for tok in _make_parser(preset).parse(body):
        if tok.level == 0 and tok.map:
            start = min(tok.map[0], len(lines) - 1)
            starts.setdefault(start, BLOCK_KIND_MAP.get(tok.type, ContentKind.paragraph))
    if 0 not in starts:
        starts[0] = ContentKind.blank

    bounds = sorted(starts)
    blocks = []
    for i, start in enumerate(bounds):
        end = bounds[i + 1] if i + 1 < len(bounds) else len(lines)
        blocks.append(ContentBlock(text="".join(lines[start:end]), kind=starts[start]))
    return blocks


def decode(text: str, preset: str = PARSER_PRESET) -> Document:
    """Parse full document text into a Document.

    A leading byte-order mark is skipped before looking for the fence and
    remembered so encode can put it back.
    """
    bom = text.startswith(BOM)
    if bom:
        text = text[len(BOM):]
    newline = detect_newline(text)

    parts = split_frontmatter(text)
    if parts is None:
        return Document(metadata=None, content=split_blocks(text, preset), bom=bom, newline=newline)

    source, raw, body = parts
    metadata = MetadataBlock(data=load_yaml(raw), raw=raw, source=source)
    return Document(metadata=metadata, content=split_blocks(body, preset), bom=bom, newline=newline)


def encode(doc: Document) -> str:
    """Serialize a Document; untouched metadata is emitted exactly as read."""
    head = BOM if doc.bom else ""
    if doc.metadata is not None:
        if doc.metadata.source is not None:
            head += doc.metadata.source
        else:
            head += render_fence(doc.metadata.data, doc.newline)
    return head + doc.body
