"""Tag generation: extract frontmatter, ask the generator for tags, write them back"""

import json
import logging
from pathlib import Path
from typing import Callable, Optional

from mdmeta.core.extract import PathLike, extract_frontmatter
from mdmeta.core.models import Frontmatter
from mdmeta.core.update import update_fields, update_frontmatter
from mdmeta.core.utils.fs import is_glob_pattern, list_matching_files
from mdmeta.errors import EmptyGenerationError, NoFrontmatterError


logger = logging.getLogger(__name__)

NO_FRONTMATTER_PROMPT = "No frontmatter available"
DEFAULT_MAX_TAGS = 3

Generate = Callable[[str], list[str]]
ListFiles = Callable[[str], list[Path]]


def build_prompt(frontmatter: Optional[Frontmatter]) -> str:
    """Prompt body for the generator: the frontmatter as JSON, or a placeholder."""
    if frontmatter is None:
        return NO_FRONTMATTER_PROMPT
    return json.dumps(frontmatter, indent=2, ensure_ascii=False, default=str)


def tag_file(
    path: PathLike,
    generate: Generate,
    create_if_missing: bool = False,
    max_tags: int = DEFAULT_MAX_TAGS,
    ) -> list[str]:
    """Generate tags for one file and store them under the `tags` key."""
    path = Path(path).resolve()
    existing = extract_frontmatter(path)

    tags = list(generate(build_prompt(existing)))[:max_tags]
    if not tags:
        raise EmptyGenerationError("No tags generated from AI response").locate("generate tags for", path)

    if existing is not None:
        update_fields(path, {"tags": tags})
    elif create_if_missing:
        update_frontmatter(path, {"tags": tags}, create_if_missing=True)
    else:
        raise NoFrontmatterError(
            "No frontmatter found and create_if_missing is false"
        ).locate("generate tags for", path)

    logger.info("Generated tags for %s: %s", path, ", ".join(tags))
    return tags


def run_generate_tags(
    path: PathLike,
    generate: Generate,
    create_if_missing: bool = False,
    max_tags: int = DEFAULT_MAX_TAGS,
    list_files: ListFiles = list_matching_files,
    ) -> tuple[list[tuple[Path, list[str]]], list[tuple[Path, str]]]:
    """Tag a single file, or every file matched by a glob pattern.

    A literal path fails loudly. In batch mode each file is tried in turn and a
    failure is logged and recorded without stopping the rest.

    Returns (tagged, failed): (path, tags) pairs and (path, error message) pairs.
    """
    target = str(Path(path).resolve())
    if not is_glob_pattern(target):
        tags = tag_file(target, generate, create_if_missing, max_tags)
        return [(Path(target), tags)], []

    files = list_files(target)
    if not files:
        logger.info("No files found matching %s", target)
        return [], []
    logger.info("Found %d file(s) to process", len(files))

    tagged, failed = [], []
    for f in files:
        try:
            tags = tag_file(f, generate, create_if_missing, max_tags)
        except Exception as e:
            logger.error("Failed to process %s: %s", f, e)
            failed.append((Path(f), str(e)))
            continue
        tagged.append((Path(f), tags))
    return tagged, failed
