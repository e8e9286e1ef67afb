# =============================================================================
# media/media_map.py - Media Map File
# =============================================================================
# The media map is the JSON inventory of every placeholder on the site,
# grouped page -> section -> placeholders:
#
#   [{"id": "about", "name": "About", "path": "/about",
#     "sections": [{"id": "hero", "name": "Hero", "description": "...",
#                   "mediaPlaceholders": [{"id": "about-hero-image", ...}]}]}]
#
# discover_placeholders() builds the flat list by walking the pages tree;
# organize_placeholders() / flatten_media_map() convert between the flat list
# and the nested file shape.
# =============================================================================

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from media.errors import MediaMapError
from media.types import Dimensions, LogicalPlaceholder, MediaArea

logger = logging.getLogger(__name__)

PAGE_FILE_STEMS = ("page", "layout")
PAGE_FILE_SUFFIXES = (".js", ".jsx", ".ts", ".tsx", ".html", ".md", ".py")
PLACEHOLDER_FILE = "media.json"

DEFAULT_DIMENSIONS = Dimensions(width=1200, height=800, aspect_ratio=1.5)


# =============================================================================
# Load / Save
# =============================================================================

def load_media_map(path: str | Path) -> list[dict[str, Any]]:
    """
    Read a media map file.

    Raises:
        MediaMapError: Missing file, bad JSON, or not a list of pages
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise MediaMapError(str(path), "file not found") from None
    except json.JSONDecodeError as e:
        raise MediaMapError(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise MediaMapError(str(path), "expected a list of pages")
    return data


def save_media_map(path: str | Path, media_map: list[dict[str, Any]]) -> None:
    """Write the map with 2-space indentation, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(media_map, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Media map written to {path}")


# =============================================================================
# Shape Conversion
# =============================================================================

def flatten_media_map(media_map: list[dict[str, Any]]) -> list[LogicalPlaceholder]:
    """
    Flatten the nested map into placeholders, in file order.

    Duplicates are kept: callers run the consistency pass on the result.
    """
    placeholders: list[LogicalPlaceholder] = []
    for page in media_map:
        page_id = page.get("id") or "home"
        for section in page.get("sections") or []:
            section_id = section.get("id") or "main"
            for raw in section.get("mediaPlaceholders") or []:
                if not raw.get("id"):
                    logger.warning(f"Skipping placeholder without id in {page_id}/{section_id}")
                    continue
                try:
                    placeholders.append(
                        LogicalPlaceholder.from_dict(raw, page=page_id, section=section_id)
                    )
                except ValueError as e:
                    raise MediaMapError(
                        f"{page_id}/{section_id}", f"placeholder {raw['id']}: {e}"
                    ) from e
    return placeholders


def _title(value: str) -> str:
    return value[:1].upper() + value[1:]


def organize_placeholders(placeholders: Sequence[LogicalPlaceholder]) -> list[dict[str, Any]]:
    """Group a flat placeholder list into the page -> section map shape."""
    pages: dict[str, dict[str, Any]] = {}

    for placeholder in placeholders:
        page = pages.setdefault(placeholder.page, {
            "id": placeholder.page,
            "name": _title(placeholder.page),
            "path": "/" if placeholder.page == "home" else f"/{placeholder.page}",
            "sections": {},
        })
        section = page["sections"].setdefault(placeholder.section, {
            "id": placeholder.section,
            "name": _title(placeholder.section),
            "description": f"{placeholder.section} section for {placeholder.page} page",
            "mediaPlaceholders": [],
        })
        section["mediaPlaceholders"].append(placeholder.to_dict())

    return [
        {**page, "sections": list(page["sections"].values())}
        for page in pages.values()
    ]


def count_media_map(media_map: list[dict[str, Any]]) -> tuple[int, int, int]:
    """(pages, sections, placeholders) in a map."""
    sections = sum(len(page.get("sections") or []) for page in media_map)
    placeholders = sum(
        len(section.get("mediaPlaceholders") or [])
        for page in media_map
        for section in page.get("sections") or []
    )
    return len(media_map), sections, placeholders


# =============================================================================
# Discovery
# =============================================================================

def _is_page_file(path: Path) -> bool:
    return path.stem in PAGE_FILE_STEMS and path.suffix in PAGE_FILE_SUFFIXES


def _derived_placeholder(page: str, section: str) -> LogicalPlaceholder:
    try:
        area = MediaArea(section)
    except ValueError:
        area = MediaArea.HERO
    return LogicalPlaceholder(
        id=f"{page}-{section}-image",
        area=area,
        page=page,
        section=section,
        description=f"Main image for {page} {section}",
        dimensions=DEFAULT_DIMENSIONS,
    )


def _declared_placeholders(path: Path, page: str, section: str) -> list[LogicalPlaceholder]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MediaMapError(str(path), f"invalid JSON: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("mediaPlaceholders") or []
    if not isinstance(raw, list):
        raise MediaMapError(str(path), "expected a list of placeholders")

    try:
        return [LogicalPlaceholder.from_dict(item, page=item.get("page") or page,
                                             section=item.get("section") or section)
                for item in raw]
    except (KeyError, ValueError) as e:
        raise MediaMapError(str(path), f"bad placeholder: {e}") from e


def discover_placeholders(pages_dir: str | Path) -> list[LogicalPlaceholder]:
    """
    Walk a pages directory and collect its placeholders.

    Every directory holding a page or layout file contributes placeholders.
    A sibling media.json declares them explicitly; otherwise one
    "<page>-<section>-image" placeholder is derived from the path, where the
    first directory level is the page (root = "home") and the second is the
    section (default "main").

    Directories are visited in sorted order so the output is stable.
    """
    root = Path(pages_dir)
    if not root.is_dir():
        raise MediaMapError(str(root), "pages directory not found")

    directories = sorted({p.parent for p in root.rglob("*") if p.is_file() and _is_page_file(p)})
    placeholders: list[LogicalPlaceholder] = []

    for directory in directories:
        parts = directory.relative_to(root).parts
        page = parts[0] if parts else "home"
        section = parts[1] if len(parts) > 1 else "main"

        declared = directory / PLACEHOLDER_FILE
        if declared.is_file():
            found = _declared_placeholders(declared, page, section)
        else:
            found = [_derived_placeholder(page, section)]

        logger.debug(f"{directory}: {len(found)} placeholder(s)")
        placeholders.extend(found)

    logger.info(f"Discovered {len(placeholders)} placeholders in {len(directories)} directories")
    return placeholders
