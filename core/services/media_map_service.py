# =============================================================================
# core/services/media_map_service.py - Media Map Maintenance
# =============================================================================
# Operator workflows around the media map file:
# - generate: discover placeholders, repair duplicate IDs, write the map
# - sync:     upsert the map's placeholders into media_placeholders
# - check:    report duplicate IDs in the map
# - fix:      repair duplicates, persist each rename, save the map
#
# Used by scripts/media_map.py and the admin placeholder endpoints.
# =============================================================================

import logging
from dataclasses import dataclass, field
from pathlib import Path

from media.duplicates import (
    DuplicateIdConflict,
    DuplicateRepairResult,
    RenameReport,
    apply_renames,
    find_duplicate_ids,
    repair_duplicate_ids,
)
from media.errors import MediaMapError, MediaStoreError, StoreUnavailableError
from media.media_map import (
    count_media_map,
    discover_placeholders,
    flatten_media_map,
    load_media_map,
    organize_placeholders,
    save_media_map,
)
from media.store import MediaStore
from media.types import LogicalPlaceholder

logger = logging.getLogger(__name__)

SYNC_BATCH_SIZE = 50


@dataclass
class GenerateSummary:
    """What generate() wrote."""
    path: str
    pages: int
    sections: int
    placeholders: int
    renamed: int


@dataclass
class SyncSummary:
    """What sync() wrote."""
    total: int
    written: int = 0
    batches: int = 0
    failed_batches: list[int] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed_batches


@dataclass
class FixSummary:
    """Outcome of fix(): the pure repair and what reached the store."""
    repair: DuplicateRepairResult
    report: RenameReport
    remaining: list[DuplicateIdConflict]


class MediaMapService:
    """
    Service for media map maintenance.

    All methods are static; the store is passed in so the CLI and the API
    can share one code path.
    """

    @staticmethod
    def load_placeholders(map_path: str | Path) -> list[LogicalPlaceholder]:
        """Load the map file and flatten it into placeholders."""
        return flatten_media_map(load_media_map(map_path))

    @staticmethod
    def list_placeholders(store: MediaStore) -> list[tuple[LogicalPlaceholder, str | None]]:
        """
        Synced placeholders paired with the public ID they link to (or None).

        Raises:
            StoreUnavailableError: Either query failed
        """
        try:
            rows = store.fetch_all_placeholders()
            links = {row["placeholder_id"]: row["public_id"] for row in store.list_placeholder_links()}
        except MediaStoreError as e:
            raise StoreUnavailableError("list_placeholders", e.message) from e

        return [
            (placeholder, links.get(placeholder.id))
            for placeholder in (LogicalPlaceholder.from_dict(row) for row in rows)
        ]

    @staticmethod
    def generate(pages_dir: str | Path, output_path: str | Path) -> GenerateSummary:
        """
        Discover placeholders under pages_dir and write a fresh map.

        Duplicate IDs are repaired before writing, so the generated map is
        always collision-free.
        """
        logger.info(f"Scanning {pages_dir} for media placeholders")
        discovered = discover_placeholders(pages_dir)

        repair = repair_duplicate_ids(discovered)
        for rename in repair.renamed:
            logger.info(f"Renamed duplicate {rename.old_id} -> {rename.new_id}")

        media_map = organize_placeholders(repair.placeholders)
        save_media_map(output_path, media_map)

        pages, sections, placeholders = count_media_map(media_map)
        logger.info(
            f"Organized into {pages} pages, {sections} sections, "
            f"and {placeholders} placeholders"
        )
        return GenerateSummary(
            path=str(output_path),
            pages=pages,
            sections=sections,
            placeholders=placeholders,
            renamed=len(repair.renamed),
        )

    @staticmethod
    def check(map_path: str | Path) -> list[DuplicateIdConflict]:
        """Report duplicate IDs in the map; logs each conflict."""
        conflicts = find_duplicate_ids(MediaMapService.load_placeholders(map_path))
        for conflict in conflicts:
            where = ", ".join(f"{loc.page}/{loc.section}" for loc in conflict.locations)
            logger.warning(f'Duplicate ID "{conflict.id}" appears {conflict.count} times: {where}')
        return conflicts

    @staticmethod
    def sync(
        map_path: str | Path,
        store: MediaStore,
        batch_size: int = SYNC_BATCH_SIZE,
    ) -> SyncSummary:
        """
        Upsert every placeholder in the map into the store, in batches.

        A map with duplicate IDs is refused; run fix first. A failed batch
        is logged and the remaining batches still run.

        Raises:
            MediaMapError: Missing/invalid map, or duplicates present
            StoreUnavailableError: The very first batch failed
        """
        placeholders = MediaMapService.load_placeholders(map_path)
        conflicts = find_duplicate_ids(placeholders)
        if conflicts:
            raise MediaMapError(
                str(map_path),
                f"{len(conflicts)} duplicate ID(s), run fix-duplicates first",
            )

        rows = [p.to_dict() for p in placeholders]
        summary = SyncSummary(total=len(rows))

        for start in range(0, len(rows), batch_size):
            batch = rows[start:start + batch_size]
            number = start // batch_size + 1
            summary.batches += 1
            try:
                summary.written += store.upsert_placeholders(batch)
            except MediaStoreError as e:
                if number == 1:
                    raise StoreUnavailableError("sync", e.message) from e
                logger.error(f"Batch {number} failed: {e.message}")
                summary.failed_batches.append(number)
                continue
            logger.info(f"Synced batch {number} ({len(batch)} placeholders)")

        logger.info(f"Synced {summary.written}/{summary.total} placeholders")
        return summary

    @staticmethod
    def fix(map_path: str | Path, store: MediaStore) -> FixSummary:
        """
        Repair duplicate IDs in the map and persist each rename.

        The map is saved with only the renames that reached the store, so a
        later run picks the failed ones up again.
        """
        placeholders = MediaMapService.load_placeholders(map_path)
        repair = repair_duplicate_ids(placeholders)

        if not repair.changed:
            logger.info("No duplicate IDs found")
            return FixSummary(repair=repair, report=RenameReport(), remaining=[])

        report = apply_renames(store, repair.renamed)
        kept = repair.without([rename for rename, _ in report.failed])
        save_media_map(map_path, organize_placeholders(kept))

        remaining = find_duplicate_ids(kept)
        logger.info(
            f"Applied {len(report.applied)} rename(s), {len(report.failed)} failed, "
            f"{len(remaining)} duplicate ID(s) remain"
        )
        return FixSummary(repair=repair, report=report, remaining=remaining)
