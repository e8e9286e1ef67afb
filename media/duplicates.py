# =============================================================================
# media/duplicates.py - Duplicate-ID Consistency Pass
# =============================================================================
# Placeholder IDs must be unique across every page and section. This module
# detects collisions in a discovered placeholder list and repairs them:
#
# - find_duplicate_ids()    pure: report each colliding ID and where it occurs
# - repair_duplicate_ids()  pure: first occurrence keeps its ID, later ones get
#                           "<id>-<page>-<section>-<ordinal>"
# - apply_renames()         I/O shell: persist each rename on its own so a
#                           crash mid-pass leaves fewer duplicates, not a
#                           half-renamed set
#
# Running repair on its own output is a no-op.
# =============================================================================

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Sequence

from lib.utils import slugify
from media.errors import MediaStoreError
from media.store import MediaStore
from media.types import LogicalPlaceholder

logger = logging.getLogger(__name__)


# =============================================================================
# Result Types
# =============================================================================

@dataclass(frozen=True)
class DuplicateLocation:
    """Where one occurrence of a duplicated ID sits in the discovered list."""
    index: int
    page: str
    section: str


@dataclass
class DuplicateIdConflict:
    """An ID that occurs more than once. Reported to operators, never raised."""
    id: str
    count: int
    locations: list[DuplicateLocation] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "count": self.count,
            "locations": [
                {"index": loc.index, "page": loc.page, "section": loc.section}
                for loc in self.locations
            ],
        }


@dataclass(frozen=True)
class IdRename:
    """One renamed occurrence. placeholder carries the new ID."""
    old_id: str
    new_id: str
    index: int
    placeholder: LogicalPlaceholder


@dataclass
class DuplicateRepairResult:
    """
    Output of the pure repair step.

    placeholders is the full list in input order with renames applied;
    unchanged holds every placeholder that kept its ID.
    """
    renamed: list[IdRename] = field(default_factory=list)
    unchanged: list[LogicalPlaceholder] = field(default_factory=list)
    placeholders: list[LogicalPlaceholder] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.renamed)

    def without(self, failed: Sequence[IdRename]) -> list[LogicalPlaceholder]:
        """The repaired list with the given renames reverted to their old IDs."""
        reverted = {r.index: r.old_id for r in failed}
        return [
            p.with_id(reverted[i]) if i in reverted else p
            for i, p in enumerate(self.placeholders)
        ]


@dataclass
class RenameReport:
    """Which renames reached the store and which did not."""
    applied: list[IdRename] = field(default_factory=list)
    failed: list[tuple[IdRename, str]] = field(default_factory=list)
    relinked: list[IdRename] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


# =============================================================================
# Pure Core
# =============================================================================

def find_duplicate_ids(placeholders: Sequence[LogicalPlaceholder]) -> list[DuplicateIdConflict]:
    """
    Report every ID that occurs more than once, in first-seen order.

    Example:
        conflicts = find_duplicate_ids(placeholders)
        for c in conflicts:
            print(f'"{c.id}" appears {c.count} times')
    """
    counts = Counter(p.id for p in placeholders)
    locations: dict[str, list[DuplicateLocation]] = defaultdict(list)

    for index, placeholder in enumerate(placeholders):
        if counts[placeholder.id] > 1:
            locations[placeholder.id].append(
                DuplicateLocation(index=index, page=placeholder.page, section=placeholder.section)
            )

    return [
        DuplicateIdConflict(id=pid, count=counts[pid], locations=locs)
        for pid, locs in locations.items()
    ]


def _suffixed_id(placeholder: LogicalPlaceholder, ordinal: int) -> str:
    return f"{placeholder.id}-{slugify(placeholder.page, 'page')}-{slugify(placeholder.section, 'section')}-{ordinal}"


def repair_duplicate_ids(placeholders: Sequence[LogicalPlaceholder]) -> DuplicateRepairResult:
    """
    Rename every non-first occurrence of a duplicated ID.

    The suffix is derived from the occurrence's page and section plus an
    ordinal that counts up within each duplicate group. If the generated ID
    is already taken by any placeholder, the ordinal is bumped until it is
    free, so the output never contains a collision.

    Args:
        placeholders: Discovered placeholders, in discovery order

    Returns:
        DuplicateRepairResult (input objects are not mutated)
    """
    taken = {p.id for p in placeholders}
    seen: set[str] = set()
    ordinals: dict[str, int] = defaultdict(int)
    result = DuplicateRepairResult()

    for index, placeholder in enumerate(placeholders):
        if placeholder.id not in seen:
            seen.add(placeholder.id)
            result.unchanged.append(placeholder)
            result.placeholders.append(placeholder)
            continue

        ordinal = ordinals[placeholder.id] + 1
        new_id = _suffixed_id(placeholder, ordinal)
        while new_id in taken:
            ordinal += 1
            new_id = _suffixed_id(placeholder, ordinal)
        ordinals[placeholder.id] = ordinal

        taken.add(new_id)
        seen.add(new_id)
        renamed = placeholder.with_id(new_id)
        result.renamed.append(
            IdRename(old_id=placeholder.id, new_id=new_id, index=index, placeholder=renamed)
        )
        result.placeholders.append(renamed)

    return result


# =============================================================================
# Imperative Shell
# =============================================================================

def apply_renames(store: MediaStore, renames: Sequence[IdRename]) -> RenameReport:
    """
    Persist renames one at a time.

    For each rename the new placeholder row is upserted and any link keyed
    by the old ID is re-keyed in place (the public_id association is kept,
    never deleted and recreated). Only the first rename of each group
    re-keys; if that rename fails the link stays on the old ID until the
    next run. A failure is logged and recorded; remaining renames still run.

    The placeholder row is written before the link is re-keyed. If the
    re-key fails, the new row stays behind while the rename counts as
    failed; new IDs are deterministic, so the next run upserts the same row
    and re-keys the link then.
    """
    report = RenameReport()
    groups_seen: set[str] = set()

    for rename in renames:
        first_in_group = rename.old_id not in groups_seen
        groups_seen.add(rename.old_id)
        try:
            store.upsert_placeholders([rename.placeholder.to_dict()])
            moved = first_in_group and store.rename_placeholder_link(rename.old_id, rename.new_id)
        except MediaStoreError as e:
            logger.error(f"Failed to rename {rename.old_id} -> {rename.new_id}: {e.message}")
            report.failed.append((rename, e.message))
            continue

        report.applied.append(rename)
        if moved:
            report.relinked.append(rename)
            logger.info(f"Renamed {rename.old_id} -> {rename.new_id} (link moved)")
        else:
            logger.info(f"Renamed {rename.old_id} -> {rename.new_id}")

    return report
