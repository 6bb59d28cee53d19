"""
ICD-10 outline import and leaf lookup.

The catalogue ships as a tab-indented outline, one code per line::

    I Certain infectious and parasitic diseases
    \tA00-A09 Intestinal infectious diseases
    \t\tA00 Cholera

The number of leading tabs is the depth of the line; every line hangs off
the most recent line one level shallower.  Importing is a single pass that
upserts by ``code``, so a run can be interrupted and repeated safely.
Only leaves (rows without children) are valid diagnoses and only those are
returned by :func:`search_leaves`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional

from django.db import DatabaseError, transaction
from django.db.models import Q

from registry.models import ICD10Condition

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
SEARCH_LIMIT = 20


@dataclass(frozen=True)
class OutlineEntry:
    level: int
    code: str
    description: str
    line_no: int


@dataclass
class ImportSummary:
    created: int = 0
    updated: int = 0
    malformed: int = 0
    orphaned: int = 0
    cyclic: int = 0
    failed: int = 0

    @property
    def imported(self) -> int:
        return self.created + self.updated

    @property
    def skipped(self) -> int:
        return self.malformed + self.orphaned + self.cyclic + self.failed

    def as_dict(self) -> dict:
        return {
            'created': self.created,
            'updated': self.updated,
            'malformed': self.malformed,
            'orphaned': self.orphaned,
            'cyclic': self.cyclic,
            'failed': self.failed,
        }


class OutlineError(Exception):
    """A single outline line that cannot be placed in the tree."""

    def __init__(self, line_no: int, message: str):
        super().__init__(f"line {line_no}: {message}")
        self.line_no = line_no


class MissingParentError(OutlineError):
    pass


class CycleError(OutlineError):
    pass


def outline_depth(line: str) -> int:
    depth = 0
    while depth < len(line) and line[depth] == '\t':
        depth += 1
    return depth


def iter_outline(lines: Iterable[str], on_malformed: Optional[Callable[[int], None]] = None) -> Iterator[OutlineEntry]:
    """Yield one :class:`OutlineEntry` per usable line, in source order.

    Blank lines are ignored.  Lines that do not split into a code and a
    description are logged and skipped; ``on_malformed`` is then called
    with the depth of the rejected line.  ``str.split`` without arguments
    splits on any whitespace run, non-breaking spaces included.
    """
    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip('\r\n')
        if not line.strip():
            continue
        level = outline_depth(line)
        parts = line.strip().split()
        code = parts[0] if parts else ''
        description = ' '.join(parts[1:])
        if not code or not description:
            logger.warning("Skipping malformed ICD-10 line %d: %r", line_no, line)
            if on_malformed is not None:
                on_malformed(level)
            continue
        yield OutlineEntry(level=level, code=code, description=description, line_no=line_no)


class ParentTracker:
    """Most recently imported node id per outline depth.

    One tracker belongs to one import run.  Recording a node at depth ``L``
    closes every deeper subtree, so a later deep line can never attach to
    a node from an earlier branch.
    """

    def __init__(self) -> None:
        self._ids: dict[int, int] = {}

    def parent_for(self, entry: OutlineEntry) -> Optional[int]:
        if entry.level == 0:
            return None
        try:
            return self._ids[entry.level - 1]
        except KeyError:
            raise MissingParentError(
                entry.line_no, f"no parent at depth {entry.level - 1} for {entry.code!r}"
            ) from None

    def ancestors(self, level: int) -> List[int]:
        return [self._ids[d] for d in range(level) if d in self._ids]

    def record(self, level: int, node_id: int) -> None:
        self.forget(level + 1)
        self._ids[level] = node_id

    def forget(self, level: int) -> None:
        for depth in [d for d in self._ids if d >= level]:
            del self._ids[depth]


def upsert_condition(entry: OutlineEntry, parent_id: Optional[int], tracker: ParentTracker) -> tuple[ICD10Condition, bool]:
    """Create or update the row for ``entry.code`` in its own transaction."""
    with transaction.atomic():
        node = ICD10Condition.objects.select_for_update().filter(code=entry.code).first()
        if node is None:
            node = ICD10Condition.objects.create(
                code=entry.code, description=entry.description, parent_id=parent_id
            )
            return node, True
        if node.id in tracker.ancestors(entry.level):
            raise CycleError(entry.line_no, f"{entry.code!r} would become its own descendant")
        node.description = entry.description
        node.parent_id = parent_id
        node.save(update_fields=['description', 'parent'])
        return node, False


def import_outline(lines: Iterable[str]) -> ImportSummary:
    """Build the condition forest from outline ``lines``.

    Every failure is local to its line: it is logged, counted and the
    import moves on.  The subtree under a failed line is reported as
    orphaned rather than attached elsewhere; this includes children of
    malformed lines.
    """
    summary = ImportSummary()
    tracker = ParentTracker()

    def skip_malformed(level: int) -> None:
        summary.malformed += 1
        tracker.forget(level)

    for entry in iter_outline(lines, on_malformed=skip_malformed):
        try:
            parent_id = tracker.parent_for(entry)
            node, created = upsert_condition(entry, parent_id, tracker)
        except MissingParentError as e:
            logger.warning("Skipping orphaned ICD-10 %s", e)
            summary.orphaned += 1
            tracker.forget(entry.level)
            continue
        except CycleError as e:
            logger.warning("Skipping cyclic ICD-10 %s", e)
            summary.cyclic += 1
            tracker.forget(entry.level)
            continue
        except DatabaseError:
            logger.exception("Failed to store ICD-10 line %d (%s)", entry.line_no, entry.code)
            summary.failed += 1
            tracker.forget(entry.level)
            continue
        if created:
            summary.created += 1
        else:
            summary.updated += 1
        tracker.record(entry.level, node.id)
    logger.info(
        "ICD-10 import finished: %d created, %d updated, %d skipped",
        summary.created, summary.updated, summary.skipped,
    )
    return summary


def import_outline_file(path: str, encoding: str = 'utf-8-sig') -> ImportSummary:
    with open(path, encoding=encoding) as fh:
        return import_outline(fh)


def search_leaves(query: Optional[str], limit: int = SEARCH_LIMIT) -> List[ICD10Condition]:
    """Return up to ``limit`` leaf conditions matching ``query`` by code or description."""
    query = query or ''
    if len(query) < MIN_QUERY_LENGTH:
        return []
    qs = (
        ICD10Condition.objects
        .filter(Q(code__icontains=query) | Q(description__icontains=query))
        .filter(children__isnull=True)
        .order_by('code')
    )
    return list(qs[:limit])


def format_condition(node: ICD10Condition) -> dict:
    return {
        'id': node.id,
        'code': node.code,
        'description': node.description,
        'parentId': node.parent_id,
    }
