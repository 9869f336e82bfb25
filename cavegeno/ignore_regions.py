"""Reading ignored regions and splitting a span into sections for analysis."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

INT_MAX = 2**31 - 1

_INT_PREFIX = re.compile(r"[+-]?\d+")

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class SeqRegion:
    """An inclusive, one-based region of a sequence."""

    beg: int
    end: int
    chr_name: Optional[str] = None
    val: int = 0

    def __contains__(self, pos: object) -> bool:
        return isinstance(pos, int) and self.beg <= pos <= self.end

    def overlaps(self, start: int, end: int) -> bool:
        """True if this region touches any part of ``start``..``end``."""
        return (
            self.beg <= start <= self.end
            or self.beg <= end <= self.end
            or (start <= self.beg and end >= self.end)
        )

    def copy(self) -> "SeqRegion":
        return SeqRegion(self.beg, self.end, self.chr_name, self.val)


def _fields(line: str, path: PathLike) -> list[str]:
    fields = line.split()
    if not fields:
        raise ValueError(f"Incorrect line read from ignore file {os.fspath(path)}: {line!r}")
    return fields


def _is_bed(path: PathLike) -> bool:
    name = os.fspath(path)
    dot = name.rfind(".")
    return dot > 0 and name[dot + 1:] == "bed"


def _parse_region_fields(fields: Sequence[str]) -> Optional[tuple[int, int]]:
    """Start and end from a ``chrom start end`` line, or None if not present."""
    if len(fields) < 3 or not _INT_PREFIX.fullmatch(fields[1]):
        return None
    end_match = _INT_PREFIX.match(fields[2])
    if end_match is None:
        return None
    return int(fields[1]), int(end_match.group())


def count_ignored_regions(path: PathLike, chrom: str) -> int:
    """Number of lines in the ignore file that belong to ``chrom``."""
    with open(path) as fh:
        return sum(1 for line in fh if _fields(line, path)[0] == chrom)


def read_ignored_regions(path: PathLike, chrom: str) -> list[SeqRegion]:
    """Ignored regions of ``chrom``, in file order.

    A ``.bed`` file holds zero-based starts, which are converted to one-based.
    A line holding only a chromosome name ignores the whole chromosome.
    """
    shift = 1 if _is_bed(path) else 0
    regions: list[SeqRegion] = []
    with open(path) as fh:
        for line in fh:
            fields = _fields(line, path)
            if fields[0] != chrom:
                continue
            parsed = _parse_region_fields(fields)
            if parsed is None:
                regions.append(SeqRegion(1, INT_MAX))
            else:
                beg, end = parsed
                regions.append(SeqRegion(beg + shift, end))
    return regions


def find_overlap(pos: int, regions: Iterable[SeqRegion]) -> Optional[SeqRegion]:
    """A copy of the first region containing ``pos``, or None."""
    for region in regions:
        if pos in region:
            return SeqRegion(region.beg, region.end)
    return None


def regions_covered(start: int, end: int, regions: Iterable[SeqRegion]) -> list[SeqRegion]:
    """Copies of the regions that overlap ``start``..``end``, in input order."""
    return [SeqRegion(r.beg, r.end) for r in regions if r.overlaps(start, end)]


def resolve_analysis_sections(
    start: int, end: int, regions: Iterable[SeqRegion]
) -> list[SeqRegion]:
    """Split ``start``..``end`` into the sections lying between ignored regions.

    The regions are expected in ascending order of position.
    """
    covered = regions_covered(start, end, regions)
    sections: list[SeqRegion] = []
    beg = start
    if covered and start >= covered[0].beg:
        beg = covered.pop(0).end + 1
    for region in covered:
        stop = region.beg - 1
        if beg <= end and stop <= end:
            sections.append(SeqRegion(beg, stop))
        beg = region.end + 1
    if beg <= end:
        sections.append(SeqRegion(beg, end))
    return sections