"""Access to FASTA index (.fai) files and reference sequence slices."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

_INT_PREFIX = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class FaiEntry:
    """One line of a FASTA index."""

    name: str
    length: int
    offset: int
    line_bases: int
    line_width: int

    def file_offset(self, pos: int) -> int:
        """Byte offset in the FASTA file of zero-based position ``pos``."""
        lines, within = divmod(pos, self.line_bases)
        return self.offset + lines * self.line_width + within


def read_fai(fai_path: PathLike) -> list[FaiEntry]:
    """All entries of a FASTA index, in file order."""
    entries: list[FaiEntry] = []
    with open(fai_path) as fh:
        for line in fh:
            line = line.rstrip("\r\n")
            if not line:
                continue
            fields = line.split("\t")
            if len(fields) < 5:
                raise ValueError(f"Wrong number of entries in fasta index line {line!r}")
            try:
                numbers = [int(value) for value in fields[1:5]]
            except ValueError:
                raise ValueError(f"Invalid fasta index line {line!r}") from None
            entries.append(FaiEntry(fields[0], *numbers))
    return entries


def contig_from_index(fai_path: PathLike, idx: int) -> tuple[str, int]:
    """Name and length of the contig on line ``idx`` (one-based) of the index."""
    if idx <= 0:
        raise ValueError(f"Index must be greater than zero, got {idx}")
    with open(fai_path) as fh:
        for number, line in enumerate(fh, start=1):
            if number != idx:
                continue
            fields = line.split()
            length = _INT_PREFIX.match(fields[1]) if len(fields) > 1 else None
            if length is None:
                raise ValueError(f"Wrong number of entries found in fasta index line {line!r}")
            return fields[0], int(length.group())
    raise IndexError(f"No line found in fai file for index {idx}")


def contig_count_and_name_length(fai_path: PathLike) -> tuple[int, int]:
    """Number of contigs in the index and the summed length of their names."""
    count = 0
    total = 0
    with open(fai_path) as fh:
        for line in fh:
            name = line.rstrip("\r\n").split("\t", 1)[0]
            if not name:
                continue
            count += 1
            total += len(name)
    return count, total


def fetch_reference_sequence(fasta_path: PathLike, chrom: str, start: int, stop: int) -> str:
    """Bases ``start``..``stop`` (one-based, inclusive) of ``chrom``.

    The index is read from ``<fasta_path>.fai``; the range is clipped to the
    contig.
    """
    fasta_name = os.fspath(fasta_path)
    entries = {entry.name: entry for entry in read_fai(fasta_name + ".fai")}
    entry = entries.get(chrom)
    if entry is None:
        raise KeyError(f"Error fetching reference sequence for region {chrom}:{start}-{stop}")
    beg = min(max(start - 1, 0), entry.length)
    end = min(max(stop, 0), entry.length)
    if end <= beg:
        return ""
    first = entry.file_offset(beg)
    last = entry.file_offset(end)
    with open(fasta_name, "rb") as fh:
        fh.seek(first)
        raw = fh.read(last - first)
    seq = raw.replace(b"\n", b"").replace(b"\r", b"")
    if len(seq) != end - beg:
        raise ValueError(
            f"Reference file truncated fetching region {chrom}:{start}-{stop}"
        )
    return seq.decode("ascii")