"""Genotype enumeration and grouping of normal/tumour genotype combinations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

BASES = ("A", "C", "G", "T")

_COUNT_ATTRS = {
    "A": "a_count",
    "C": "c_count",
    "G": "g_count",
    "T": "t_count",
}

_CACHE: dict[tuple[int, str], tuple["Genotype", ...]] = {}


def _check_base(base: str) -> None:
    if base not in _COUNT_ATTRS:
        raise ValueError(f"Incorrect base: {base!r}")


@dataclass(eq=False)
class Genotype:
    """Counts of each base making up a genotype, plus its variant summary."""

    a_count: int = 0
    c_count: int = 0
    g_count: int = 0
    t_count: int = 0
    var_base: str = ""
    var_base_prop: float = 0.0
    var_base_idx: int = 0

    def add_base(self, base: str) -> None:
        """Increment the count of ``base``; raise ValueError for a non-ACGT base."""
        _check_base(base)
        attr = _COUNT_ATTRS[base]
        setattr(self, attr, getattr(self, attr) + 1)

    def set_count(self, base: str, count: int) -> None:
        """Set the count of ``base``; unknown bases are ignored."""
        attr = _COUNT_ATTRS.get(base)
        if attr is not None:
            setattr(self, attr, count)

    def get_count(self, base: str) -> int:
        """Return the count of ``base``; raise ValueError for a non-ACGT base."""
        _check_base(base)
        return getattr(self, _COUNT_ATTRS[base])

    def total(self) -> int:
        """Total number of bases in the genotype."""
        return self.a_count + self.c_count + self.g_count + self.t_count

    def copy(self) -> "Genotype":
        """A new genotype with the same base counts and no variant summary."""
        return Genotype(self.a_count, self.c_count, self.g_count, self.t_count)

    def variant_base(self, ref_base: str) -> str:
        """First non-reference base present, or the reference base if none."""
        for base in BASES:
            if base != ref_base and self.get_count(base) > 0:
                return base
        return ref_base

    def variant_proportion(self, ref_base: str, copy_num: int) -> float:
        """Fraction of ``copy_num`` made up by the first non-reference base."""
        if self.get_count(ref_base) == copy_num:
            return 0.0
        for base in BASES:
            count = self.get_count(base)
            if base != ref_base and count:
                return count / copy_num
        raise ValueError(
            f"Cannot calculate variant proportion of {self} "
            f"for reference {ref_base!r} and copy number {copy_num}"
        )

    def _counts(self) -> tuple[int, int, int, int]:
        return (self.a_count, self.c_count, self.g_count, self.t_count)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Genotype):
            return NotImplemented
        return self._counts() == other._counts()

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(base * self.get_count(base) for base in BASES)


@dataclass(eq=False)
class CombinedGenotype:
    """A normal genotype paired with a tumour genotype and their probability."""

    norm_geno: Genotype
    tum_geno: Optional[Genotype] = None
    prob: float = 0.0


@dataclass(eq=False)
class GenotypeStore:
    """All genotype combinations for a normal/tumour copy number pair."""

    normal_genos: Sequence[Genotype] = ()
    tumour_genos: Sequence[Genotype] = ()
    ref_genotype: Optional[CombinedGenotype] = None
    het_snp_norm_genotypes: list[CombinedGenotype] = field(default_factory=list)
    het_snp_genotypes: list[CombinedGenotype] = field(default_factory=list)
    hom_snp_genotypes: list[CombinedGenotype] = field(default_factory=list)
    somatic_genotypes: list[CombinedGenotype] = field(default_factory=list)
    ref_geno_norm_prob: float = 0.0
    ref_geno_tum_prob: float = 0.0
    tum_max: int = 0
    norm_max: int = 0
    total_max: int = 0

    @property
    def het_norm_count(self) -> int:
        return len(self.het_snp_norm_genotypes)

    @property
    def het_count(self) -> int:
        return len(self.het_snp_genotypes)

    @property
    def hom_count(self) -> int:
        return len(self.hom_snp_genotypes)

    @property
    def somatic_count(self) -> int:
        return len(self.somatic_genotypes)


def unique_genotypes(genotypes: Iterable[Genotype]) -> list[Genotype]:
    """Drop genotypes whose base counts repeat an earlier one, keeping order."""
    unique: list[Genotype] = []
    for geno in genotypes:
        if geno not in unique:
            unique.append(geno)
    return unique


def calculate_genotypes(copy_num: int, ref_base: str) -> tuple[Genotype, ...]:
    """All genotypes of ``copy_num`` bases holding at most one non-reference base.

    Results are cached per copy number and reference base; the same tuple is
    returned on later calls until :func:`clear_genotype_cache` is called.
    """
    _check_base(ref_base)
    key = (copy_num, ref_base)
    cached = _CACHE.get(key)
    if cached is not None:
        return cached

    genos: list[Genotype] = []
    for _ in range(copy_num):
        if not genos:
            for base in BASES:
                geno = Genotype()
                geno.add_base(base)
                genos.append(geno)
            continue
        grown: list[Genotype] = []
        for geno in genos:
            with_ref = geno.copy()
            with_ref.add_base(ref_base)
            grown.append(with_ref)
            var = geno.variant_base(ref_base)
            if var != ref_base:
                extended = geno.copy()
                extended.add_base(var)
                grown.append(extended)
        genos = grown

    unique = unique_genotypes(genos)
    for geno in unique:
        geno.var_base = geno.variant_base(ref_base)
        geno.var_base_prop = geno.variant_proportion(ref_base, copy_num)
        geno.var_base_idx = BASES.index(geno.var_base)

    result = tuple(unique)
    _CACHE[key] = result
    return result


def find_ref_genotype(
    tum_genos: Iterable[Genotype], tum_cn: int, ref_base: str
) -> Optional[Genotype]:
    """The first tumour genotype made entirely of the reference base, if any."""
    for tum in tum_genos:
        if tum.get_count(ref_base) == tum_cn:
            return tum
    return None


def related_genotypes(
    norm: Genotype, tum_genos: Iterable[Genotype], ref_base: str
) -> list[CombinedGenotype]:
    """Pair ``norm`` with each tumour genotype that can arise from it."""
    related: list[CombinedGenotype] = []
    for tum in tum_genos:
        if norm.var_base != ref_base:
            hom_snp = (
                norm.var_base == tum.var_base
                and norm.var_base_prop == 1.0
                and tum.var_base_prop == 1.0
            )
            het_snp = (
                tum.var_base in (norm.var_base, ref_base)
                and norm.var_base_prop != 1.0
            )
            if hom_snp or het_snp:
                related.append(CombinedGenotype(norm, tum))
        elif tum.var_base != ref_base:
            related.append(CombinedGenotype(norm, tum))
    return related


def generate_genotype_store(norm_cn: int, tum_cn: int, ref_base: str) -> GenotypeStore:
    """Build the reference, somatic, het SNP and hom SNP combinations."""
    normal_genos = calculate_genotypes(norm_cn, ref_base)
    tumour_genos = calculate_genotypes(tum_cn, ref_base)

    store = GenotypeStore(normal_genos=normal_genos, tumour_genos=tumour_genos)
    for norm in normal_genos:
        ref_count = norm.get_count(ref_base)
        related = related_genotypes(norm, tumour_genos, ref_base)
        if ref_count == norm_cn:
            store.ref_genotype = CombinedGenotype(
                norm, find_ref_genotype(tumour_genos, tum_cn, ref_base)
            )
            store.somatic_genotypes.extend(related)
        elif ref_count > 0:
            store.het_snp_norm_genotypes.append(CombinedGenotype(norm))
            store.het_snp_genotypes.extend(related)
        else:
            store.hom_snp_genotypes.extend(related)

    store.tum_max = max(store.somatic_count, store.het_count, store.hom_count)
    store.norm_max = max(store.het_norm_count, store.hom_count)
    store.total_max = max(store.tum_max, store.norm_max)
    return store


def clear_genotype_cache() -> None:
    """Forget all cached genotype lists."""
    _CACHE.clear()