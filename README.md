# cavegeno

This package provides building blocks for a somatic variant caller that compares a tumour sample with its matched normal. It has three modules:

- **`cavegeno.genotype`** lists every genotype of a given copy number that holds the reference base and at most one other base. It also pairs normal and tumour genotypes into reference, somatic, heterozygous-SNP and homozygous-SNP groups, and keeps those groups in a `GenotypeStore`.
- **`cavegeno.ignore_regions`** reads the ignored regions of one chromosome from a region file. It also cuts a span into the sections that lie between those regions.
- **`cavegeno.fasta_index`** reads `.fai` index files and fetches reference sequence for a region. Regions are 1-based and inclusive.

## Installation

```
pip install .
```

The package has no runtime dependencies.

## Genotypes

```python
from cavegeno.genotype import calculate_genotypes, generate_genotype_store

genos = calculate_genotypes(2, "C")
print([str(g) for g in genos])          # base letters, e.g. "CT"

store = generate_genotype_store(2, 2, "C")
print(store.somatic_count, store.het_count, store.hom_count)
print(store.tum_max, store.norm_max, store.total_max)
```

### `Genotype`

A `Genotype` holds the counts of `A`, `C`, `G` and `T`. It has the following methods:

- `add_base` increments the count for a base.
- `get_count` returns the count for a base.
- `add_base` and `get_count` raise `ValueError` for any base other than `A`, `C`, `G` or `T`.
- `set_count` sets the count for a base. It silently ignores unknown bases.
- `total` returns the sum of the four counts.
- `copy` returns a new genotype with the same counts and no variant summary.
- `variant_base(ref_base)` returns the first non-reference base that is present, in A, C, G, T order.
- `variant_proportion(ref_base, copy_num)` returns that base's share of the copy number.

Two genotypes compare equal when their four base counts are equal.

### Genotype combinations

`calculate_genotypes` fills in `var_base`, `var_base_prop` and `var_base_idx` on each genotype it returns. It caches its results per copy number and reference base. Call `clear_genotype_cache()` to empty the cache.

`unique_genotypes` drops genotypes that repeat an earlier one.

`find_ref_genotype` returns the first tumour genotype that is made up entirely of the reference base.

`related_genotypes` pairs one normal genotype with every tumour genotype that is compatible with it. Each pair is a `CombinedGenotype`.

## Ignored regions

```python
from cavegeno.ignore_regions import (
    count_ignored_regions,
    read_ignored_regions,
    resolve_analysis_sections,
)

regions = read_ignored_regions("ignore.bed", "1")
for section in resolve_analysis_sections(1, 50000, regions):
    print(section.beg, section.end)
```

Each line of a region file has the form `chrom start end`. The start and end are read differently depending on the file name:

- If the file name ends in `.bed`, each start is zero-based and is shifted by one.
- Otherwise, starts and ends are read as 1-based and inclusive.

A line that names only a chromosome ignores that whole chromosome, from position 1 to 2³¹−1.

Other functions in the module:

- `count_ignored_regions` counts the lines that belong to a chromosome.
- `find_overlap` returns a copy of the first region that contains a position, or `None`.
- `regions_covered` returns copies of the regions that overlap a span.
- `resolve_analysis_sections` expects its regions in ascending order.

`SeqRegion` supports the `in` operator for a position, and has an `overlaps(start, end)` method.

## Reference access

```python
from cavegeno.fasta_index import (
    contig_count_and_name_length,
    contig_from_index,
    fetch_reference_sequence,
    read_fai,
)

entries = read_fai("genome.fa.fai")              # list of FaiEntry
name, length = contig_from_index("genome.fa.fai", 1)
count, name_length = contig_count_and_name_length("genome.fa.fai")
seq = fetch_reference_sequence("genome.fa", "1", 100, 200)
```

`fetch_reference_sequence` reads the index from `<fasta>.fai`. It clips the range to the length of the contig. It raises `KeyError` for a contig that is not in the index, and `ValueError` if the FASTA file is shorter than the index says.

`contig_from_index` counts lines from 1. It raises `ValueError` for an index below 1, and `IndexError` when the file has fewer lines than the index asks for.

## What the package does not do

The package does not read BAM or CRAM files. It does not compute the probabilities of read positions or genotypes, and it does not write VCF or BED output. It has no command-line program. It supplies the genotype, region and reference pieces on which such a caller can be built.

## Running the tests

```
pip install .[test]
pytest
```