"""Genotype enumeration, ignored-region resolution and FASTA index access for tumour/normal variant calling."""

__version__ = "0.1.0"
__all__ = ["genotype", "ignore_regions", "fasta_index"]