import pytest

from cavegeno.genotype import (
    BASES,
    CombinedGenotype,
    Genotype,
    GenotypeStore,
    calculate_genotypes,
    clear_genotype_cache,
    find_ref_genotype,
    generate_genotype_store,
    related_genotypes,
    unique_genotypes,
)


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_genotype_cache()
    yield
    clear_genotype_cache()


def _by_str(genos):
    return {str(g): g for g in genos}


def test_add_and_get_count():
    geno = Genotype()
    geno.add_base("C")
    geno.add_base("C")
    geno.add_base("T")
    assert geno.get_count("C") == 2
    assert geno.get_count("T") == 1
    assert geno.get_count("A") == 0
    assert geno.total() == 3


def test_add_invalid_base_raises():
    geno = Genotype()
    with pytest.raises(ValueError):
        geno.add_base("N")


def test_get_count_invalid_base_raises():
    with pytest.raises(ValueError):
        Genotype().get_count("X")


def test_set_count_ignores_unknown_base():
    geno = Genotype()
    geno.set_count("C", 2)
    geno.set_count("N", 5)
    assert geno.total() == 2
    assert str(geno) == "CC"


def test_copy_keeps_counts_only():
    geno = Genotype(c_count=1, t_count=1, var_base="T", var_base_prop=0.5, var_base_idx=3)
    dup = geno.copy()
    assert dup == geno
    assert dup is not geno
    assert dup.var_base == ""
    dup.add_base("T")
    assert geno.get_count("T") == 1


def test_equality_uses_counts():
    assert Genotype(c_count=2, var_base="C") == Genotype(c_count=2, var_base="T")
    assert not (Genotype(c_count=2) == Genotype(t_count=2))


def test_variant_base_and_proportion():
    ref = Genotype(c_count=2)
    het = Genotype(c_count=1, t_count=1)
    hom = Genotype(t_count=2)
    assert ref.variant_base("C") == "C"
    assert het.variant_base("C") == "T"
    assert ref.variant_proportion("C", 2) == 0
    assert het.variant_proportion("C", 2) == 0.5
    assert hom.variant_proportion("C", 2) == 1


def test_variant_proportion_without_variant_raises():
    with pytest.raises(ValueError):
        Genotype(c_count=1).variant_proportion("C", 2)


def test_unique_genotypes_keeps_first_order():
    first = Genotype(a_count=1)
    second = Genotype(c_count=1)
    dup = Genotype(a_count=1)
    result = unique_genotypes([first, second, dup])
    assert result == [first, second]
    assert result[0] is first


def test_calculate_genotypes_copy_two_ref_c():
    genos = _by_str(calculate_genotypes(2, "C"))
    assert genos["CC"].var_base_idx == 1
    assert genos["CC"].var_base_prop == 0
    assert genos["CT"].var_base == "T"
    assert genos["CT"].var_base_idx == 3
    assert genos["CT"].var_base_prop == 0.5
    assert genos["TT"].var_base_idx == 3
    assert genos["TT"].var_base_prop == 1


@pytest.mark.parametrize("copy_num", [1, 2, 3, 5])
@pytest.mark.parametrize("ref_base", BASES)
def test_calculate_genotypes_invariants(copy_num, ref_base):
    genos = calculate_genotypes(copy_num, ref_base)
    strings = [str(g) for g in genos]
    assert len(set(strings)) == len(strings)
    assert ref_base * copy_num in strings
    for base in BASES:
        assert base * copy_num in strings
    for geno in genos:
        assert geno.total() == copy_num
        non_ref = [b for b in BASES if b != ref_base and geno.get_count(b) > 0]
        assert len(non_ref) <= 1
        assert geno.var_base == geno.variant_base(ref_base)
        assert BASES[geno.var_base_idx] == geno.var_base


def test_calculate_genotypes_invalid_ref_raises():
    with pytest.raises(ValueError):
        calculate_genotypes(2, "N")


def test_calculate_genotypes_cached_until_cleared():
    first = calculate_genotypes(2, "C")
    assert calculate_genotypes(2, "C") is first
    clear_genotype_cache()
    again = calculate_genotypes(2, "C")
    assert again is not first
    assert [str(g) for g in again] == [str(g) for g in first]


def test_find_ref_genotype():
    genos = calculate_genotypes(2, "C")
    found = find_ref_genotype(genos, 2, "C")
    assert str(found) == "CC"
    assert find_ref_genotype([Genotype(t_count=2)], 2, "C") is None


def test_related_genotypes_for_reference_normal_are_somatic():
    genos = calculate_genotypes(2, "C")
    norm = _by_str(genos)["CC"]
    related = related_genotypes(norm, genos, "C")
    assert len(related) == len(genos) - 1
    assert all(combo.norm_geno is norm for combo in related)
    assert all(combo.tum_geno.var_base != "C" for combo in related)


def test_related_genotypes_for_het_normal():
    genos = calculate_genotypes(2, "C")
    norm = _by_str(genos)["CT"]
    related = related_genotypes(norm, genos, "C")
    assert {str(c.tum_geno) for c in related} == {"CC", "CT", "TT"}


def test_related_genotypes_for_hom_normal():
    genos = calculate_genotypes(2, "C")
    norm = _by_str(genos)["TT"]
    related = related_genotypes(norm, genos, "C")
    assert [str(c.tum_geno) for c in related] == ["TT"]


def test_generate_genotype_store_structure():
    store = generate_genotype_store(2, 2, "C")
    assert isinstance(store, GenotypeStore)
    assert str(store.ref_genotype.norm_geno) == "CC"
    assert str(store.ref_genotype.tum_geno) == "CC"
    assert store.somatic_count == len(store.tumour_genos) - 1
    het_norms = [g for g in store.normal_genos if 0 < g.get_count("C") < 2]
    assert [c.norm_geno for c in store.het_snp_norm_genotypes] == het_norms
    assert all(c.tum_geno is None for c in store.het_snp_norm_genotypes)
    for combo in store.hom_snp_genotypes:
        assert combo.norm_geno.get_count("C") == 0
        assert combo.tum_geno == combo.norm_geno
    for combo in store.het_snp_genotypes:
        assert 0 < combo.norm_geno.get_count("C") < 2
    assert store.tum_max == max(store.somatic_count, store.het_count, store.hom_count)
    assert store.norm_max == max(store.het_norm_count, store.hom_count)
    assert store.total_max == max(store.tum_max, store.norm_max)
    assert store.ref_geno_norm_prob == 0
    assert store.ref_geno_tum_prob == 0


def test_generate_genotype_store_different_copy_numbers():
    store = generate_genotype_store(2, 4, "G")
    assert all(g.total() == 2 for g in store.normal_genos)
    assert all(g.total() == 4 for g in store.tumour_genos)
    assert str(store.ref_genotype.tum_geno) == "GGGG"
    all_combos = (
        store.somatic_genotypes + store.het_snp_genotypes + store.hom_snp_genotypes
    )
    assert all(isinstance(c, CombinedGenotype) and c.prob == 0 for c in all_combos)
    assert all(c.tum_geno in store.tumour_genos for c in all_combos)