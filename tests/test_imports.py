"""Tests for import-list normalization."""

from bundlesync.sync.imports import SEPARATOR, ImportList, normalize

HEADER = (
    'org.osgi.framework;version="[1.8,2)",'
    'org.slf4j;version="[1.7,2)",'
    'javax.xml.bind;version="[2.3,3)"'
)


def test_normalize_splits_on_quote_comma():
    result = normalize(HEADER)
    assert result.entries == (
        'org.osgi.framework;version="[1.8,2)',
        'org.slf4j;version="[1.7,2)',
        'javax.xml.bind;version="[2.3,3)"',
    )


def test_normalize_does_not_split_on_plain_comma():
    # Commas inside version ranges and between unquoted specs are not delimiters.
    assert normalize("org.foo,org.bar").entries == ("org.foo,org.bar",)


def test_normalize_trims_and_drops_empty_fragments():
    raw = '\n   a;version="1",\n\n   b;version="2",   ",\n  c  \n'
    result = normalize(raw)
    assert result.entries == ('a;version="1', 'b;version="2', "c")
    assert all(entry == entry.strip() and entry for entry in result)


def test_normalize_empty_and_none():
    assert normalize(None) == ImportList()
    assert normalize("") == ImportList()
    assert len(normalize("   ")) == 0


def test_malformed_specs_pass_through():
    assert normalize(";;;bogus=").entries == (";;;bogus=",)


def test_sorted_is_separate_from_source_order():
    result = normalize('zeta",alpha",Beta')
    assert result.entries == ("zeta", "alpha", "Beta")
    # Case-sensitive: uppercase sorts before lowercase.
    assert result.sorted == ("Beta", "alpha", "zeta")


def test_joined_uses_one_spec_per_line():
    result = normalize(HEADER)
    joined = result.joined()
    assert joined.count("\n") == 2
    assert joined.startswith('org.osgi.framework;version="[1.8,2)",\n')
    assert SEPARATOR in joined


def test_rejoin_is_fixed_point():
    for raw in (HEADER, 'b",a', "single", '  x",\n\n y ",z  '):
        once = normalize(raw)
        assert normalize(once.joined()) == once


def test_same_imports_ignores_order():
    assert ImportList(("b", "a")).same_imports(ImportList(("a", "b")))
    assert not ImportList(("a",)).same_imports(ImportList(("a", "c")))


def test_difference_reports_added_and_removed():
    manifest = ImportList(("a", "c", "d"))
    pom = ImportList(("b", "a"))
    added, removed = manifest.difference(pom)
    assert added == ["c", "d"]
    assert removed == ["b"]
