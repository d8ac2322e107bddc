"""Tests for the methylation site records.

Copyright © 2024 The mlevels authors.
"""

import pytest

from mlevels.exception import SiteParseError
from mlevels.site import MethSite, parse_site
from tests.site_utils import make_site


def test_parse_site():
    site = parse_site("chr1\t100\t+\tCpG\t0.75\t8\n")
    assert site == MethSite(
        chrom="chr1", pos=100, strand="+", context="CpG", meth=0.75, n_reads=8
    )
    assert site.n_meth() == 6
    assert site.n_unmeth() == 2


def test_parse_site_accepts_spaces():
    site = parse_site("chrX 5 - CHHx 0 0")
    assert site.chrom == "chrX"
    assert site.is_mutated()
    assert site.is_chh()


@pytest.mark.parametrize(
    "line",
    [
        "",
        "chr1\t100\t+\tCpG\t0.75",
        "chr1\t100\t+\tCpG\t0.75\t8\textra",
        "chr1\tabc\t+\tCpG\t0.75\t8",
        "chr1\t100\t+\tCpG\thigh\t8",
        "chr1\t100\t+\tCpG\t0.75\t8.5",
        "chr1\t100\t*\tCpG\t0.75\t8",
        "chr1\t100\t+\tCpG\t1.5\t8",
        "chr1\t100\t+\tCpG\tnan\t8",
        "chr1\t100\t+\tCpG\t0.75\t-1",
        "chr1\t-3\t+\tCpG\t0.75\t8",
    ],
)
def test_parse_site_invalid(line):
    with pytest.raises(SiteParseError) as excinfo:
        parse_site(line)
    assert excinfo.value.line == line
    assert "failed parsing site" in str(excinfo.value)


def test_parse_site_keeps_unknown_context():
    # classification is left to the caller
    site = parse_site("chr1\t100\t+\tCAG\t0.5\t2")
    assert not any([site.is_cpg(), site.is_chh(), site.is_ccg(), site.is_cxg()])


@pytest.mark.parametrize(
    "context,expected",
    [
        ("CpG", "is_cpg"),
        ("CpGx", "is_cpg"),
        ("CHH", "is_chh"),
        ("CCG", "is_ccg"),
        ("CXG", "is_cxg"),
    ],
)
def test_site_context(context, expected):
    site = make_site(context=context)
    predicates = ["is_cpg", "is_chh", "is_ccg", "is_cxg"]
    assert [getattr(site, p)() for p in predicates] == [
        p == expected for p in predicates
    ]
    assert site.is_mutated() == context.endswith("x")


def test_n_meth_rounds_half_up():
    assert make_site(meth=0.25, n_reads=2).n_meth() == 1
    assert make_site(meth=0.125, n_reads=4).n_meth() == 1
    assert make_site(meth=0.3, n_reads=10).n_meth() == 3
    assert make_site(meth=0.0, n_reads=0).n_meth() == 0


def test_is_mate_of():
    forward = make_site(pos=100, strand="+")
    reverse = make_site(pos=101, strand="-")

    assert forward.is_mate_of(reverse)
    assert not reverse.is_mate_of(forward)
    assert not forward.is_mate_of(make_site(pos=102, strand="-"))
    assert not forward.is_mate_of(make_site(pos=101, strand="+"))
    assert not forward.is_mate_of(make_site(pos=101, strand="-", chrom="chr2"))


def test_merge():
    forward = make_site(pos=100, strand="+", meth=0.5, n_reads=10)
    reverse = make_site(pos=101, strand="-", meth=0.25, n_reads=4)

    merged = forward.merge(reverse)

    assert merged.n_reads == 14
    assert merged.n_meth() == 6
    assert merged.meth == pytest.approx(6 / 14)
    assert merged.pos == 100
    assert merged.strand == "+"
    assert not merged.is_mutated()
    # the inputs are left untouched
    assert forward.n_reads == 10
    assert reverse.n_reads == 4


def test_merge_propagates_mutation():
    forward = make_site(pos=100, strand="+")
    reverse = make_site(pos=101, strand="-", context="CpGx")

    merged = forward.merge(reverse)
    assert merged.is_mutated()
    assert merged.context == "CpGx"
    assert forward.merge(forward).context == "CpG"


def test_merge_without_reads():
    forward = make_site(pos=100, strand="+", meth=0.0, n_reads=0)
    reverse = make_site(pos=101, strand="-", meth=0.0, n_reads=0)

    merged = forward.merge(reverse)
    assert merged.n_reads == 0
    assert merged.meth == 0.0


def test_to_line():
    site = make_site(pos=7, strand="-", context="CHH", meth=0.25, n_reads=4)
    assert site.to_line() == "chr1\t7\t-\tCHH\t0.250000\t4"
    assert parse_site(site.to_line()) == site
