"""Methylation site records as found in counts files.

A counts file has one cytosine per line with six whitespace separated fields:

    chrom  pos  strand  context  meth  n_reads

where `context` is one of CpG, CHH, CCG or CXG, with a trailing `x` marking
a site where the reference cytosine is mutated in the sample.

Copyright © 2024 The mlevels authors.
"""

from __future__ import annotations

import dataclasses
import math

from mlevels.exception import SiteParseError

CPG = "CpG"
CHH = "CHH"
CCG = "CCG"
CXG = "CXG"
MUTATION_MARKER = "x"

_N_FIELDS = 6


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


@dataclasses.dataclass(frozen=True, slots=True)
class MethSite:
    """A single cytosine with its methylation level and read depth."""

    chrom: str
    pos: int
    strand: str
    context: str
    meth: float
    n_reads: int

    def n_meth(self) -> int:
        """Return the number of reads supporting methylation."""
        return _round_half_up(self.meth * self.n_reads)

    def n_unmeth(self) -> int:
        """Return the number of reads supporting no methylation."""
        return self.n_reads - self.n_meth()

    def is_positive(self) -> bool:
        """Return True if the site is on the positive strand."""
        return self.strand == "+"

    def is_mutated(self) -> bool:
        """Return True if the site is flagged as mutated."""
        return self.context.endswith(MUTATION_MARKER)

    def is_cpg(self) -> bool:  # noqa: D102
        return self.context.startswith(CPG)

    def is_chh(self) -> bool:  # noqa: D102
        return self.context.startswith(CHH)

    def is_ccg(self) -> bool:  # noqa: D102
        return self.context.startswith(CCG)

    def is_cxg(self) -> bool:  # noqa: D102
        return self.context.startswith(CXG)

    def is_mate_of(self, other: MethSite) -> bool:
        """Check if `other` is the reverse strand partner of this site.

        The two sites must sit on the same chromosome, with this site on the
        positive strand and `other` on the negative strand one base downstream.

        :param other: the site that follows this one in the input
        :returns bool: True if the sites form a symmetric pair
        """
        return (
            self.chrom == other.chrom
            and self.is_positive()
            and not other.is_positive()
            and self.pos + 1 == other.pos
        )

    def merge(self, other: MethSite) -> MethSite:
        """Combine the reads of two sites into a new site.

        The returned site keeps the coordinates and context of this site.
        It is marked as mutated if any of the two sites is mutated.

        :param other: the site to merge into this one
        :returns MethSite: a new site with summed read counts
        """
        context = self.context
        if not self.is_mutated() and other.is_mutated():
            context += MUTATION_MARKER

        total_meth = self.n_meth() + other.n_meth()
        n_reads = self.n_reads + other.n_reads
        return dataclasses.replace(
            self,
            context=context,
            n_reads=n_reads,
            meth=total_meth / max(1, n_reads),
        )

    def to_line(self) -> str:
        """Format the site as a line in the counts format."""
        return "\t".join(
            [
                self.chrom,
                str(self.pos),
                self.strand,
                self.context,
                f"{self.meth:.6f}",
                str(self.n_reads),
            ]
        )


def parse_site(line: str) -> MethSite:
    """Parse a line of a counts file into a MethSite.

    :param line: a single line from a counts file
    :returns MethSite: the parsed site
    :raises SiteParseError: if the line is not a valid counts record
    """
    fields = line.split()
    if len(fields) != _N_FIELDS:
        raise SiteParseError(
            line, f"expected {_N_FIELDS} fields, found {len(fields)}"
        )

    chrom, pos, strand, context, meth, n_reads = fields
    try:
        pos_value = int(pos)
        meth_value = float(meth)
        n_reads_value = int(n_reads)
    except ValueError as exc:
        raise SiteParseError(line, str(exc)) from exc

    if pos_value < 0:
        raise SiteParseError(line, "negative position")
    if strand not in ("+", "-"):
        raise SiteParseError(line, f"invalid strand {strand}")
    if not 0.0 <= meth_value <= 1.0:
        raise SiteParseError(line, "methylation level outside [0, 1]")
    if n_reads_value < 0:
        raise SiteParseError(line, "negative read count")

    return MethSite(
        chrom=chrom,
        pos=pos_value,
        strand=strand,
        context=context,
        meth=meth_value,
        n_reads=n_reads_value,
    )
