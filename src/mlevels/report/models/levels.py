"""Model for the methylation levels report.

Copyright © 2024 The mlevels authors.
"""

from __future__ import annotations

import pydantic

from mlevels.report.models.base import BaseReport


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


class LevelsReport(BaseReport):
    """Summary statistics of the sites in one context class.

    Instances are immutable. The derived statistics are computed from the
    raw counts and are only available once the counting is finished.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    total_sites: int = pydantic.Field(
        0,
        description="The number of sites seen, including mutated and uncovered sites.",
    )

    sites_covered: int = pydantic.Field(
        0,
        description="The number of non-mutated sites with at least one read.",
    )

    total_c: int = pydantic.Field(
        0,
        description="The number of reads supporting methylation over covered sites.",
    )

    total_t: int = pydantic.Field(
        0,
        description="The number of reads supporting no methylation over covered sites.",
    )

    max_depth: int = pydantic.Field(
        0,
        description="The largest read depth of any covered site.",
    )

    mutations: int = pydantic.Field(
        0,
        description="The number of sites flagged as mutated.",
    )

    called_meth: int = pydantic.Field(
        0,
        description="The number of covered sites called as methylated.",
    )

    called_unmeth: int = pydantic.Field(
        0,
        description="The number of covered sites called as unmethylated.",
    )

    mean_agg: float = pydantic.Field(
        0.0,
        description="The sum of the methylation levels of covered sites.",
    )

    @pydantic.computed_field(  # type: ignore
        return_type=int,
        description="The total number of reads over covered sites.",
    )
    @property
    def coverage(self) -> int:  # noqa: D102
        return self.total_c + self.total_t

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def sites_covered_fraction(self) -> float:
        """Return the fraction of sites that are covered."""
        return _ratio(self.sites_covered, self.total_sites)

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def mean_depth(self) -> float:
        """Return the mean read depth over all sites."""
        return _ratio(self.coverage, self.total_sites)

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def mean_depth_covered(self) -> float:
        """Return the mean read depth over covered sites."""
        return _ratio(self.coverage, self.sites_covered)

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def mean_meth(self) -> float:
        """Return the unweighted mean methylation level of covered sites."""
        return _ratio(self.mean_agg, self.sites_covered)

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def mean_meth_weighted(self) -> float:
        """Return the methylation level weighted by read depth."""
        return _ratio(self.total_c, self.coverage)

    @pydantic.computed_field(return_type=float)  # type: ignore
    @property
    def fractional_meth(self) -> float:
        """Return the fraction of called sites that are called methylated."""
        return _ratio(self.called_meth, self.called_meth + self.called_unmeth)


class MethylationLevelsReport(BaseReport):
    """Model for the statistics of all context classes of a counts file."""

    model_config = pydantic.ConfigDict(frozen=True)

    cytosine: LevelsReport = pydantic.Field(
        default_factory=LevelsReport,
        description="Statistics over all cytosines.",
    )

    cpg: LevelsReport = pydantic.Field(
        default_factory=LevelsReport,
        description="Statistics over CpG sites, counting each strand separately.",
    )

    cpg_symmetric: LevelsReport = pydantic.Field(
        default_factory=LevelsReport,
        description="Statistics over CpG sites with both strands merged.",
    )

    chh: LevelsReport = pydantic.Field(
        default_factory=LevelsReport,
        description="Statistics over CHH sites.",
    )

    ccg: LevelsReport = pydantic.Field(
        default_factory=LevelsReport,
        description="Statistics over CCG sites.",
    )

    cxg: LevelsReport = pydantic.Field(
        default_factory=LevelsReport,
        description="Statistics over CXG sites.",
    )
