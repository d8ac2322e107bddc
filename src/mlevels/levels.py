"""Collect methylation level statistics from a counts file.

Sites are read in a single pass, in the sorted order of the counts file, and
tallied for each of six context classes: all cytosines, CpG, symmetric CpG,
CHH, CCG and CXG. Symmetric CpG sites are built by merging a positive strand
CpG with the negative strand CpG that immediately follows it.

Copyright © 2024 The mlevels authors.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from mlevels.config import LevelsConfig
from mlevels.exception import CountsFileError, SiteContextError
from mlevels.report.models import LevelsReport, MethylationLevelsReport
from mlevels.site import MethSite, parse_site
from mlevels.statistics import wilson_interval
from mlevels.types import PathType

logger = logging.getLogger(__name__)


class LevelsCounter:
    """Accumulate the raw counts of the sites in one context class."""

    def __init__(self, config: Optional[LevelsConfig] = None):
        """Create an empty counter.

        :param config: the settings used to call sites, defaults are used if None
        """
        self.config = config or LevelsConfig()
        self.total_sites = 0
        self.sites_covered = 0
        self.total_c = 0
        self.total_t = 0
        self.max_depth = 0
        self.mutations = 0
        self.called_meth = 0
        self.called_unmeth = 0
        self.mean_agg = 0.0

    def update(self, site: MethSite) -> None:
        """Add a site to the counts.

        Mutated sites are only counted as mutations. Covered sites are called
        methylated or unmethylated when the Wilson interval of their
        methylation level lies entirely above or below the call threshold,
        and are left uncalled otherwise.

        :param site: the site to add
        """
        if site.is_mutated():
            self.mutations += 1
        elif site.n_reads > 0:
            n_meth = site.n_meth()
            self.sites_covered += 1
            self.max_depth = max(self.max_depth, site.n_reads)
            self.total_c += n_meth
            self.total_t += site.n_reads - n_meth
            self.mean_agg += site.meth

            lower, upper = wilson_interval(self.config.alpha, site.n_reads, site.meth)
            if lower > self.config.call_threshold:
                self.called_meth += 1
            elif upper < self.config.call_threshold:
                self.called_unmeth += 1

        self.total_sites += 1

    def finalize(self) -> LevelsReport:
        """Return the counts as an immutable report with derived statistics."""
        return LevelsReport(
            total_sites=self.total_sites,
            sites_covered=self.sites_covered,
            total_c=self.total_c,
            total_t=self.total_t,
            max_depth=self.max_depth,
            mutations=self.mutations,
            called_meth=self.called_meth,
            called_unmeth=self.called_unmeth,
            mean_agg=self.mean_agg,
        )


class CpgMatePairing:
    """Pair up consecutive CpG sites on opposite strands.

    Only the last unresolved CpG site is kept. A site that is not the mate of
    the pending one replaces it.
    """

    def __init__(self):  # noqa: D107
        self.pending: Optional[MethSite] = None

    def push(self, site: MethSite) -> Optional[MethSite]:
        """Offer the next CpG site of the input.

        :param site: a CpG site
        :returns: the merged site if `site` completes a pair, otherwise None
        """
        if self.pending is not None and self.pending.is_mate_of(site):
            merged = self.pending.merge(site)
            self.pending = None
            return merged

        self.pending = site
        return None

    def reset(self) -> None:
        """Drop the pending site, if any."""
        self.pending = None


class MethylationLevelsCollector:
    """Route sites to the counters of their context classes."""

    def __init__(self, config: Optional[LevelsConfig] = None, verbose: bool = False):
        """Create a collector with empty counters.

        :param config: the settings used to call sites, defaults are used if None
        :param verbose: log a progress message each time a new chromosome starts
        """
        self.config = config or LevelsConfig()
        self.verbose = verbose

        self.cytosine = LevelsCounter(self.config)
        self.cpg = LevelsCounter(self.config)
        self.cpg_symmetric = LevelsCounter(self.config)
        self.chh = LevelsCounter(self.config)
        self.ccg = LevelsCounter(self.config)
        self.cxg = LevelsCounter(self.config)

        self._pairing = CpgMatePairing()
        self._current_chrom: Optional[str] = None
        self._site_count = 0

    @property
    def site_count(self) -> int:
        """Return the number of sites processed."""
        return self._site_count

    def _context_counter(self, site: MethSite) -> LevelsCounter:
        if site.is_chh():
            return self.chh
        if site.is_ccg():
            return self.ccg
        if site.is_cxg():
            return self.cxg
        raise SiteContextError(site.to_line(), site.context)

    def update(self, site: MethSite) -> None:
        """Add a site to the counters of the classes it belongs to.

        :param site: the next site in the input
        :raises SiteContextError: if the site is not of a known context
        """
        if site.chrom != self._current_chrom:
            if self.verbose:
                logger.info("PROCESSING:\t%s", site.chrom)
            self._current_chrom = site.chrom

        # must see the site before any merge
        self.cytosine.update(site)

        if site.is_cpg():
            self.cpg.update(site)
            merged = self._pairing.push(site)
            if merged is not None:
                self.cpg_symmetric.update(merged)
        else:
            self._context_counter(site).update(site)

        self._site_count += 1

    def finalize(self) -> MethylationLevelsReport:
        """Return the report of all counters.

        A CpG site still waiting for its mate is dropped.
        """
        self._pairing.reset()
        return MethylationLevelsReport(
            cytosine=self.cytosine.finalize(),
            cpg=self.cpg.finalize(),
            cpg_symmetric=self.cpg_symmetric.finalize(),
            chh=self.chh.finalize(),
            ccg=self.ccg.finalize(),
            cxg=self.cxg.finalize(),
        )


def compute_levels(
    lines: Iterable[str],
    config: Optional[LevelsConfig] = None,
    verbose: bool = False,
) -> MethylationLevelsReport:
    """Compute the methylation levels report from the lines of a counts file.

    :param lines: the lines of a sorted counts file
    :param config: the settings used to call sites, defaults are used if None
    :param verbose: log a progress message each time a new chromosome starts
    :raises SiteParseError: if a line is not a valid counts record
    :raises SiteContextError: if a site is not of a known context
    :returns MethylationLevelsReport: the finalized report
    """
    collector = MethylationLevelsCollector(config, verbose=verbose)
    for line in lines:
        line = line.rstrip("\n")
        site = parse_site(line)
        try:
            collector.update(site)
        except SiteContextError as exc:
            raise SiteContextError(line, exc.context) from exc

    logger.debug("Processed %i sites", collector.site_count)
    return collector.finalize()


def run_mlevels(
    verbose: bool,
    input: PathType,
    output: PathType,
    config: Optional[LevelsConfig] = None,
    output_format: str = "yaml",
) -> MethylationLevelsReport:
    """Compute the methylation levels of a counts file and write the report.

    The report is only written once the whole input has been processed, so
    no partial report is left behind on error.

    :param verbose: log a progress message each time a new chromosome starts
    :param input: path to the sorted counts file
    :param output: path to the report file to write
    :param config: the settings used to call sites, defaults are used if None
    :param output_format: either "yaml" or "json"
    :raises OSError: if the input cannot be read or the output cannot be written
    :raises SiteParseError: if a line is not a valid counts record
    :raises SiteContextError: if a site is not of a known context
    :raises CountsFileError: if the input is not valid text
    :raises ValueError: if the output format is unknown
    :returns MethylationLevelsReport: the report that was written
    """
    if output_format not in ("yaml", "json"):
        raise ValueError(f"Unknown output format: {output_format}")

    with open(Path(input), "r", encoding="utf-8") as fh:
        try:
            report = compute_levels(fh, config=config, verbose=verbose)
        except UnicodeDecodeError as exc:
            raise CountsFileError(f"cannot decode {input}: {exc}") from exc

    logger.debug("Writing report to %s", str(output))
    if output_format == "json":
        report.write_json_file(output, indent=4)
    else:
        report.write_yaml_file(output)

    return report
