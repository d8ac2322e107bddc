"""Reporting for mlevels.

Copyright © 2024 The mlevels authors.
"""

from mlevels.report.models import LevelsReport, MethylationLevelsReport

__all__ = ["LevelsReport", "MethylationLevelsReport"]
