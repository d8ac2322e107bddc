"""Report models for mlevels.

Copyright © 2024 The mlevels authors.
"""

from mlevels.report.models.base import BaseReport
from mlevels.report.models.levels import LevelsReport, MethylationLevelsReport

__all__ = ["BaseReport", "LevelsReport", "MethylationLevelsReport"]
