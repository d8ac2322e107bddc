"""Console scripts for mlevels.

Copyright © 2024 The mlevels authors.
"""

from mlevels.cli.main import main_cli

__all__ = ["main_cli"]
