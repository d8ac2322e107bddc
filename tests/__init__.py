"""Tests for mlevels.

Copyright © 2024 The mlevels authors.
"""
