"""Configuration and shared files/objects for the testing framework.

Copyright © 2024 The mlevels authors.
"""

from pathlib import Path
from typing import Callable, Iterable

import pytest

DATA_ROOT = Path(__file__).parent / "data"


@pytest.fixture(name="data_root", scope="session")
def data_root_fixture() -> Path:
    return DATA_ROOT


@pytest.fixture(name="counts_file")
def counts_file_fixture(data_root) -> Path:
    return data_root / "sample.counts"


@pytest.fixture(name="write_counts")
def write_counts_fixture(tmp_path) -> Callable[[Iterable[str]], Path]:
    def write(lines: Iterable[str], name: str = "input.counts") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines))
        return path

    return write

