"""Pytest configuration for the csvsniffer test suite."""
from pathlib import Path
from typing import Callable, Union

import pytest

EXAMPLE_SAMPLE = (
    "Report generated 2023-01-01\n"
    "\n"
    "id,name,active\n"
    "1,Alice,true\n"
    "2,Bob,false\n"
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "cli: marks tests that drive the csvsniff command line"
    )


@pytest.fixture
def example_sample() -> bytes:
    """Title line, blank line, header and two data rows."""
    return EXAMPLE_SAMPLE.encode('utf-8')


@pytest.fixture
def write_file(tmp_path) -> Callable[[str, Union[str, bytes]], Path]:
    """Write text or bytes to a file under tmp_path and return its path."""
    def _write(name: str, content: Union[str, bytes]) -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_bytes(content.encode('utf-8'))
        else:
            path.write_bytes(content)
        return path
    return _write
