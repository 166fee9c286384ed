"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fixtures.generate_assignments import generate_assignment_rows


@pytest.fixture
def reference_date():
    """Fixed 'today' so NULL dates are deterministic."""
    return date(2023, 12, 31)


@pytest.fixture
def sample_rows():
    """The basic three-row sample: one overlapping pair, one loner."""
    return [
        ["143", "10", "2023-01-01", "2023-01-05"],
        ["218", "10", "2023-01-03", "2023-01-10"],
        ["999", "20", "2023-02-01", "2023-02-10"],
    ]


@pytest.fixture
def sample_csv(sample_rows):
    """sample_rows as CSV text, with a comment and a blank line."""
    lines = ["# EmpID, ProjectID, DateFrom, DateTo", ""]
    lines += [",".join(row) for row in sample_rows]
    return "\n".join(lines) + "\n"


@pytest.fixture
def generated_rows():
    """Larger seeded set of rows with mixed date formats."""
    return generate_assignment_rows(count=80, employees=10, seed=42)


@pytest.fixture
def request_log_db(tmp_path, monkeypatch):
    """Point the API request log at a temporary database."""
    db_path = tmp_path / "requests.db"
    monkeypatch.setattr("core.config.DB_PATH", db_path)
    return db_path
