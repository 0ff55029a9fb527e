"""
Pytest configuration for local imports and shared reference data.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

import uniform_badges.reference  # noqa: E402


#============================================
@pytest.fixture(scope="session")
def reference() -> uniform_badges.reference.ReferenceData:
	"""
	Load the bundled slot and badge tables once.
	"""
	return uniform_badges.reference.load_reference_data()
