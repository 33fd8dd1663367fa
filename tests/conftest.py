"""Pytest configuration for the esfields test suite."""

import sys
from pathlib import Path

# Add the repository root to path so tests run without an install
sys.path.insert(0, str(Path(__file__).parent.parent))
