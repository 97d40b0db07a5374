"""Shared fixtures for pointgroups tests."""
from __future__ import annotations

import pytest

from pointgroups.interfaces import GradientEvaluator


class RecordingGradient(GradientEvaluator):
    """Gradient that remembers every t it was asked for and returns (t, t, t)."""

    def __init__(self):
        self.calls = []

    def evaluate(self, t):
        self.calls.append(t)
        return (t, t, t)


@pytest.fixture
def recording_gradient():
    return RecordingGradient()


@pytest.fixture
def write_xyz(tmp_path):
    """Write lines to an .xyz file and return its path."""
    def _write(lines, name="cloud.xyz"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path
    return _write
