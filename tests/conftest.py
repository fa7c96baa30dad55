"""
-------
conftest.py
-------
Shared pytest fixtures for scene tests.
"""

import pytest
import numpy as np
import matplotlib
matplotlib.use("Agg")  # headless backend
import matplotlib.pyplot as plt

from svgscene.canvas import Canvas
from svgscene.viewport import StaticViewport


# -----------------------------------------------------------------------------
# Core Matplotlib fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(scope="function")
def fig_ax():
  """
  Create and yield an isolated Matplotlib Figure/Axes pair.

  The figure is automatically closed after the test to avoid memory leaks.
  """
  fig, ax = plt.subplots(figsize=(4, 3), dpi=100)
  yield fig, ax
  plt.close(fig)


# -----------------------------------------------------------------------------
# Scene fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def viewport() -> StaticViewport:
  """Square 100x100 headless viewport (identity scale under every fit mode)."""
  return StaticViewport(100, 100)


@pytest.fixture
def canvas(viewport) -> Canvas:
  return Canvas(viewport, fit="fit")


@pytest.fixture
def rng() -> np.random.Generator:
  return np.random.default_rng(1234)
