"""Chart helpers for :mod:`treasury_yield_lab`."""

from .visualizer import Visualizer

__all__ = ["Visualizer"]
