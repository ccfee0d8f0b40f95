"""Rendering and reporting package for Schelling CA simulation."""

from .visualizer import Visualizer
from .reporter import Reporter

__all__ = ['Visualizer', 'Reporter']
