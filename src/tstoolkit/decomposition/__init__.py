"""Seasonal-trend decomposition."""

from tstoolkit.decomposition.decomposer import (
    Decomposer,
    DecompositionResult,
    DecompositionType,
)

__all__ = ["Decomposer", "DecompositionResult", "DecompositionType"]
