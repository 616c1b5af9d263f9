# beam_config.py
"""
Analysis configuration and defaults.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class AnalysisConfig:
    """Global analysis configuration."""

    # Sampling: n equally spaced positions, both ends included
    n_points: int = 101

    # Unit scaling
    deflection_scale: float = 1000.0      # m -> mm
    two_span_ei_divisor: float = 1e9      # EI input unit for the two-span condition

    # Labels
    x_label: str = "Span (m)"
    deflection_quantity: str = "Deflection"
    deflection_unit: str = "mm"
    moment_quantity: str = "Bending Moment"
    moment_unit: str = "kNm"
    shear_quantity: str = "Shear Force"
    shear_unit: str = "kN"

    # Plot defaults
    line_color: Tuple[float, float, float] = (1.0, 15 / 255, 15 / 255)
    line_width: float = 2.0
    figsize: Tuple[float, float] = (9.0, 10.0)


# Global config instance
CONFIG = AnalysisConfig()
