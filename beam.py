import logging
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

import numpy as np

from beam_config import CONFIG

logger = logging.getLogger(__name__)


# ---------- Errors ----------
class BeamAnalysisError(ValueError):
    pass


class InvalidCondition(BeamAnalysisError):
    pass


class InvalidGeometry(BeamAnalysisError):
    pass


class MaterialError(BeamAnalysisError):
    pass


# ---------- Data classes ----------
@dataclass(frozen=True)
class Material:
    """Named bundle of section/material properties. `properties` must hold EI."""
    name: str
    properties: Mapping

    def __post_init__(self):
        if not isinstance(self.properties, Mapping):
            raise MaterialError(f"Material {self.name!r}: properties must be a mapping")
        if 'EI' not in self.properties:
            raise MaterialError(f"Material {self.name!r} is missing required property 'EI'")
        EI = self.properties['EI']
        if isinstance(EI, bool) or not isinstance(EI, numbers.Real):
            raise MaterialError(f"Material {self.name!r}: EI must be a number, got {EI!r}")
        if not EI > 0:
            raise MaterialError(f"Material {self.name!r}: EI must be positive, got {EI!r}")
        # read-only copy, the caller's dict stays theirs
        object.__setattr__(self, 'properties', MappingProxyType(dict(self.properties)))

    @property
    def EI(self):
        return float(self.properties['EI'])


@dataclass(frozen=True)
class Beam:
    primary_span: float
    secondary_span: float   # used by the two-span condition only
    j2: float               # multiplier on the secondary moment of inertia (deflection only)
    material: Material

    def __post_init__(self):
        if not isinstance(self.material, Material):
            raise MaterialError(f"Beam material must be a Material, got {type(self.material).__name__}")
        for field in ('primary_span', 'secondary_span', 'j2'):
            value = getattr(self, field)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidGeometry(f"{field} must be a number, got {value!r}")
        if not self.primary_span > 0:
            raise InvalidGeometry(f"primary_span must be positive, got {self.primary_span!r}")
        if not self.secondary_span >= 0:
            raise InvalidGeometry(f"secondary_span must be >= 0, got {self.secondary_span!r}")

    @property
    def total_span(self):
        return self.primary_span + self.secondary_span


@dataclass(frozen=True, eq=False)
class Curve:
    """Sampled response: positions `x`, values `y`, and the labels to render them."""
    x: np.ndarray
    y: np.ndarray
    quantity: str
    unit: str
    x_label: str = CONFIG.x_label

    def __post_init__(self):
        x = np.array(self.x, dtype=float)
        y = np.array(self.y, dtype=float)
        if x.shape != y.shape:
            raise ValueError(f"x and y must have the same shape, got {x.shape} and {y.shape}")
        x.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, 'x', x)
        object.__setattr__(self, 'y', y)

    @property
    def y_label(self):
        return f"{self.quantity} ({self.unit})"

    def pairs(self):
        return [(float(xi), float(yi)) for xi, yi in zip(self.x, self.y)]

    def peak(self):
        # first occurrence of the largest magnitude
        i = int(np.argmax(np.abs(self.y)))
        return float(self.x[i]), float(self.y[i])


@dataclass(frozen=True)
class AnalysisResult:
    beam: Beam
    load: float
    condition: 'Condition'
    equation: Curve


@dataclass(frozen=True)
class SupportReactions:
    m1: float   # moment correction term
    r1: float   # left end support
    r2: float   # middle support
    r3: float   # right end support

    @property
    def total(self):
        return self.r1 + self.r2 + self.r3


class Condition(str, Enum):
    SIMPLY_SUPPORTED = 'simply-supported'
    TWO_SPAN_UNEQUAL = 'two-span-unequal'

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            names = ", ".join(repr(c.value) for c in cls)
            raise InvalidCondition(f"Invalid condition {value!r}, expected one of {names}") from None


# ---------- Analyzers ----------
class Analyzer:
    """Closed-form response curves for one support condition."""
    condition = None

    def __init__(self, config=CONFIG):
        self.config = config

    def span(self, beam):
        raise NotImplementedError

    def positions(self, beam):
        # span*i/(n-1) rather than linspace's i*(span/(n-1)): support positions land exactly
        n = self.config.n_points
        return self.span(beam) * np.arange(n, dtype=float) / (n - 1)

    def deflection(self, beam, load):
        raise NotImplementedError

    def bending_moment(self, beam, load):
        raise NotImplementedError

    def shear_force(self, beam, load):
        raise NotImplementedError

    def _deflection_curve(self, x, v):
        return Curve(x, v, self.config.deflection_quantity, self.config.deflection_unit, self.config.x_label)

    def _moment_curve(self, x, M):
        return Curve(x, M, self.config.moment_quantity, self.config.moment_unit, self.config.x_label)

    def _shear_curve(self, x, V):
        return Curve(x, V, self.config.shear_quantity, self.config.shear_unit, self.config.x_label)


class SimplySupported(Analyzer):
    """Single span pinned at both ends, uniform load w over L = primary_span."""
    condition = Condition.SIMPLY_SUPPORTED

    def span(self, beam):
        return beam.primary_span

    def deflection(self, beam, load):
        L, w, EI = beam.primary_span, load, beam.material.EI
        x = self.positions(beam)
        # downward negative, EI taken as given
        v = -((w * x) / (24 * EI)) * (L**3 - 2 * L * x**2 + x**3) * beam.j2 * self.config.deflection_scale
        return self._deflection_curve(x, v)

    def bending_moment(self, beam, load):
        L, w = beam.primary_span, load
        x = self.positions(beam)
        M = -((w * x / 2) * (L - x))
        return self._moment_curve(x, M)

    def shear_force(self, beam, load):
        L, w = beam.primary_span, load
        x = self.positions(beam)
        V = w * (L / 2 - x)
        return self._shear_curve(x, V)


class TwoSpanUnequal(Analyzer):
    """
    Continuous beam over three supports with spans L1 = primary_span and
    L2 = secondary_span, uniform load w over L1 + L2.

    The redundant is resolved in closed form (see `reactions`); every curve
    is then evaluated piecewise at the middle support x = L1.
    """
    condition = Condition.TWO_SPAN_UNEQUAL

    def span(self, beam):
        return beam.total_span

    def _spans(self, beam):
        if not beam.secondary_span > 0:
            raise InvalidGeometry(
                f"{self.condition.value} requires secondary_span > 0, got {beam.secondary_span!r}")
        return beam.primary_span, beam.secondary_span

    def reactions(self, beam, load):
        L1, L2 = self._spans(beam)
        w = load
        M1 = w * (L2**3 - L1**3) / (8 * (L1 + L2))
        R1 = M1 / L1 + w * L1 / 2
        R3 = M1 / L2 + w * L2 / 2
        R2 = w * (L1 + L2) - R1 - R3   # global equilibrium
        logger.debug("two-span reactions: M1=%g R1=%g R2=%g R3=%g", M1, R1, R2, R3)
        return SupportReactions(M1, R1, R2, R3)

    def deflection(self, beam, load):
        r = self.reactions(beam, load)
        L1, L2 = beam.primary_span, beam.secondary_span
        w = load
        # EI is supplied in a different unit for this condition
        EI = beam.material.EI / self.config.two_span_ei_divisor
        scale = self.config.deflection_scale * beam.j2
        x = self.positions(beam)

        # second span, local coordinate from the middle support
        xs = x - L1
        second = (xs / (24 * EI)) * (4 * r.r3 * xs**2 - w * xs**3 + w * L2**3 - 4 * r.r3 * L2**2) * scale
        first = (x / (24 * EI)) * (4 * r.r1 * x**2 - w * x**3 + w * L1**3 - 4 * r.r1 * L1**2) * scale
        v = np.where(x >= L1, second, first)
        return self._deflection_curve(x, v)

    def bending_moment(self, beam, load):
        r = self.reactions(beam, load)
        L1, L = beam.primary_span, beam.total_span
        w = load
        x = self.positions(beam)

        # right-hand branch measured from the right support
        xr = L - x
        M = np.where(x <= L1, r.r1 * x - w * x**2 / 2, r.r3 * xr - w * xr**2 / 2)
        return self._moment_curve(x, M)

    def shear_force(self, beam, load):
        r = self.reactions(beam, load)
        L1, L = beam.primary_span, beam.total_span
        w = load
        x = self.positions(beam)

        # x == L1 takes the value just left of the middle support
        V = np.select(
            [x == 0, (x > 0) & (x < L1), x == L1, (x > L1) & (x < L)],
            [np.full_like(x, r.r1), r.r1 - w * x, np.full_like(x, r.r1 - w * L1), r.r1 + r.r2 - w * x],
            default=r.r1 + r.r2 - w * L,
        )
        return self._shear_curve(x, V)


# ---------- Facade ----------
class BeamAnalysis:
    """
    Entry point: picks the analyzer for a condition name and delegates.

    Each `get_*` call parses `condition` first, so an unknown or missing
    condition raises InvalidCondition before anything is computed.
    """

    def __init__(self, config=CONFIG):
        self.config = config
        self.analyzers = MappingProxyType({
            Condition.SIMPLY_SUPPORTED: SimplySupported(config),
            Condition.TWO_SPAN_UNEQUAL: TwoSpanUnequal(config),
        })

    @property
    def conditions(self):
        return tuple(c.value for c in self.analyzers)

    def analyzer(self, condition):
        condition = Condition.parse(condition)
        return self.analyzers[condition]

    def _run(self, method, beam, load, condition):
        analyzer = self.analyzer(condition)
        logger.debug("%s: %s with load=%g", analyzer.condition.value, method, load)
        equation = getattr(analyzer, method)(beam, load)
        return AnalysisResult(beam, load, analyzer.condition, equation)

    def get_deflection(self, beam, load, condition=None):
        return self._run('deflection', beam, load, condition)

    def get_bending_moment(self, beam, load, condition=None):
        return self._run('bending_moment', beam, load, condition)

    def get_shear_force(self, beam, load, condition=None):
        return self._run('shear_force', beam, load, condition)

    def analyze(self, beam, load, condition=None):
        condition = Condition.parse(condition)
        return {
            'deflection': self.get_deflection(beam, load, condition),
            'bending_moment': self.get_bending_moment(beam, load, condition),
            'shear_force': self.get_shear_force(beam, load, condition),
        }
