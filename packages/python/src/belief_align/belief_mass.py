"""
Belief Mass — the basic probability assignment used by belief-align.

Grounds every piece of evidence about a subject in Dempster-Shafer
belief-function theory (Shafer 1976), restricted to the two-element
frame of discernment Θ = {Accept, Restrict}.

Core Concept — Belief mass:
    A mass m = (a, r, u) assigns weight to the focal elements of 2^Θ:
        a ∈ [0,1]  — mass on {Accept}
        r ∈ [0,1]  — mass on {Restrict}
        u ∈ [0,1]  — mass on {Accept, Restrict}  (ignorance)
    Target constraint: a + r + u = 1

    Unlike a Subjective Logic opinion, the constraint is a *target*
    rather than a construction-time invariant.  Weighting and
    combination may leave a mass transiently outside the simplex; the
    normalization operators below (clamp, fill_unknown, scale) exist to
    restore it before the mass is consumed downstream.

Normalization pipeline::

    raw  ──fill_unknown──▶  sum ≥ 1  ──clamp──▶  [0,1]³  ──scale──▶  simplex

Weighting:
    weight(f) multiplies the asserted mass (a, r) by a source-reliability
    factor f and pushes the remainder onto u:
        m′ = scale(a·f, r·f, 0)
    f < 1 discounts a source, f = 1 only renormalizes, f > 1 amplifies.

References:
    Shafer, G. (1976). A Mathematical Theory of Evidence.
    Princeton University Press.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

# Masses whose ignorance exceeds this carry no usable signal
DEFAULT_IGNORANCE_THRESHOLD = 0.99


def _validate_component(value: Any, name: str) -> float:
    """Validate a single mass component.

    Range is deliberately not checked here: out-of-range values are
    legal intermediates and are bounded by :meth:`BeliefMass.clamp`.
    """
    if isinstance(value, bool):
        raise TypeError(f"{name} must be a number, got: bool")
    if not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be a number, got: {type(value).__name__}")
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"{name} must be finite, got: {value}")
    return float(value)


def _validate_unit(value: Any, name: str) -> float:
    v = _validate_component(value, name)
    if v < 0.0 or v > 1.0:
        raise ValueError(f"{name} must be in [0, 1], got: {v}")
    return v


def _clip(value: float) -> float:
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


@dataclass(frozen=True, eq=True)
class BeliefMass:
    """A basic probability assignment over {Accept, Restrict}.

    Attributes:
        accept:   Mass committed to Accept.              a
        restrict: Mass committed to Restrict.            r
        unknown:  Mass left on Accept ∪ Restrict.        u

    Instances are immutable; every operation returns a new mass.
    """

    accept: float
    restrict: float
    unknown: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "accept", _validate_component(self.accept, "accept"))
        object.__setattr__(self, "restrict", _validate_component(self.restrict, "restrict"))
        object.__setattr__(self, "unknown", _validate_component(self.unknown, "unknown"))

    # ── Factory methods ────────────────────────────────────────────

    @classmethod
    def vacuous(cls) -> BeliefMass:
        """Total ignorance: all mass on Accept ∪ Restrict.

        This is the identity element of conjunctive combination.
        """
        return cls(accept=0.0, restrict=0.0, unknown=1.0)

    @classmethod
    def from_judgment(cls, accept: bool) -> BeliefMass:
        """A dogmatic mass for a boolean judgment.

        ``True`` yields (1, 0, 0), ``False`` yields (0, 1, 0).  Callers
        normally discount it straight away with :meth:`weight`.
        """
        if accept:
            return cls(accept=1.0, restrict=0.0, unknown=0.0)
        return cls(accept=0.0, restrict=1.0, unknown=0.0)

    # ── Inspection ─────────────────────────────────────────────────

    def total(self) -> float:
        """Sum of the three components."""
        return self.accept + self.restrict + self.unknown

    def is_normalized(self, tol: float = 1e-9) -> bool:
        """True when every component is in [0, 1] and they sum to 1."""
        in_range = all(
            -tol <= v <= 1.0 + tol
            for v in (self.accept, self.restrict, self.unknown)
        )
        return in_range and abs(self.total() - 1.0) <= tol

    def is_ignorant(self, threshold: float = DEFAULT_IGNORANCE_THRESHOLD) -> bool:
        """True when ``unknown`` exceeds *threshold* (no real signal)."""
        return self.unknown > threshold

    # ── Bounding ───────────────────────────────────────────────────

    def clamp_min_unknown(self, min_unknown: float) -> BeliefMass:
        """Clamp each component into [0, 1] with ``unknown >= min_unknown``.

        This is a bounding operation only: the result is *not*
        renormalized and may sum to more (or less) than 1.

        Args:
            min_unknown: Floor for the ``unknown`` component, in [0, 1].
        """
        floor = _validate_unit(min_unknown, "min_unknown")
        unknown = _clip(self.unknown)
        if unknown < floor:
            unknown = floor
        return BeliefMass(
            accept=_clip(self.accept),
            restrict=_clip(self.restrict),
            unknown=unknown,
        )

    def clamp(self) -> BeliefMass:
        """Clamp every component into [0, 1].  Does not renormalize."""
        return self.clamp_min_unknown(0.0)

    def fill_unknown(self) -> BeliefMass:
        """Assign any shortfall below a total of 1 to ``unknown``.

        Recovers a valid total when a caller supplied only
        ``accept``/``restrict`` and left ``unknown`` as a placeholder.
        Masses summing to 1 or more are returned unchanged.
        """
        if self.total() < 1.0:
            return BeliefMass(
                accept=self.accept,
                restrict=self.restrict,
                unknown=1.0 - self.accept - self.restrict,
            )
        return self

    # ── Normalization ──────────────────────────────────────────────

    def scale_min_unknown(self, min_unknown: float) -> BeliefMass:
        """Rescale onto the simplex with ``unknown >= min_unknown``.

        Steps:
            1. ``d = fill_unknown().clamp()``
            2. divide every component by the sum of ``d`` (if positive)
            3. raise ``unknown`` to ``min_unknown`` if below it
            4. split ``1 - unknown`` between ``accept`` and ``restrict``
               in their existing ratio

        When ``accept + restrict`` is 0 at step 4 both stay 0 and all
        the mass sits on ``unknown``.

        Args:
            min_unknown: Floor for the ``unknown`` component, in [0, 1].

        Returns:
            A mass whose components lie in [0, 1] and sum to 1.
        """
        floor = _validate_unit(min_unknown, "min_unknown")
        d = self.fill_unknown().clamp()
        accept, restrict, unknown = d.accept, d.restrict, d.unknown

        total = accept + restrict + unknown
        if total > 0.0:
            accept /= total
            restrict /= total
            unknown /= total

        if unknown < floor:
            unknown = floor

        remaining = 1.0 - unknown
        committed = accept + restrict
        if remaining > 0.0 and committed > 0.0:
            accept = remaining * (accept / committed)
            restrict = remaining * (restrict / committed)
        else:
            accept = 0.0
            restrict = 0.0

        return BeliefMass(accept=accept, restrict=restrict, unknown=unknown)

    def scale(self) -> BeliefMass:
        """Rescale onto the simplex, preserving the accept/restrict ratio."""
        return self.scale_min_unknown(0.0)

    # ── Weighting ──────────────────────────────────────────────────

    def weight(self, factor: float) -> BeliefMass:
        """Discount (or amplify) this mass by a source weight.

        Multiplies ``accept`` and ``restrict`` by *factor*, drops
        ``unknown`` to 0 and rescales, so the remainder becomes
        ignorance.  A factor of 1 has no effect beyond renormalization.

        Example::

            >>> BeliefMass(1.0, 0.0, 0.0).weight(0.75)
            BeliefMass(a=0.7500, r=0.0000, u=0.2500)
        """
        f = _validate_component(factor, "factor")
        if f < 0.0:
            raise ValueError(f"factor must be non-negative, got: {f}")
        return BeliefMass(
            accept=self.accept * f,
            restrict=self.restrict * f,
            unknown=0.0,
        ).scale()

    # ── Serialization ──────────────────────────────────────────────

    def to_jsonld(self) -> dict[str, Any]:
        """Serialize to a JSON-LD compatible dict."""
        return {
            "@type": "BeliefMass",
            "accept": self.accept,
            "restrict": self.restrict,
            "unknown": self.unknown,
        }

    @classmethod
    def from_jsonld(cls, data: dict[str, Any]) -> BeliefMass:
        """Deserialize from a JSON-LD compatible dict."""
        return cls(
            accept=data["accept"],
            restrict=data["restrict"],
            unknown=data["unknown"],
        )

    # ── Representation ─────────────────────────────────────────────

    def __repr__(self) -> str:
        return (
            f"BeliefMass(a={self.accept:.4f}, r={self.restrict:.4f}, "
            f"u={self.unknown:.4f})"
        )


# ═══════════════════════════════════════════════════════════════════
# FUNCTIONAL FORMS
# ═══════════════════════════════════════════════════════════════════


def clamp_min_unknown(mass: BeliefMass, min_unknown: float) -> BeliefMass:
    """Functional form of :meth:`BeliefMass.clamp_min_unknown`."""
    return mass.clamp_min_unknown(min_unknown)


def clamp(mass: BeliefMass) -> BeliefMass:
    return mass.clamp()


def fill_unknown(mass: BeliefMass) -> BeliefMass:
    return mass.fill_unknown()


def scale_min_unknown(mass: BeliefMass, min_unknown: float) -> BeliefMass:
    """Functional form of :meth:`BeliefMass.scale_min_unknown`."""
    return mass.scale_min_unknown(min_unknown)


def scale(mass: BeliefMass) -> BeliefMass:
    return mass.scale()


def weight(mass: BeliefMass, factor: float) -> BeliefMass:
    """Functional form of :meth:`BeliefMass.weight`."""
    return mass.weight(factor)
