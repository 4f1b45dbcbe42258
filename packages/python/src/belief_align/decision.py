"""
Pignistic transform and outcome classification.

The pignistic transform (Smets 1990) turns a belief mass into a point
probability by splitting the ignorance mass evenly between the two
singletons:

    BetP(Accept)   = a + u/2
    BetP(Restrict) = r + u/2

The outcome classifier then places BetP(Restrict) against three
caller-supplied thresholds 0 < trust ≤ suspicious ≤ restrict < 1:

    BetP(R) ≤ trust        → Trusted
    BetP(R) < suspicious   → Accepted
    BetP(R) ≥ restrict     → Restricted
    otherwise              → Suspected

There is no separate accept threshold; Accept is the complement.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

from belief_align.belief_mass import BeliefMass


class ThresholdError(ValueError):
    """Raised for a malformed set of outcome thresholds."""


class ThresholdOrderError(ThresholdError):
    """Thresholds are not ordered trust ≤ suspicious ≤ restrict."""


class ThresholdRangeError(ThresholdError):
    """A threshold lies outside the open interval (0, 1)."""


@total_ordering
class Outcome(Enum):
    """Classification outcomes, in ascending order of restriction."""

    TRUSTED = 0
    ACCEPTED = 1
    SUSPECTED = 2
    RESTRICTED = 3

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Outcome):
            return NotImplemented
        return self.value < other.value


def pignistic(mass: BeliefMass) -> BeliefMass:
    """Reassign the ignorance mass evenly to Accept and Restrict.

    The result has ``unknown == 0`` and is usable for ranking.
    """
    half = mass.unknown / 2.0
    return BeliefMass(
        accept=mass.accept + half,
        restrict=mass.restrict + half,
        unknown=0.0,
    )


def _validate_thresholds(trust: float, suspicious: float, restrict: float) -> None:
    if trust > suspicious or suspicious > restrict:
        raise ThresholdOrderError(
            f"thresholds out of order: need trust <= suspicious <= restrict, "
            f"got {trust}, {suspicious}, {restrict}"
        )
    for name, value in (
        ("trust", trust),
        ("suspicious", suspicious),
        ("restrict", restrict),
    ):
        if value <= 0.0 or value >= 1.0:
            raise ThresholdRangeError(
                f"{name} threshold must be in (0, 1), got: {value}"
            )


def outcome(
    mass: BeliefMass,
    trust: float,
    suspicious: float,
    restrict: float,
) -> Outcome:
    """Classify *mass* by its pignistic restrict value.

    Boundaries are inclusive at *trust* (Trusted) and *restrict*
    (Restricted), and exclusive at *suspicious* for Accepted.

    Args:
        mass:       The fused mass to classify.
        trust:      Upper bound of the Trusted band.
        suspicious: Lower bound of the Suspected band.
        restrict:   Lower bound of the Restricted band.

    Raises:
        ThresholdOrderError: If the thresholds are out of order.
        ThresholdRangeError: If any threshold is outside (0, 1).
    """
    _validate_thresholds(trust, suspicious, restrict)

    p = pignistic(mass).restrict
    if p <= trust:
        return Outcome.TRUSTED
    if p < suspicious:
        return Outcome.ACCEPTED
    if p >= restrict:
        return Outcome.RESTRICTED
    return Outcome.SUSPECTED


@dataclass(frozen=True)
class OutcomeThresholds:
    """A validated set of outcome thresholds."""

    trust: float
    suspicious: float
    restrict: float

    def __post_init__(self) -> None:
        _validate_thresholds(self.trust, self.suspicious, self.restrict)

    def classify(self, mass: BeliefMass) -> Outcome:
        return outcome(mass, self.trust, self.suspicious, self.restrict)


DEFAULT_OUTCOME_THRESHOLDS = OutcomeThresholds(trust=0.2, suspicious=0.5, restrict=0.8)
