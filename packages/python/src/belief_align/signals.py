"""
Signal catalog for social-graph evidence.

Names the relationships an evidence source can report between the
viewer and a subject, and the default reliability weight each one
carries when it is turned into a belief mass.

    Signal               Judgment   Weight
    ───────────────────  ─────────  ──────
    follow               accept     0.75
    follow_of_follow     accept     0.10   (first page only)
    follow_block         restrict   0.40
    follower             accept     0.00
    viewer_block         restrict   1.00
    viewer_mute          restrict   0.50
    suggestion           accept     0.00

A zero weight still registers the subject, but only with vacuous
evidence, so it is pruned unless something else is known about it.

Subjects that block the viewer receive :data:`BLOCKED_BY_MASS`
unweighted, on top of whatever else was collected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from belief_align.belief_mass import BeliefMass


class SignalKind(Enum):
    """Relationships an evidence source can observe."""

    FOLLOW = "follow"
    FOLLOW_OF_FOLLOW = "follow_of_follow"
    FOLLOW_BLOCK = "follow_block"
    FOLLOWER = "follower"
    VIEWER_BLOCK = "viewer_block"
    VIEWER_MUTE = "viewer_mute"
    SUGGESTION = "suggestion"


# Direction of each signal: True = accept, False = restrict
SIGNAL_JUDGMENTS: dict[SignalKind, bool] = {
    SignalKind.FOLLOW: True,
    SignalKind.FOLLOW_OF_FOLLOW: True,
    SignalKind.FOLLOW_BLOCK: False,
    SignalKind.FOLLOWER: True,
    SignalKind.VIEWER_BLOCK: False,
    SignalKind.VIEWER_MUTE: False,
    SignalKind.SUGGESTION: True,
}

DEFAULT_SIGNAL_WEIGHTS: dict[SignalKind, float] = {
    SignalKind.FOLLOW: 0.75,
    SignalKind.FOLLOW_OF_FOLLOW: 0.1,
    SignalKind.FOLLOW_BLOCK: 0.4,
    SignalKind.FOLLOWER: 0.0,
    SignalKind.VIEWER_BLOCK: 1.0,
    SignalKind.VIEWER_MUTE: 0.5,
    SignalKind.SUGGESTION: 0.0,
}

BLOCKED_BY_MASS = BeliefMass(accept=0.0, restrict=0.3, unknown=0.7)


@dataclass(frozen=True)
class Observation:
    """One weighted judgment about a subject from an evidence source.

    ``key`` is the subject's stable external identity (e.g. its handle);
    ``profile`` is whatever opaque profile record the source holds.

    Raises:
        TypeError:  If ``accept``, ``restrict`` or ``weight`` is not a number.
        ValueError: If any of them is non-finite, or ``weight`` is negative.
    """

    key: str
    accept: float
    restrict: float
    weight: float
    profile: Optional[Any] = None

    def __post_init__(self) -> None:
        # Fail at construction, not mid-collect
        self.to_mass()

    def to_mass(self) -> BeliefMass:
        """The weighted mass this observation contributes."""
        return BeliefMass(
            accept=self.accept,
            restrict=self.restrict,
            unknown=0.0,
        ).weight(self.weight)


def observe(
    key: str,
    kind: SignalKind | str,
    profile: Optional[Any] = None,
    weights: Optional[dict[SignalKind, float]] = None,
) -> Observation:
    """Build the :class:`Observation` for a catalogued signal.

    Args:
        key:     Subject identity.
        kind:    A :class:`SignalKind` or its string value.
        profile: Opaque profile record, kept if this is the first
                 evidence for *key*.
        weights: Overrides merged over :data:`DEFAULT_SIGNAL_WEIGHTS`.

    Raises:
        ValueError: If *kind* names no known signal.
    """
    signal = SignalKind(kind)
    table = {**DEFAULT_SIGNAL_WEIGHTS, **(weights or {})}
    judgment = BeliefMass.from_judgment(SIGNAL_JUDGMENTS[signal])
    return Observation(
        key=key,
        accept=judgment.accept,
        restrict=judgment.restrict,
        weight=table[signal],
        profile=profile,
    )
