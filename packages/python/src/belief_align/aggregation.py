"""
Evidence aggregation and ranking.

Collects weighted judgments about many subjects, fuses each subject's
evidence into one mass, and ranks the subjects by pignistic accept.

Pipeline:

  1. **Collect** — every judgment becomes ``weight(mass, factor)`` and is
     appended to its subject's evidence list.  The first profile seen
     for a key is kept.
  2. **Prune** — subjects with no evidence, or whose every entry is
     near-total ignorance (u > 0.99), are dropped.  Pruning is a pure
     filter producing a new collection.
  3. **Score** — ``pignistic(combine_murphy(evidence)).accept``.
  4. **Rank** — stable sort, descending by score; ties keep insertion
     order.

A subject whose evidence is in total conflict is reported as a
:class:`FusionFailure` and left out of the ranking.  It never aborts the
run and is never given a default score.

Re-ranking after more evidence arrives recomputes from the full
evidence lists; nothing is patched incrementally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from belief_align.belief_mass import DEFAULT_IGNORANCE_THRESHOLD, BeliefMass
from belief_align.combination import COMBINATION_RULES, DegenerateFusionError, combine
from belief_align.decision import (
    DEFAULT_OUTCOME_THRESHOLDS,
    Outcome,
    OutcomeThresholds,
    pignistic,
)
from belief_align.signals import (
    BLOCKED_BY_MASS,
    DEFAULT_SIGNAL_WEIGHTS,
    Observation,
    SignalKind,
    observe,
)

logger = logging.getLogger(__name__)

# ── Data Structures ────────────────────────────────────────────────


@dataclass(frozen=True)
class Subject:
    """An external identity and the evidence collected about it."""

    key: str
    profile: Optional[Any] = None
    evidence: tuple[BeliefMass, ...] = ()

    def is_informative(self, threshold: float = DEFAULT_IGNORANCE_THRESHOLD) -> bool:
        """True if at least one evidence entry carries real signal."""
        return any(not m.is_ignorant(threshold) for m in self.evidence)


@dataclass(frozen=True)
class RankedSubject:
    """A subject that survived pruning and fusion, with its score."""

    key: str
    score: float
    fused: BeliefMass
    profile: Optional[Any] = None


@dataclass(frozen=True)
class FusionFailure:
    """Record of a subject excluded because its evidence could not be fused."""

    key: str
    conflict: float
    evidence_count: int
    reason: str


@dataclass
class RankingReport:
    """Audit trail produced by :func:`rank_subjects`."""

    rule: str
    ranked: list[RankedSubject] = field(default_factory=list)
    pruned: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    failures: list[FusionFailure] = field(default_factory=list)

    def pairs(self) -> list[tuple[str, float]]:
        """``(key, score)`` pairs in ranking order."""
        return [(r.key, r.score) for r in self.ranked]

    def classify(
        self,
        thresholds: OutcomeThresholds = DEFAULT_OUTCOME_THRESHOLDS,
    ) -> list[tuple[str, Outcome]]:
        """Outcome of every ranked subject, in ranking order."""
        return [(r.key, thresholds.classify(r.fused)) for r in self.ranked]


# ═══════════════════════════════════════════════════════════════════
# PIPELINE
# ═══════════════════════════════════════════════════════════════════


def prune_subjects(
    subjects: Iterable[Subject],
    threshold: float = DEFAULT_IGNORANCE_THRESHOLD,
) -> list[Subject]:
    """Subjects with at least one informative evidence entry.

    Empty evidence lists and lists made only of near-vacuous masses are
    dropped.  The input is not modified.
    """
    return [s for s in subjects if s.is_informative(threshold)]


def rank_subjects(
    subjects: Sequence[Subject],
    rule: str = "murphy",
    exclude: Iterable[str] = (),
    threshold: float = DEFAULT_IGNORANCE_THRESHOLD,
) -> RankingReport:
    """Prune, fuse, score and rank *subjects*.

    Args:
        subjects:  Subjects in insertion order.
        rule:      Combination rule name (``"murphy"`` or
                   ``"conjunctive"``).
        exclude:   Keys left out of the ranking altogether, e.g. the
                   viewer's own handle.
        threshold: Ignorance level above which an entry is uninformative.

    Returns:
        RankingReport with ranked subjects, descending by score.

    Raises:
        ValueError: If *rule* is not a known combination rule.
    """
    if rule not in COMBINATION_RULES:
        raise ValueError(
            f"Unknown combination rule: {rule!r}. "
            f"Expected one of: {', '.join(COMBINATION_RULES)}"
        )

    report = RankingReport(rule=rule)
    skip = set(exclude)

    candidates: list[Subject] = []
    for subject in subjects:
        if subject.key in skip:
            report.excluded.append(subject.key)
        else:
            candidates.append(subject)

    kept = prune_subjects(candidates, threshold)
    kept_keys = {s.key for s in kept}
    for subject in candidates:
        if subject.key not in kept_keys:
            logger.debug("pruned %s (%d entries)", subject.key, len(subject.evidence))
            report.pruned.append(subject.key)

    scored: list[RankedSubject] = []
    for subject in kept:
        try:
            fused = combine(subject.evidence, rule)
        except DegenerateFusionError as exc:
            logger.warning("fusion failed for %s: %s", subject.key, exc)
            report.failures.append(
                FusionFailure(
                    key=subject.key,
                    conflict=exc.conflict,
                    evidence_count=len(subject.evidence),
                    reason=str(exc),
                )
            )
            continue
        score = pignistic(fused).accept
        logger.debug("scored %s: %.4f", subject.key, score)
        scored.append(
            RankedSubject(
                key=subject.key,
                score=score,
                fused=fused,
                profile=subject.profile,
            )
        )

    # sorted() is stable, so equal scores keep insertion order
    report.ranked = sorted(scored, key=lambda r: r.score, reverse=True)

    logger.info(
        "ranked %d subjects (%d pruned, %d excluded, %d failed) with %s rule",
        len(report.ranked),
        len(report.pruned),
        len(report.excluded),
        len(report.failures),
        rule,
    )
    return report


# ═══════════════════════════════════════════════════════════════════
# AGGREGATOR
# ═══════════════════════════════════════════════════════════════════


class EvidenceAggregator:
    """Per-subject evidence collector.

    Evidence lists only grow while collecting; :meth:`subjects` and
    :meth:`rank` read an immutable snapshot.
    """

    def __init__(
        self,
        signal_weights: Optional[dict[SignalKind, float]] = None,
    ):
        self._weights = {**DEFAULT_SIGNAL_WEIGHTS, **(signal_weights or {})}
        self._profiles: dict[str, Any] = {}
        self._evidence: dict[str, list[BeliefMass]] = {}

    def __len__(self) -> int:
        return len(self._evidence)

    def __contains__(self, key: object) -> bool:
        return key in self._evidence

    # ── Collection ───────────────────────────────────────────────

    def add_mass(
        self,
        key: str,
        mass: BeliefMass,
        profile: Optional[Any] = None,
    ) -> None:
        """Append an already-formed mass to *key*'s evidence, unweighted.

        Raises:
            TypeError:  If *mass* is not a BeliefMass.
            ValueError: If *mass* is off the simplex; normalize it with
                        :meth:`BeliefMass.scale` first.
        """
        if not isinstance(mass, BeliefMass):
            raise TypeError(f"mass must be a BeliefMass, got: {type(mass).__name__}")
        if not mass.is_normalized():
            raise ValueError(
                f"mass for {key!r} must be normalized, got: {mass!r}"
            )
        if key not in self._evidence:
            self._evidence[key] = []
            self._profiles[key] = profile
        self._evidence[key].append(mass)

    def add_judgment(
        self,
        key: str,
        accept: float,
        restrict: float,
        weight: float,
        profile: Optional[Any] = None,
    ) -> BeliefMass:
        """Weight a raw ``{accept, restrict}`` judgment and append it.

        Returns:
            The weighted mass that was appended.
        """
        mass = BeliefMass(accept=accept, restrict=restrict, unknown=0.0).weight(weight)
        self.add_mass(key, mass, profile)
        return mass

    def add_observation(self, observation: Observation) -> BeliefMass:
        mass = observation.to_mass()
        self.add_mass(observation.key, mass, observation.profile)
        return mass

    def add_signal(
        self,
        key: str,
        kind: SignalKind | str,
        profile: Optional[Any] = None,
    ) -> BeliefMass:
        """Append a catalogued signal using this aggregator's weights."""
        return self.add_observation(observe(key, kind, profile, self._weights))

    def add_blocked_by(self, key: str, profile: Optional[Any] = None) -> None:
        """Record that *key* blocks the viewer."""
        self.add_mass(key, BLOCKED_BY_MASS, profile)

    def collect(self, observations: Iterable[Observation]) -> int:
        """Consume an evidence source.  Returns the number of entries added."""
        count = 0
        for observation in observations:
            self.add_observation(observation)
            count += 1
        return count

    # ── Snapshot & ranking ───────────────────────────────────────

    def subjects(self) -> tuple[Subject, ...]:
        """Immutable snapshot of every subject, in first-seen order."""
        return tuple(
            Subject(key=key, profile=self._profiles[key], evidence=tuple(masses))
            for key, masses in self._evidence.items()
        )

    def rank(
        self,
        rule: str = "murphy",
        exclude: Iterable[str] = (),
        threshold: float = DEFAULT_IGNORANCE_THRESHOLD,
    ) -> RankingReport:
        """Rank the current evidence.  See :func:`rank_subjects`."""
        return rank_subjects(self.subjects(), rule=rule, exclude=exclude, threshold=threshold)
