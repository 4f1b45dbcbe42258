"""
belief-align: Dempster-Shafer evidence fusion for social-graph ranking

Turns many weighted, possibly conflicting judgments about a subject into
one belief mass over {Accept, Restrict}, and ranks subjects by the
pignistic probability of Accept.
"""

__version__ = "0.1.0"

from belief_align.belief_mass import (
    DEFAULT_IGNORANCE_THRESHOLD,
    BeliefMass,
    clamp,
    clamp_min_unknown,
    fill_unknown,
    scale,
    scale_min_unknown,
    weight,
)
from belief_align.combination import (
    COMBINATION_RULES,
    DegenerateFusionError,
    EmptyEvidenceError,
    combine,
    combine_conjunctive,
    combine_murphy,
    pairwise_combine,
    pairwise_conflict,
)
from belief_align.decision import (
    DEFAULT_OUTCOME_THRESHOLDS,
    Outcome,
    OutcomeThresholds,
    ThresholdError,
    ThresholdOrderError,
    ThresholdRangeError,
    outcome,
    pignistic,
)
from belief_align.signals import (
    BLOCKED_BY_MASS,
    DEFAULT_SIGNAL_WEIGHTS,
    Observation,
    SignalKind,
    observe,
)
from belief_align.aggregation import (
    EvidenceAggregator,
    FusionFailure,
    RankedSubject,
    RankingReport,
    Subject,
    prune_subjects,
    rank_subjects,
)
from belief_align.jsonld_io import (
    BELIEF_ALIGN_CONTEXT,
    evidence_from_jsonld,
    ranking_to_jsonld,
)

__all__ = [
    # Belief mass
    "DEFAULT_IGNORANCE_THRESHOLD",
    "BeliefMass",
    "clamp",
    "clamp_min_unknown",
    "fill_unknown",
    "scale",
    "scale_min_unknown",
    "weight",
    # Combination
    "COMBINATION_RULES",
    "DegenerateFusionError",
    "EmptyEvidenceError",
    "combine",
    "combine_conjunctive",
    "combine_murphy",
    "pairwise_combine",
    "pairwise_conflict",
    # Decision
    "DEFAULT_OUTCOME_THRESHOLDS",
    "Outcome",
    "OutcomeThresholds",
    "ThresholdError",
    "ThresholdOrderError",
    "ThresholdRangeError",
    "outcome",
    "pignistic",
    # Signals
    "BLOCKED_BY_MASS",
    "DEFAULT_SIGNAL_WEIGHTS",
    "Observation",
    "SignalKind",
    "observe",
    # Aggregation
    "EvidenceAggregator",
    "FusionFailure",
    "RankedSubject",
    "RankingReport",
    "Subject",
    "prune_subjects",
    "rank_subjects",
    # JSON-LD
    "BELIEF_ALIGN_CONTEXT",
    "evidence_from_jsonld",
    "ranking_to_jsonld",
]
