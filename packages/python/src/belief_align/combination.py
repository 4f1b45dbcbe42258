"""
Combination rules for belief masses.

Fuses several independent masses about the same subject into one.
Two rules are provided:

  1. **Conjunctive combination** (Dempster's rule, Shafer 1976) — the
     mathematically pure rule.  Multiplies support over intersecting
     focal elements and renormalizes away the mass that falls on the
     empty set.  Associative and commutative, but fragile: under many
     noisy sources the conflict mass can approach 1 and the rule
     degenerates.

  2. **Murphy average rule** (Murphy 2000) — the production rule.
     Averages the N masses component-wise, then combines the average
     conjunctively with itself N times.  Averaging first dampens any
     single outlier before the conjunctive sharpening step.

For two masses L and R on Θ = {Accept, Restrict}:

    K  = a_L·r_R + r_L·a_R                      (conflict)
    a  = (a_L·a_R + a_L·u_R + u_L·a_R) / (1 − K)
    r  = (r_L·r_R + r_L·u_R + u_L·r_R) / (1 − K)
    u  = (u_L·u_R) / (1 − K)

K = 1 (total disagreement) leaves nothing to renormalize; this is
reported as :class:`DegenerateFusionError` rather than a NaN.

References:
    Shafer, G. (1976). A Mathematical Theory of Evidence.
    Murphy, C. K. (2000). Combining belief functions when evidence
    conflicts.  Decision Support Systems 29(1), 1-9.
    DOI:10.1016/s0167-9236(99)00084-6
"""

from __future__ import annotations

from typing import Callable, Sequence

from belief_align.belief_mass import BeliefMass

# 1 − K at or below this is treated as total conflict
_CONFLICT_TOL = 1e-12

CombinationRule = Callable[[Sequence[BeliefMass]], BeliefMass]


class DegenerateFusionError(ArithmeticError):
    """Raised when two masses are in total conflict (K ≥ 1)."""

    def __init__(self, conflict: float) -> None:
        self.conflict = conflict
        super().__init__(
            f"combination is undefined under total conflict (K={conflict!r})"
        )


class EmptyEvidenceError(ValueError):
    """Raised when a rule that needs evidence is given none."""


def _require_mass(value: object, name: str) -> None:
    """Raise TypeError if *value* is not a BeliefMass."""
    if not isinstance(value, BeliefMass):
        raise TypeError(
            f"{name} must be a BeliefMass, got: {type(value).__name__}"
        )


# ═══════════════════════════════════════════════════════════════════
# PAIRWISE
# ═══════════════════════════════════════════════════════════════════


def pairwise_conflict(left: BeliefMass, right: BeliefMass) -> float:
    """Mass assigned to the empty set when combining *left* and *right*.

    K = a_L·r_R + r_L·a_R — the two sources directly disagree.
    """
    return left.accept * right.restrict + left.restrict * right.accept


def pairwise_combine(left: BeliefMass, right: BeliefMass) -> BeliefMass:
    """Dempster's rule of combination for two masses.

    Each focal element on the left is intersected with each on the
    right; the products landing on the empty set form the conflict K
    and are divided out of the rest.

    Properties:
        - Commutativity:  L ⊕ R = R ⊕ L
        - Identity:       L ⊕ vacuous = L

    Raises:
        TypeError:             If either argument is not a BeliefMass.
        DegenerateFusionError: If K ≥ 1 (total conflict).
    """
    _require_mass(left, "left")
    _require_mass(right, "right")

    conflict = pairwise_conflict(left, right)
    norm = 1.0 - conflict
    # K > 1 only arises from off-simplex inputs
    if norm <= _CONFLICT_TOL:
        raise DegenerateFusionError(conflict)

    return BeliefMass(
        accept=(
            left.accept * right.accept
            + left.accept * right.unknown
            + left.unknown * right.accept
        ) / norm,
        restrict=(
            left.restrict * right.restrict
            + left.restrict * right.unknown
            + left.unknown * right.restrict
        ) / norm,
        unknown=(left.unknown * right.unknown) / norm,
    )


# ═══════════════════════════════════════════════════════════════════
# MULTI-SOURCE
# ═══════════════════════════════════════════════════════════════════


def combine_conjunctive(masses: Sequence[BeliefMass]) -> BeliefMass:
    """Conjunctive combination of any number of masses.

    Left fold of :func:`pairwise_combine` starting from the vacuous
    mass, so an empty sequence yields total ignorance.

    Raises:
        DegenerateFusionError: If any intermediate step hits K ≥ 1.
    """
    result = BeliefMass.vacuous()
    for mass in masses:
        result = pairwise_combine(result, mass)
    return result


def combine_murphy(masses: Sequence[BeliefMass]) -> BeliefMass:
    """Murphy's average combination rule.

    The mean of each focal element across all N masses forms a new
    mass, which is then combined conjunctively with itself N times
    (a fold from the vacuous mass).  Order of *masses* never matters.

    A single mass is returned unchanged, since the vacuous mass is the
    identity of :func:`pairwise_combine`.

    Raises:
        EmptyEvidenceError:    If *masses* is empty.
        DegenerateFusionError: If the averaged mass is in total
                               conflict with itself.
    """
    items = list(masses)
    if not items:
        raise EmptyEvidenceError("combine_murphy requires at least one mass")
    for i, mass in enumerate(items):
        _require_mass(mass, f"masses[{i}]")

    n = len(items)
    average = BeliefMass(
        accept=sum(m.accept for m in items) / n,
        restrict=sum(m.restrict for m in items) / n,
        unknown=sum(m.unknown for m in items) / n,
    )

    result = BeliefMass.vacuous()
    for _ in range(n):
        result = pairwise_combine(result, average)
    return result


# ── Registry ───────────────────────────────────────────────────────

COMBINATION_RULES: dict[str, CombinationRule] = {
    "murphy": combine_murphy,
    "conjunctive": combine_conjunctive,
}


def combine(masses: Sequence[BeliefMass], rule: str = "murphy") -> BeliefMass:
    """Fuse *masses* with a named rule from :data:`COMBINATION_RULES`."""
    try:
        fn = COMBINATION_RULES[rule]
    except KeyError:
        raise ValueError(
            f"Unknown combination rule: {rule!r}. "
            f"Expected one of: {', '.join(COMBINATION_RULES)}"
        ) from None
    return fn(masses)
