"""Tests for Dempster's rule and the Murphy average rule.

For masses L, R on {Accept, Restrict}:
    K = a_L·r_R + r_L·a_R
    a = (a_L·a_R + a_L·u_R + u_L·a_R) / (1 − K)
    r = (r_L·r_R + r_L·u_R + u_L·r_R) / (1 − K)
    u = (u_L·u_R) / (1 − K)

Properties tested:
  - Identity:        L ⊕ vacuous = L
  - Commutativity:   L ⊕ R = R ⊕ L
  - Total conflict (K = 1) is an error, never NaN
  - Murphy([m]) = m
"""

import pytest

from belief_align.belief_mass import BeliefMass
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

FOLLOWED = BeliefMass(0.75, 0.0, 0.25)
BLOCKED_BY_FOLLOW = BeliefMass(0.0, 0.4, 0.6)


def _assert_close(m: BeliefMass, a: float, r: float, u: float) -> None:
    assert m.accept == pytest.approx(a, abs=1e-9)
    assert m.restrict == pytest.approx(r, abs=1e-9)
    assert m.unknown == pytest.approx(u, abs=1e-9)


# ═══════════════════════════════════════════════════════════════════
# Pairwise
# ═══════════════════════════════════════════════════════════════════


class TestPairwiseConflict:

    def test_disagreeing_sources(self):
        assert pairwise_conflict(FOLLOWED, BLOCKED_BY_FOLLOW) == pytest.approx(0.3)

    def test_agreeing_sources_have_no_conflict(self):
        assert pairwise_conflict(FOLLOWED, BeliefMass(0.5, 0.0, 0.5)) == 0.0

    def test_dogmatic_opposites(self):
        assert pairwise_conflict(
            BeliefMass(1.0, 0.0, 0.0), BeliefMass(0.0, 1.0, 0.0)
        ) == 1.0


class TestPairwiseCombine:

    def test_conflicting_pair(self):
        result = pairwise_combine(FOLLOWED, BLOCKED_BY_FOLLOW)
        _assert_close(result, 0.45 / 0.7, 0.1 / 0.7, 0.15 / 0.7)
        assert result.total() == pytest.approx(1.0)

    def test_agreeing_pair_reinforces(self):
        a = BeliefMass(0.6, 0.0, 0.4)
        b = BeliefMass(0.5, 0.0, 0.5)
        result = pairwise_combine(a, b)
        _assert_close(result, 0.8, 0.0, 0.2)
        assert result.accept > max(a.accept, b.accept)

    def test_vacuous_is_identity(self):
        m = BeliefMass(0.3, 0.5, 0.2)
        assert pairwise_combine(BeliefMass.vacuous(), m) == m
        assert pairwise_combine(m, BeliefMass.vacuous()) == m

    def test_commutative(self):
        l = BeliefMass(0.2, 0.5, 0.3)
        r = BeliefMass(0.6, 0.1, 0.3)
        lr = pairwise_combine(l, r)
        rl = pairwise_combine(r, l)
        _assert_close(lr, rl.accept, rl.restrict, rl.unknown)

    def test_total_conflict_raises(self):
        with pytest.raises(DegenerateFusionError) as info:
            pairwise_combine(BeliefMass(1.0, 0.0, 0.0), BeliefMass(0.0, 1.0, 0.0))
        assert info.value.conflict == 1.0

    def test_total_conflict_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            pairwise_combine(BeliefMass(0.0, 1.0, 0.0), BeliefMass(1.0, 0.0, 0.0))

    def test_conflict_above_one_raises(self):
        """Off-simplex inputs can push K past 1; never divide by 1 − K < 0."""
        over = BeliefMass(1.0, 1.0, 0.0)
        with pytest.raises(DegenerateFusionError) as info:
            pairwise_combine(over, over)
        assert info.value.conflict == 2.0

    def test_conjunctive_rejects_conflict_above_one(self):
        with pytest.raises(DegenerateFusionError):
            combine_conjunctive([BeliefMass(1.0, 1.0, 0.0), BeliefMass(1.0, 1.0, 0.0)])

    def test_non_mass_rejected(self):
        with pytest.raises(TypeError, match="left must be a BeliefMass"):
            pairwise_combine((0.5, 0.5, 0.0), FOLLOWED)


# ═══════════════════════════════════════════════════════════════════
# Conjunctive
# ═══════════════════════════════════════════════════════════════════


class TestCombineConjunctive:

    def test_empty_is_vacuous(self):
        assert combine_conjunctive([]) == BeliefMass.vacuous()

    def test_single_unchanged(self):
        assert combine_conjunctive([FOLLOWED]) == FOLLOWED

    def test_pair_matches_pairwise(self):
        result = combine_conjunctive([FOLLOWED, BLOCKED_BY_FOLLOW])
        expected = pairwise_combine(FOLLOWED, BLOCKED_BY_FOLLOW)
        _assert_close(result, expected.accept, expected.restrict, expected.unknown)

    def test_order_does_not_matter(self):
        masses = [FOLLOWED, BLOCKED_BY_FOLLOW, BeliefMass(0.1, 0.2, 0.7)]
        forward = combine_conjunctive(masses)
        backward = combine_conjunctive(list(reversed(masses)))
        _assert_close(forward, backward.accept, backward.restrict, backward.unknown)

    def test_dogmatic_opposites_degenerate(self):
        with pytest.raises(DegenerateFusionError):
            combine_conjunctive([BeliefMass(1.0, 0.0, 0.0), BeliefMass(0.0, 1.0, 0.0)])


# ═══════════════════════════════════════════════════════════════════
# Murphy
# ═══════════════════════════════════════════════════════════════════


class TestCombineMurphy:

    def test_empty_raises(self):
        with pytest.raises(EmptyEvidenceError):
            combine_murphy([])

    def test_empty_is_value_error(self):
        with pytest.raises(ValueError, match="at least one"):
            combine_murphy(())

    def test_single_is_identity(self):
        m = BeliefMass(0.3, 0.5, 0.2)
        assert combine_murphy([m]) == m

    def test_follow_and_block(self):
        """avg = (0.375, 0.2, 0.425), combined with itself twice."""
        result = combine_murphy([FOLLOWED, BLOCKED_BY_FOLLOW])
        _assert_close(result, 0.459375 / 0.85, 0.21 / 0.85, 0.180625 / 0.85)

    def test_dogmatic_opposites_do_not_degenerate(self):
        """Averaging first keeps Murphy away from K = 1."""
        result = combine_murphy([BeliefMass(1.0, 0.0, 0.0), BeliefMass(0.0, 1.0, 0.0)])
        _assert_close(result, 0.5, 0.5, 0.0)

    def test_order_does_not_matter(self):
        masses = [FOLLOWED, BLOCKED_BY_FOLLOW, BeliefMass(0.1, 0.2, 0.7)]
        forward = combine_murphy(masses)
        backward = combine_murphy(list(reversed(masses)))
        _assert_close(forward, backward.accept, backward.restrict, backward.unknown)

    def test_repeated_evidence_sharpens(self):
        once = combine_murphy([FOLLOWED])
        thrice = combine_murphy([FOLLOWED] * 3)
        assert thrice.accept > once.accept
        assert thrice.unknown < once.unknown

    def test_accepts_generator(self):
        result = combine_murphy(m for m in [FOLLOWED])
        assert result == FOLLOWED

    def test_non_mass_rejected(self):
        with pytest.raises(TypeError, match=r"masses\[1\]"):
            combine_murphy([FOLLOWED, 0.5])


class TestCombineRegistry:

    def test_registered_rules(self):
        assert set(COMBINATION_RULES) == {"murphy", "conjunctive"}

    def test_default_is_murphy(self):
        masses = [FOLLOWED, BLOCKED_BY_FOLLOW]
        assert combine(masses) == combine_murphy(masses)

    def test_conjunctive_by_name(self):
        masses = [FOLLOWED, BLOCKED_BY_FOLLOW]
        assert combine(masses, "conjunctive") == combine_conjunctive(masses)

    def test_unknown_rule(self):
        with pytest.raises(ValueError, match="Unknown combination rule"):
            combine([FOLLOWED], "yager")
