"""
Example 01: Alignment Basics
============================

Demonstrates how weighted social-graph signals become belief masses,
how a subject's evidence is fused, and how subjects are ranked and
classified.

Use case: a viewer wants to know which accounts their network trusts,
and which ones it has collectively blocked.
"""

from belief_align import (
    BeliefMass,
    EvidenceAggregator,
    OutcomeThresholds,
    SignalKind,
    combine_conjunctive,
    combine_murphy,
    pignistic,
    ranking_to_jsonld,
)

# ── 1. Weighting a judgment ──────────────────────────────────────

print("=== 1. Weighting Judgments ===\n")

followed = BeliefMass.from_judgment(True).weight(0.75)
blocked = BeliefMass.from_judgment(False).weight(0.4)
print(f"Followed by viewer:      {followed}")
# BeliefMass(a=0.7500, r=0.0000, u=0.2500)
print(f"Blocked by a follow:     {blocked}")
# BeliefMass(a=0.0000, r=0.4000, u=0.6000)

# ── 2. Fusing conflicting evidence ───────────────────────────────

print("\n=== 2. Fusion ===\n")

murphy = combine_murphy([followed, blocked])
print(f"Murphy:      {murphy}")
print(f"Pignistic:   {pignistic(murphy)}")

conjunctive = combine_conjunctive([followed, blocked])
print(f"Conjunctive: {conjunctive}")

# ── 3. Ranking a small network ───────────────────────────────────

print("\n=== 3. Ranking ===\n")

agg = EvidenceAggregator()
agg.add_signal("me.example", SignalKind.FOLLOW)
agg.add_signal("friend.example", SignalKind.FOLLOW)
agg.add_signal("friend.example", SignalKind.FOLLOW_OF_FOLLOW)
agg.add_signal("stranger.example", SignalKind.FOLLOW_OF_FOLLOW)
agg.add_signal("stranger.example", SignalKind.FOLLOW_BLOCK)
agg.add_signal("troll.example", SignalKind.FOLLOW_BLOCK)
agg.add_signal("troll.example", SignalKind.VIEWER_MUTE)
agg.add_blocked_by("troll.example")
agg.add_signal("lurker.example", SignalKind.FOLLOWER)  # pruned: no signal

report = agg.rank(exclude=["me.example"])
for key, score in report.pairs():
    print(f"  {score:.3f}  @{key}")
print(f"\nPruned:   {report.pruned}")
print(f"Excluded: {report.excluded}")

# ── 4. Classifying outcomes ──────────────────────────────────────

print("\n=== 4. Outcomes ===\n")

thresholds = OutcomeThresholds(trust=0.2, suspicious=0.5, restrict=0.8)
for key, result in report.classify(thresholds):
    print(f"  @{key}: {result.name}")

# ── 5. Exporting the ranking ─────────────────────────────────────

print("\n=== 5. JSON-LD ===\n")

doc = ranking_to_jsonld(report)
for entry in doc["entries"]:
    print(f"  #{entry['rank']} {entry['subject']} ({entry['score']:.3f})")
