"""
JSON-LD interchange for belief-align.

Evidence sources and ranking consumers live outside this package; this
module is the boundary where they meet it.  Documents are processed
with PyLD against an inline context, so no remote context is ever
fetched.

Evidence document::

    {
      "@context": BELIEF_ALIGN_CONTEXT,
      "@graph": [
        {"@type": "Judgment", "subject": "alice.example",
         "signal": "follow"},
        {"@type": "Judgment", "subject": "bob.example",
         "accept": 0.0, "restrict": 1.0, "weight": 0.4}
      ]
    }

A judgment names its subject and either a catalogued ``signal`` or an
explicit ``accept``/``restrict``/``weight`` triple.

Ranking document (output of :func:`ranking_to_jsonld`)::

    {
      "@context": BELIEF_ALIGN_CONTEXT,
      "@type": "Ranking",
      "rule": "murphy",
      "entries": [{"@type": "RankedSubject", "subject": "alice.example",
                   "rank": 1, "score": 0.6467}, ...],
      "failed": ["carol.example"]
    }
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

from pyld import jsonld

from belief_align.aggregation import RankingReport
from belief_align.signals import SignalKind, Observation, observe

logger = logging.getLogger(__name__)

VOCAB = "https://w3id.org/belief-align#"

BELIEF_ALIGN_CONTEXT: dict[str, Any] = {
    "@vocab": VOCAB,
    "ba": VOCAB,
    "subject": {"@id": "ba:subject"},
    "signal": {"@id": "ba:signal"},
    "accept": {"@id": "ba:accept"},
    "restrict": {"@id": "ba:restrict"},
    "weight": {"@id": "ba:weight"},
    "rule": {"@id": "ba:rule"},
    "rank": {"@id": "ba:rank"},
    "score": {"@id": "ba:score"},
    "entries": {"@id": "ba:entries", "@container": "@list"},
    "failed": {"@id": "ba:failed", "@container": "@set"},
}

_JUDGMENT = VOCAB + "Judgment"


def _value(node: dict[str, Any], term: str) -> Any:
    """First ``@value`` of an expanded property, or None."""
    values = node.get(VOCAB + term)
    if not values:
        return None
    return values[0].get("@value")


def _judgment_to_observation(
    node: dict[str, Any],
    weights: Optional[dict[SignalKind, float]],
) -> Observation:
    key = _value(node, "subject")
    if not isinstance(key, str) or not key:
        raise ValueError("Judgment has no subject")

    signal = _value(node, "signal")
    if signal is not None:
        return observe(key, signal, profile=node.get("@id"), weights=weights)

    accept = _value(node, "accept")
    restrict = _value(node, "restrict")
    weight = _value(node, "weight")
    if accept is None or restrict is None or weight is None:
        raise ValueError(
            f"Judgment for {key!r} needs a signal or accept/restrict/weight"
        )
    return Observation(
        key=key,
        accept=accept,
        restrict=restrict,
        weight=weight,
        profile=node.get("@id"),
    )


def evidence_from_jsonld(
    doc: dict[str, Any] | list[Any],
    weights: Optional[dict[SignalKind, float]] = None,
) -> Iterator[Observation]:
    """Yield an :class:`Observation` for every ``Judgment`` in *doc*.

    The document is expanded first, so any context that maps onto the
    belief-align vocabulary is accepted.  Malformed judgments (missing
    fields, unknown signals, non-numeric or non-finite values, negative
    weights) are logged and skipped; the rest of the document is still
    read.  Every yielded observation is valid, so feeding the result to
    :meth:`EvidenceAggregator.collect` never stops part-way.

    Args:
        doc:     A JSON-LD document (object or array).
        weights: Signal weight overrides for ``signal`` judgments.
    """
    for node in jsonld.expand(doc):
        if _JUDGMENT not in node.get("@type", []):
            continue
        try:
            observation = _judgment_to_observation(node, weights)
        except (ValueError, TypeError) as exc:
            logger.warning(
                "skipping judgment %s (subject %r): %s",
                node.get("@id", "<blank>"),
                _value(node, "subject"),
                exc,
            )
            continue
        yield observation


def ranking_to_jsonld(
    report: RankingReport,
    context: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Serialize a ranking as a compacted JSON-LD document.

    Entries keep ranking order (``@list`` container); failed subjects
    are listed by key.

    The document is always built against :data:`BELIEF_ALIGN_CONTEXT`;
    *context* only chooses the terms of the compacted output.
    """
    ctx = context if context is not None else BELIEF_ALIGN_CONTEXT
    doc = {
        "@context": BELIEF_ALIGN_CONTEXT,
        "@type": "Ranking",
        "rule": report.rule,
        "entries": [
            {
                "@type": "RankedSubject",
                "subject": entry.key,
                "rank": position,
                "score": round(entry.score, 10),
            }
            for position, entry in enumerate(report.ranked, start=1)
        ],
        "failed": [failure.key for failure in report.failures],
    }
    return jsonld.compact(doc, ctx)
