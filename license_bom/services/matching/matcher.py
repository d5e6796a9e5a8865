"""
Module `matcher`: scores license text against the template corpus.

Candidate text is reduced to a multiset of words and compared to every
template with the Dice coefficient:

    score = 2 * |C & T| / (|C| + |T|)

A single file often carries several licenses (e.g. MIT followed by the Apache
License for dual-licensed projects). Scoring such a blob as a whole against one
template gives a single, degraded match, so licenses are extracted
iteratively instead:

1. the template whose words are best covered by the candidate is selected
   (coverage |C & T| / |T|, ties broken by Dice). Picking by Dice alone lets
   a large template that overlaps both licenses swallow the shared words;
2. the words it matched are removed from the candidate;
3. the residual words are ranked again, until nothing is left or the best
   template is covered below MIN_EXTRA_MATCH_SCORE.

Each extracted license is then scored on the segment of text attributed to it:
the words it matched, plus (for the first, primary match) the words no
template claimed. For a single-license file this is exactly the Dice score of
the whole file.
"""

import logging
from collections import Counter
from typing import List, Optional, Tuple

from license_bom.models.schemas import LicenseMatch
from .corpus import LicenseCorpus, LicenseTemplate, get_corpus
from .normalizer import tokenize

# minimum share (0-1) of a template's words found in the residual text for a
# further license
MIN_EXTRA_MATCH_SCORE = 0.5

logger = logging.getLogger(__name__)


def _size(tokens: Counter) -> int:
    return sum(tokens.values())


def dice_score(candidate: Counter, template: Counter) -> float:
    """Dice coefficient between two word multisets, in [0, 1]."""
    total = _size(candidate) + _size(template)
    if not total:
        return 0.0
    return 2.0 * _size(candidate & template) / total


def coverage(candidate: Counter, template: Counter) -> float:
    """Share of the template's words present in the candidate, in [0, 1]."""
    size = _size(template)
    if not size:
        return 0.0
    return _size(candidate & template) / size


def _rank(residual: Counter, template: LicenseTemplate) -> Tuple[float, float]:
    return coverage(residual, template.tokens), dice_score(residual, template.tokens)


def _best_template(residual: Counter, templates: List[LicenseTemplate]) -> Optional[LicenseTemplate]:
    best = None
    best_rank = (-1.0, -1.0)
    for template in templates:
        rank = _rank(residual, template)
        if rank > best_rank:
            best, best_rank = template, rank
    return best


def _to_match(template: LicenseTemplate, claimed: Counter, segment_size: int) -> LicenseMatch:
    matched = _size(claimed)
    total = segment_size + template.size
    score = 100.0 * 2.0 * matched / total if total else 0.0
    return LicenseMatch(
        title=template.title,
        spdx_id=template.spdx_id,
        score=round(score, 2),
        extra=segment_size - matched,
        missing=template.size - matched,
    )


def match_licenses(text: str, corpus: Optional[LicenseCorpus] = None) -> List[LicenseMatch]:
    """
    Extracts the licenses contained in a normalized license text.

    Args:
        text (str): Normalized license text.
        corpus (LicenseCorpus, optional): Templates to match against, the
            shared corpus by default.

    Returns:
        List[LicenseMatch]: Matches in extraction order (best first); empty
        when the text holds no words.
    """
    if corpus is None:
        corpus = get_corpus()

    residual = tokenize(text)
    remaining = list(corpus)
    extracted = []  # (template, claimed words)

    while residual and remaining:
        template = _best_template(residual, remaining)
        if template is None:
            break
        if extracted and coverage(residual, template.tokens) < MIN_EXTRA_MATCH_SCORE:
            break
        claimed = residual & template.tokens
        extracted.append((template, claimed))
        residual = residual - claimed
        remaining.remove(template)

    leftover = _size(residual)
    matches = []
    for i, (template, claimed) in enumerate(extracted):
        segment_size = _size(claimed) + (leftover if i == 0 else 0)
        matches.append(_to_match(template, claimed, segment_size))

    if matches:
        logger.debug(
            "Matched %s",
            ", ".join(f"{m.spdx_id} ({m.score:.0f}%)" for m in matches),
        )
    return matches
