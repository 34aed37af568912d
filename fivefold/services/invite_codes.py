"""
Invite-code resolution for join-by-code flows (teams and churches).

Users retype codes by hand and often transpose or mistype one or two characters.
Resolution tries, in order, first success wins:
1. exact match
2. case-insensitive match
3. fuzzy match: best similarity score, accepted only when strictly above the threshold

The similarity heuristic is not an edit distance. Its exact arithmetic is relied on by
existing users and must not change:
- +2 for every position where both strings have the same character (ignoring case)
- +0.5 for every input character found anywhere in the candidate code; each candidate
  character can be consumed once
- +1 when both strings have the same length
- divided by 2 * max(len(a), len(b))
Scores can exceed 1.0.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from fivefold.config import DEFAULT_THRESHOLDS
from fivefold.models import InviteCodeEntry, MatchResult, MatchTier

logger = logging.getLogger(__name__)

POSITION_POINTS = 2.0
PRESENCE_POINTS = 0.5
SAME_LENGTH_BONUS = 1.0


def similarity(input_code: str, candidate_code: str) -> float:
    """Similarity of input_code to candidate_code (see module docstring)."""
    longest = max(len(input_code), len(candidate_code))
    if longest == 0:
        return 0.0

    # Compare per position: lowercasing a whole string can change its length.
    positional = sum(POSITION_POINTS for x, y in zip(input_code, candidate_code) if x.lower() == y.lower())

    available = Counter(candidate_code.lower())
    presence = 0.0
    for ch in input_code.lower():
        if available[ch] > 0:
            available[ch] -= 1
            presence += PRESENCE_POINTS

    bonus = SAME_LENGTH_BONUS if len(input_code) == len(candidate_code) else 0.0
    return (positional + presence + bonus) / (longest * 2)


def _exact(input_code: str, index: Sequence[InviteCodeEntry]) -> InviteCodeEntry | None:
    for entry in index:
        if entry.code == input_code:
            return entry
    return None


def _case_insensitive(input_code: str, index: Sequence[InviteCodeEntry]) -> InviteCodeEntry | None:
    lowered = input_code.lower()
    for entry in index:
        if entry.code.lower() == lowered:
            return entry
    return None


def _fuzzy(
    input_code: str, index: Sequence[InviteCodeEntry], threshold: float
) -> tuple[InviteCodeEntry, float] | None:
    best: InviteCodeEntry | None = None
    best_score = 0.0
    for entry in index:
        score = similarity(input_code, entry.code)
        # Strictly greater: on equal scores the earlier entry is kept.
        if score > threshold and score > best_score:
            best, best_score = entry, score
    if best is None:
        return None
    return best, best_score


def resolve(
    input_code: str,
    index: Sequence[InviteCodeEntry],
    threshold: float | None = None,
    log: logging.Logger | None = None,
) -> MatchResult | None:
    """
    Resolve a user-typed code against a snapshot of valid codes.
    Returns None (not an error) when nothing matches. threshold defaults to the
    configured invite similarity (0.90).
    """
    log = log or logger
    if threshold is None:
        threshold = DEFAULT_THRESHOLDS.invite_similarity
    if not input_code or not input_code.strip() or not index:
        return None

    entry = _exact(input_code, index)
    if entry is not None:
        return MatchResult(entry=entry, tier=MatchTier.EXACT)

    entry = _case_insensitive(input_code, index)
    if entry is not None:
        log.debug("Invite code %r matched %r ignoring case", input_code, entry.code)
        return MatchResult(entry=entry, tier=MatchTier.CASE_INSENSITIVE)

    found = _fuzzy(input_code, index, threshold)
    if found is None:
        log.debug("Invite code %r: no code above %.2f similarity", input_code, threshold)
        return None
    entry, score = found
    log.debug("Invite code %r matched %r (%.0f%% similar)", input_code, entry.code, score * 100)
    return MatchResult(entry=entry, tier=MatchTier.FUZZY, similarity=score)
