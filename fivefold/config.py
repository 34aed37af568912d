"""
Tunable thresholds for profiling and invite-code matching.

The three numbers below were chosen empirically by the product team. They are kept
as configuration so they can be tuned without touching the algorithms; the defaults
must stay as they are for compatibility with stored classifications.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

# ---------- Defaults ----------

BALANCED_BELOW = 0.35  # dominance < 0.35 -> balanced
SPECIALIZED_ABOVE = 0.5  # dominance > 0.5 -> specialized
INVITE_SIMILARITY = 0.90  # fuzzy invite-code match must score strictly above this

ENV_BALANCED_BELOW = "FIVEFOLD_BALANCED_BELOW"
ENV_SPECIALIZED_ABOVE = "FIVEFOLD_SPECIALIZED_ABOVE"
ENV_INVITE_SIMILARITY = "FIVEFOLD_INVITE_SIMILARITY"


@dataclass(frozen=True)
class Thresholds:
    balanced_below: float = BALANCED_BELOW
    specialized_above: float = SPECIALIZED_ABOVE
    invite_similarity: float = INVITE_SIMILARITY

    def __post_init__(self) -> None:
        if not 0.0 <= self.balanced_below <= self.specialized_above <= 1.0:
            raise ValueError(
                "Profile thresholds must satisfy 0 <= balanced_below <= specialized_above <= 1 "
                f"(got {self.balanced_below}, {self.specialized_above})"
            )
        if self.invite_similarity < 0.0:
            raise ValueError(f"invite_similarity must be non-negative (got {self.invite_similarity})")


DEFAULT_THRESHOLDS = Thresholds()


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number (got {raw!r})") from None


def load_thresholds() -> Thresholds:
    """
    Build Thresholds from the environment, falling back to the defaults.
    Read on every call; nothing is cached.
    """
    return Thresholds(
        balanced_below=_env_float(ENV_BALANCED_BELOW, BALANCED_BELOW),
        specialized_above=_env_float(ENV_SPECIALIZED_ABOVE, SPECIALIZED_ABOVE),
        invite_similarity=_env_float(ENV_INVITE_SIMILARITY, INVITE_SIMILARITY),
    )
