#!/usr/bin/env python3
"""
Profile a pool of members, propose a team and optionally resolve an invite code.
Run from project root: python3 scripts/suggest_team.py --pool data/sample_pool.json --size 4
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure project root on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from fivefold.models import Candidate, InviteCodeEntry, RoleScoreVector, TeamCompositionParams
from fivefold.roles import normalize_role
from fivefold.services import assemble, classify, resolve


def _load(path: Path) -> tuple[list[Candidate], list[InviteCodeEntry]]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    pool = [
        Candidate(candidate_id=m["id"], scores=RoleScoreVector.from_mapping(m.get("scores")), name=m.get("name"))
        for m in payload.get("members", [])
    ]
    codes = [InviteCodeEntry(entity_id=c["entity_id"], code=c["code"]) for c in payload.get("codes", [])]
    return pool, codes


def _fmt_scores(v: RoleScoreVector) -> str:
    return " ".join(f"{k[:3]}={val:g}" for k, val in v.as_dict().items())


def run(pool_path: Path, size: int, balance: float, priority: str | None, code: str | None) -> int:
    pool, codes = _load(pool_path)

    print("Profiles")
    for c in pool:
        p = classify(c.scores)
        primary = p.primary_role.value if p.primary_role else "-"
        secondary = p.secondary_role.value if p.secondary_role else "-"
        print(
            f"  {c.candidate_id:>4} {c.name or '':<10} {primary:<10} {secondary:<10} "
            f"{p.dominance_ratio:5.2f} {p.profile_type.value}"
        )

    # Members without a completed questionnaire are not eligible.
    eligible = [c for c in pool if c.scores.total > 0]
    params = TeamCompositionParams(
        desired_size=size,
        balance_factor=balance,
        priority_role=normalize_role(priority) if priority else None,
    )
    team = assemble(eligible, params)
    print(f"\nSuggested team ({len(team.members)}/{size})")
    for m in team.members:
        print(f"  {m.candidate_id:>4} {m.name or ''}")
    agg = classify(team.aggregate)
    print(f"  aggregate: {_fmt_scores(team.aggregate)} -> {agg.profile_type.value}")

    if code is not None:
        result = resolve(code, codes)
        if result is None:
            print(f"\nInvite code {code}: no match")
            return 1
        print(f"\nInvite code {code}: {result.entry.code} -> {result.entry.entity_id} ({result.tier.value})")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Profile members and suggest a ministry team.")
    parser.add_argument("--pool", type=Path, default=PROJECT_ROOT / "data" / "sample_pool.json", help="JSON with members and codes")
    parser.add_argument("--size", type=int, default=5, help="Desired team size")
    parser.add_argument("--balance", type=float, default=50, help="0 = diverse, 100 = specialized")
    parser.add_argument("--priority", default=None, help="Priority role (apostle, prophet, evangelist, shepherd, teacher)")
    parser.add_argument("--code", default=None, help="Invite code to resolve against the snapshot")
    parser.add_argument("--verbose", action="store_true", help="Log engine decisions")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(name)s: %(message)s")
    return run(args.pool, args.size, args.balance, args.priority, args.code)


if __name__ == "__main__":
    raise SystemExit(main())
