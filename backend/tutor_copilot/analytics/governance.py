from __future__ import annotations
from typing import List, Literal

from ..store import Snapshots
from . import codes
from .base import ReportRow

GovernanceBadge = Literal["strong", "medium", "critical"]


class GovernanceRow(ReportRow):
	score: float
	badge: GovernanceBadge
	revolving_credit: float
	layoffs: float
	overtime: float
	certifications: float
	transparency: float
	infection_rate: float


def governance_badge(score: float) -> GovernanceBadge:
	if score >= 70:
		return "strong"
	if score >= 40:
		return "medium"
	return "critical"


def analyze_governance(snapshots: Snapshots) -> List[GovernanceRow]:
	# The composite score is computed by the simulator; components are shown as-is.
	rows: List[GovernanceRow] = []
	for number in sorted(snapshots):
		snap = snapshots[number]
		score = snap.get(codes.GOVERNANCE)
		rows.append(
			GovernanceRow(
				team=snap.team_name,
				team_number=snap.team_number,
				score=score,
				badge=governance_badge(score),
				**{field: snap.get(code) for field, code in codes.GOVERNANCE_COMPONENTS.items()},
			)
		)
	return sorted(rows, key=lambda r: r.score, reverse=True)
