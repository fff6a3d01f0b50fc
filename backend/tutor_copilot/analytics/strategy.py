"""Strategic alignment: does what a team says it prioritizes match where it ranks?

Each team declares a weight (1-5, or nothing) per strategic objective. For
every objective all teams are ranked by the achieved metric, and a team that
weights an objective at 2 or more but sits in the bottom half of that ranking
is flagged as misaligned on it. The alignment score is the share of weighted
objectives the team is aligned on.
"""
from __future__ import annotations
import math
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ..store import Snapshots, TeamStrategyWeights
from . import codes
from .base import ReportRow

# Objectives weighted below this are never counted as misaligned.
PRIORITY_WEIGHT = 2


class ObjectiveAlignment(BaseModel):
	model_config = ConfigDict(frozen=True)

	item_key: str
	item_name: str
	variable_code: str
	weight: int
	value: float
	ranking: int
	total_teams: int
	aligned: bool


class AlignmentRow(ReportRow):
	items: List[ObjectiveAlignment]
	alignment_score: float


class AlignmentSummary(BaseModel):
	model_config = ConfigDict(frozen=True)

	most_aligned: str | None
	least_aligned: str | None
	most_prioritized_objective: str | None
	below_half: List[str]


def rank_descending(values: Dict[int, float]) -> Dict[int, int]:
	"""Rank 1 = highest value; ties keep the order teams were given in."""
	ordered = sorted(values, key=lambda team: values[team], reverse=True)
	return {team: position for position, team in enumerate(ordered, start=1)}


def declared_weight(team_weights: Optional[TeamStrategyWeights], objective: codes.StrategyObjective) -> int:
	if team_weights is None:
		return 0
	for declared in team_weights.weights.values():
		if declared.variable_code == objective.code or declared.item_name == objective.name:
			return declared.weight
	return 0


def is_aligned(weight: int, ranking: int, total_teams: int) -> bool:
	if weight < PRIORITY_WEIGHT:
		return True
	return ranking <= math.ceil(total_teams / 2)


def alignment_score(items: List[ObjectiveAlignment]) -> float:
	weighted = [item for item in items if item.weight > 0]
	if not weighted:
		# No declared priorities: scored 0 rather than excluded.
		return 0.0
	return sum(1 for item in weighted if item.aligned) / len(weighted) * 100


def analyze_strategy(snapshots: Snapshots, weights: Dict[int, TeamStrategyWeights]) -> List[AlignmentRow]:
	team_numbers = sorted(snapshots)
	total_teams = len(team_numbers)
	rankings = {
		objective.code: rank_descending({n: snapshots[n].get(objective.code) for n in team_numbers})
		for objective in codes.STRATEGY_OBJECTIVES
	}

	rows: List[AlignmentRow] = []
	for number in team_numbers:
		snap = snapshots[number]
		items: List[ObjectiveAlignment] = []
		for objective in codes.STRATEGY_OBJECTIVES:
			weight = declared_weight(weights.get(number), objective)
			ranking = rankings[objective.code].get(number, total_teams)
			items.append(
				ObjectiveAlignment(
					item_key=objective.key,
					item_name=objective.name,
					variable_code=objective.code,
					weight=weight,
					value=snap.get(objective.code),
					ranking=ranking,
					total_teams=total_teams,
					aligned=is_aligned(weight, ranking, total_teams),
				)
			)
		rows.append(
			AlignmentRow(
				team=snap.team_name,
				team_number=snap.team_number,
				items=items,
				alignment_score=alignment_score(items),
			)
		)
	return sorted(rows, key=lambda r: r.alignment_score, reverse=True)


def summarize_strategy(rows: List[AlignmentRow]) -> AlignmentSummary:
	weight_sums: Dict[str, int] = {}
	for row in rows:
		for item in row.items:
			weight_sums[item.item_name] = weight_sums.get(item.item_name, 0) + item.weight
	most_prioritized = max(weight_sums, key=lambda name: weight_sums[name]) if weight_sums else None
	return AlignmentSummary(
		most_aligned=rows[0].team if rows else None,
		least_aligned=rows[-1].team if rows else None,
		most_prioritized_objective=most_prioritized,
		below_half=[r.team for r in rows if r.alignment_score < 50],
	)
