"""Variable store adapter.

The simulator keeps every per-team metric as an entity-attribute-value row
``(team, period, code, value)``. Analyzers never see those rows: a store fetches
the codes they need and pivots them into one :class:`TeamSnapshot` per team.

Absent variables read as zero everywhere, through :func:`get_or_zero`.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict
from sqlalchemy import select

from .models import BusinessVariable, Decision, DecisionItem, Strategy, StrategyItem, StrategyItemWeight, Team

logger = logging.getLogger(__name__)


def get_or_zero(variables: Mapping[str, Optional[float]], code: str) -> float:
	"""Value of ``code`` or 0.0 when the variable is absent (or stored as NULL)."""
	value = variables.get(code)
	if value is None:
		return 0.0
	return float(value)


class VariableRecord(BaseModel):
	team_number: int
	team_name: str
	code: str
	value: Optional[float] = None


class TeamSnapshot(BaseModel):
	model_config = ConfigDict(frozen=True)

	team_number: int
	team_name: str
	variables: Dict[str, Optional[float]] = {}

	def get(self, code: str) -> float:
		return get_or_zero(self.variables, code)

	def has(self, code: str) -> bool:
		return self.variables.get(code) is not None


Snapshots = Dict[int, TeamSnapshot]


def pivot_records(records: Iterable[VariableRecord]) -> Snapshots:
	"""Pivot EAV rows into ``{team_number: TeamSnapshot}`` ordered by team number."""
	names: Dict[int, str] = {}
	values: Dict[int, Dict[str, Optional[float]]] = defaultdict(dict)
	for rec in records:
		names.setdefault(rec.team_number, rec.team_name)
		values[rec.team_number][rec.code] = None if rec.value is None else float(rec.value)
	return {
		number: TeamSnapshot(team_number=number, team_name=names[number], variables=values[number])
		for number in sorted(names)
	}


class StrategyWeight(BaseModel):
	item_name: str
	variable_code: Optional[str] = None
	weight: int = 0


class TeamStrategyWeights(BaseModel):
	team_number: int
	team_name: str
	weights: Dict[int, StrategyWeight] = {}


class VariableStore(Protocol):
	async def fetch_variables(self, group_id: int, period: int, codes: Sequence[str]) -> Snapshots: ...

	async def fetch_decisions(self, group_id: int, period: int, codes: Sequence[str]) -> Snapshots: ...

	async def fetch_strategy_weights(self, group_id: int) -> Dict[int, TeamStrategyWeights]: ...

	async def fetch_all_periods(self, group_id: int, max_period: int, codes: Sequence[str]) -> Dict[int, Snapshots]: ...


def _team_label(name: Optional[str], number: int) -> str:
	return name or f"Equipe {number}"


class SqlVariableStore:
	"""Reads the simulator database through SQLAlchemy.

	Each fetch opens its own session and runs in the threadpool, so independent
	fetches can be awaited together with ``asyncio.gather``.
	"""

	def __init__(self, session_factory) -> None:
		self._session_factory = session_factory

	async def fetch_variables(self, group_id: int, period: int, codes: Sequence[str]) -> Snapshots:
		if not codes:
			return {}
		return await run_in_threadpool(self._variables, group_id, period, list(codes))

	async def fetch_decisions(self, group_id: int, period: int, codes: Sequence[str]) -> Snapshots:
		if not codes:
			return {}
		return await run_in_threadpool(self._decisions, group_id, period, list(codes))

	async def fetch_strategy_weights(self, group_id: int) -> Dict[int, TeamStrategyWeights]:
		return await run_in_threadpool(self._strategy_weights, group_id)

	async def fetch_all_periods(self, group_id: int, max_period: int, codes: Sequence[str]) -> Dict[int, Snapshots]:
		if not codes or max_period < 1:
			return {}
		return await run_in_threadpool(self._all_periods, group_id, max_period, list(codes))

	def _variables(self, group_id: int, period: int, codes: List[str]) -> Snapshots:
		stmt = (
			select(Team.number, Team.name, BusinessVariable.code, BusinessVariable.value)
			.join(Team, BusinessVariable.team_id == Team.id)
			.where(Team.group_id == group_id, BusinessVariable.period == period, BusinessVariable.code.in_(codes))
			.order_by(Team.number, BusinessVariable.code)
		)
		with self._session_factory() as db:
			rows = db.execute(stmt).all()
		logger.debug("group %s period %s: %d variable rows for %d codes", group_id, period, len(rows), len(codes))
		return pivot_records(
			VariableRecord(team_number=number, team_name=_team_label(name, number), code=code, value=value)
			for number, name, code, value in rows
		)

	def _decisions(self, group_id: int, period: int, codes: List[str]) -> Snapshots:
		stmt = (
			select(Team.number, Team.name, DecisionItem.code, DecisionItem.value)
			.join(Decision, DecisionItem.decision_id == Decision.id)
			.join(Team, Decision.team_id == Team.id)
			.where(Team.group_id == group_id, DecisionItem.period == period, DecisionItem.code.in_(codes))
			.order_by(Team.number, DecisionItem.code)
		)
		with self._session_factory() as db:
			rows = db.execute(stmt).all()
		logger.debug("group %s period %s: %d decision rows", group_id, period, len(rows))
		return pivot_records(
			VariableRecord(team_number=number, team_name=_team_label(name, number), code=code, value=value)
			for number, name, code, value in rows
		)

	def _strategy_weights(self, group_id: int) -> Dict[int, TeamStrategyWeights]:
		stmt = (
			select(
				Team.number,
				Team.name,
				StrategyItemWeight.item_id,
				StrategyItem.name,
				StrategyItem.variable_code,
				StrategyItemWeight.weight,
			)
			.join(Strategy, StrategyItemWeight.strategy_id == Strategy.id)
			.join(Team, Strategy.team_id == Team.id)
			.join(StrategyItem, StrategyItemWeight.item_id == StrategyItem.id)
			.where(Team.group_id == group_id)
			.order_by(Team.number, StrategyItemWeight.item_id)
		)
		with self._session_factory() as db:
			rows = db.execute(stmt).all()
		result: Dict[int, TeamStrategyWeights] = {}
		for number, name, item_id, item_name, variable_code, weight in rows:
			team = result.get(number)
			if team is None:
				team = result[number] = TeamStrategyWeights(team_number=number, team_name=_team_label(name, number))
			team.weights[item_id] = StrategyWeight(item_name=item_name, variable_code=variable_code, weight=int(weight or 0))
		return result

	def _all_periods(self, group_id: int, max_period: int, codes: List[str]) -> Dict[int, Snapshots]:
		stmt = (
			select(BusinessVariable.period, Team.number, Team.name, BusinessVariable.code, BusinessVariable.value)
			.join(Team, BusinessVariable.team_id == Team.id)
			.where(
				Team.group_id == group_id,
				BusinessVariable.period.between(1, max_period),
				BusinessVariable.code.in_(codes),
			)
			.order_by(BusinessVariable.period, Team.number, BusinessVariable.code)
		)
		with self._session_factory() as db:
			rows = db.execute(stmt).all()
		by_period: Dict[int, List[VariableRecord]] = defaultdict(list)
		for period, number, name, code, value in rows:
			by_period[period].append(
				VariableRecord(team_number=number, team_name=_team_label(name, number), code=code, value=value)
			)
		return {period: pivot_records(records) for period, records in sorted(by_period.items())}


class InMemoryVariableStore:
	"""Store over plain dicts, for tests and offline demos."""

	def __init__(self) -> None:
		self._variables: Dict[Tuple[int, int], List[VariableRecord]] = defaultdict(list)
		self._decisions: Dict[Tuple[int, int], List[VariableRecord]] = defaultdict(list)
		self._weights: Dict[int, Dict[int, TeamStrategyWeights]] = defaultdict(dict)

	def add_variables(self, group_id: int, period: int, team_number: int, team_name: str, values: Mapping[str, float]) -> None:
		self._variables[(group_id, period)].extend(
			VariableRecord(team_number=team_number, team_name=team_name, code=code, value=value)
			for code, value in values.items()
		)

	def add_decisions(self, group_id: int, period: int, team_number: int, team_name: str, values: Mapping[str, float]) -> None:
		self._decisions[(group_id, period)].extend(
			VariableRecord(team_number=team_number, team_name=team_name, code=code, value=value)
			for code, value in values.items()
		)

	def set_strategy_weights(self, group_id: int, team_number: int, team_name: str, weights: Sequence[StrategyWeight]) -> None:
		self._weights[group_id][team_number] = TeamStrategyWeights(
			team_number=team_number,
			team_name=team_name,
			weights={i + 1: w for i, w in enumerate(weights)},
		)

	@staticmethod
	def _select(records: List[VariableRecord], codes: Sequence[str]) -> Snapshots:
		wanted = set(codes)
		return pivot_records(r for r in records if r.code in wanted)

	async def fetch_variables(self, group_id: int, period: int, codes: Sequence[str]) -> Snapshots:
		if not codes:
			return {}
		return self._select(self._variables.get((group_id, period), []), codes)

	async def fetch_decisions(self, group_id: int, period: int, codes: Sequence[str]) -> Snapshots:
		if not codes:
			return {}
		return self._select(self._decisions.get((group_id, period), []), codes)

	async def fetch_strategy_weights(self, group_id: int) -> Dict[int, TeamStrategyWeights]:
		return dict(self._weights.get(group_id, {}))

	async def fetch_all_periods(self, group_id: int, max_period: int, codes: Sequence[str]) -> Dict[int, Snapshots]:
		if not codes or max_period < 1:
			return {}
		result: Dict[int, Snapshots] = {}
		for period in range(1, max_period + 1):
			snapshots = self._select(self._variables.get((group_id, period), []), codes)
			if snapshots:
				result[period] = snapshots
		return result
