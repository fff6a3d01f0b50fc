from __future__ import annotations
from collections import Counter
from typing import Callable, Dict, List, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..store import Snapshots, TeamSnapshot
from . import codes
from .benchmarking import operating_margin


class TimeseriesMetric(BaseModel):
	model_config = ConfigDict(frozen=True)

	key: str
	label: str
	# one entry per period: {"period": p, "<team name>": value, ...}
	data: List[Dict[str, Union[int, float]]]


class TimeseriesDataset(BaseModel):
	model_config = ConfigDict(frozen=True)

	# series keys, parallel to team_numbers
	teams: List[str]
	team_numbers: List[int]
	metrics: List[TimeseriesMetric]


class _MetricDef(NamedTuple):
	key: str
	labels: Dict[str, str]
	value: Callable[[TeamSnapshot], float]


METRICS: List[_MetricDef] = [
	_MetricDef("share_price", {"pt": "Valor da Ação", "en": "Share Price"}, lambda s: s.get(codes.SHARE_PRICE)),
	_MetricDef("net_revenue", {"pt": "Receita Líquida", "en": "Net Revenue"}, lambda s: s.get(codes.NET_REVENUE)),
	_MetricDef(
		"operating_margin",
		{"pt": "Margem Operacional (%)", "en": "Operating Margin (%)"},
		lambda s: operating_margin(s.get(codes.NET_OPERATING_INCOME), s.get(codes.NET_REVENUE)),
	),
	_MetricDef("governance", {"pt": "Governança Corporativa", "en": "Corporate Governance"}, lambda s: s.get(codes.GOVERNANCE)),
]


def _series_keys(names: Dict[int, str], team_numbers: List[int]) -> Dict[int, str]:
	counts = Counter(names[n] for n in team_numbers)
	return {
		n: names[n] if counts[names[n]] == 1 and names[n] != "period" else f"{names[n]} ({n})"
		for n in team_numbers
	}


def analyze_timeseries(by_period: Dict[int, Snapshots], max_period: int, locale: str = "pt") -> TimeseriesDataset:
	"""Repeat the per-period metrics over periods 1..max_period.

	Teams are collected across every period (first name seen wins) and a team
	missing from a period reads 0 there. A name that repeats another team's or
	reads "period" is suffixed with the team number so no series is overwritten.
	"""
	names: Dict[int, str] = {}
	for period in sorted(by_period):
		for number, snap in by_period[period].items():
			names.setdefault(number, snap.team_name)
	team_numbers = sorted(names)
	keys = _series_keys(names, team_numbers)

	metrics: List[TimeseriesMetric] = []
	for metric in METRICS:
		data: List[Dict[str, Union[int, float]]] = []
		for period in range(1, max_period + 1):
			snapshots = by_period.get(period, {})
			point: Dict[str, Union[int, float]] = {"period": period}
			for number in team_numbers:
				snap: Optional[TeamSnapshot] = snapshots.get(number)
				point[keys[number]] = metric.value(snap) if snap is not None else 0.0
			data.append(point)
		metrics.append(TimeseriesMetric(key=metric.key, label=metric.labels.get(locale, metric.labels["pt"]), data=data))
	return TimeseriesDataset(teams=[keys[n] for n in team_numbers], team_numbers=team_numbers, metrics=metrics)
