from __future__ import annotations
from typing import List

from pydantic import BaseModel, ConfigDict

from ..store import Snapshots, TeamSnapshot
from . import codes
from .base import ReportRow, percent


class BenchmarkRow(ReportRow):
	share_price: float
	net_revenue: float
	net_operating_income: float
	operating_margin: float
	ebitda: float
	ebitda_margin: float
	patients_attended: float
	registered_doctors: float
	nwc: float
	overall_ranking: int


class BenchmarkSummary(BaseModel):
	model_config = ConfigDict(frozen=True)

	leader: str | None
	average_net_revenue: float
	average_operating_margin: float


def operating_margin(net_operating_income: float, net_revenue: float) -> float:
	return percent(net_operating_income, net_revenue)


def benchmark_row(snap: TeamSnapshot) -> BenchmarkRow:
	net_revenue = snap.get(codes.NET_REVENUE)
	net_operating_income = snap.get(codes.NET_OPERATING_INCOME)
	ebitda = snap.get(codes.GROSS_RESULT)
	return BenchmarkRow(
		team=snap.team_name,
		team_number=snap.team_number,
		share_price=snap.get(codes.SHARE_PRICE),
		net_revenue=net_revenue,
		net_operating_income=net_operating_income,
		operating_margin=operating_margin(net_operating_income, net_revenue),
		ebitda=ebitda,
		ebitda_margin=percent(ebitda, net_revenue),
		patients_attended=snap.get(codes.LIVES_ATTENDED),
		registered_doctors=snap.get(codes.REGISTERED_DOCTORS),
		nwc=snap.get(codes.NWC),
		overall_ranking=int(snap.get(codes.OVERALL_RANKING)),
	)


def analyze_benchmarking(snapshots: Snapshots) -> List[BenchmarkRow]:
	"""Rows ordered by the simulator's overall ranking, rank 1 first.

	The ranking is upstream data; ties keep team-number order.
	"""
	rows = [benchmark_row(snapshots[number]) for number in sorted(snapshots)]
	return sorted(rows, key=lambda r: r.overall_ranking)


def summarize_benchmarking(rows: List[BenchmarkRow]) -> BenchmarkSummary:
	if not rows:
		return BenchmarkSummary(leader=None, average_net_revenue=0.0, average_operating_margin=0.0)
	return BenchmarkSummary(
		leader=rows[0].team,
		average_net_revenue=sum(r.net_revenue for r in rows) / len(rows),
		average_operating_margin=sum(r.operating_margin for r in rows) / len(rows),
	)
