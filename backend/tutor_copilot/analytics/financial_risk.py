from __future__ import annotations
from typing import List, Literal

from pydantic import BaseModel, ConfigDict

from ..store import Snapshots, TeamSnapshot
from . import codes
from .base import ReportRow, percent, safe_div

RiskStatus = Literal["healthy", "attention", "critical"]


class RiskRow(ReportRow):
	ending_cash: float
	opening_cash: float
	nwc: float
	equity: float
	total_assets: float
	total_liabilities: float
	revolving_credit: float
	revolving_credit_usage: float
	revolving_rate: float
	revolving_expense: float
	loan_expense: float
	loan_interest_rate: float
	emergency_plan: float
	net_revenue: float
	leverage: float
	cash_coverage: float
	cash_variation: float
	risk_status: RiskStatus


class RiskSummary(BaseModel):
	model_config = ConfigDict(frozen=True)

	best_nwc: str | None
	worst_nwc: str | None
	teams_in_revolving_credit: int
	critical_teams: List[str]


def classify_risk(nwc: float, emergency_plan: float, revolving_credit: float) -> RiskStatus:
	"""First matching predicate wins: critical, then attention, else healthy."""
	if nwc < 0 or emergency_plan > 0:
		return "critical"
	if revolving_credit > 0:
		return "attention"
	return "healthy"


def risk_row(snap: TeamSnapshot) -> RiskRow:
	ending_cash = snap.get(codes.ENDING_CASH)
	opening_cash = snap.get("saldoInicialTrimestre")
	nwc = snap.get(codes.NWC)
	equity = snap.get(codes.EQUITY)
	liabilities = snap.get("totalPassivo")
	revolving_credit = snap.get("creditoRotativo")
	emergency_plan = snap.get("planoEmergencial")
	net_revenue = snap.get(codes.NET_REVENUE)
	return RiskRow(
		team=snap.team_name,
		team_number=snap.team_number,
		ending_cash=ending_cash,
		opening_cash=opening_cash,
		nwc=nwc,
		equity=equity,
		total_assets=snap.get("totalAtivo"),
		total_liabilities=liabilities,
		revolving_credit=revolving_credit,
		revolving_credit_usage=snap.get("utilizacaoCreditoRotativo"),
		revolving_rate=snap.get("hospitalPercentualCreditoRotativo"),
		revolving_expense=snap.get("despesaCreditoRotativo"),
		loan_expense=snap.get("despesa_emprestimo"),
		loan_interest_rate=snap.get("taxa_juros_emprestimo"),
		emergency_plan=emergency_plan,
		net_revenue=net_revenue,
		# negative equity still yields a (negative) leverage; only zero is guarded
		leverage=safe_div(liabilities, equity),
		cash_coverage=percent(ending_cash, net_revenue),
		cash_variation=ending_cash - opening_cash,
		risk_status=classify_risk(nwc, emergency_plan, revolving_credit),
	)


def analyze_financial_risk(snapshots: Snapshots) -> List[RiskRow]:
	return [risk_row(snapshots[number]) for number in sorted(snapshots)]


def summarize_financial_risk(rows: List[RiskRow]) -> RiskSummary:
	by_nwc = sorted(rows, key=lambda r: r.nwc, reverse=True)
	return RiskSummary(
		best_nwc=by_nwc[0].team if by_nwc else None,
		worst_nwc=by_nwc[-1].team if by_nwc else None,
		teams_in_revolving_credit=sum(1 for r in rows if r.revolving_credit > 0),
		critical_teams=[r.team for r in rows if r.risk_status == "critical"],
	)
