import pytest
from conftest import snap, snapshots

from tutor_copilot.analytics.financial_risk import analyze_financial_risk, classify_risk, summarize_financial_risk


def test_leverage_is_zero_without_equity():
	row = analyze_financial_risk(snapshots(snap(1, "Alfa", totalPassivo=500, patrimonioLiquido=0)))[0]
	assert row.leverage == 0


def test_ratios():
	row = analyze_financial_risk(
		snapshots(
			snap(
				1,
				"Alfa",
				totalPassivo=500,
				patrimonioLiquido=250,
				saldoFinal=1200,
				saldoInicialTrimestre=1500,
				receitaLiquidaTotal=6000,
				capitalCirculanteLiq=100,
			)
		)
	)[0]
	assert row.leverage == 2.0
	assert row.cash_coverage == pytest.approx(20.0)
	assert row.cash_variation == -300
	assert row.risk_status == "healthy"


def test_cash_coverage_zero_without_revenue():
	row = analyze_financial_risk(snapshots(snap(1, "Alfa", saldoFinal=1200)))[0]
	assert row.cash_coverage == 0


@pytest.mark.parametrize(
	"nwc, plan, revolving, expected",
	[
		(-1, 0, 0, "critical"),
		(-1, 0, 500, "critical"),
		(100, 1, 500, "critical"),
		(100, 0, 500, "attention"),
		(0, 0, 0, "healthy"),
	],
)
def test_risk_priority(nwc, plan, revolving, expected):
	assert classify_risk(nwc, plan, revolving) == expected


def test_summary():
	rows = analyze_financial_risk(
		snapshots(
			snap(1, "Alfa", capitalCirculanteLiq=-50, creditoRotativo=10),
			snap(2, "Beta", capitalCirculanteLiq=900),
			snap(3, "Gama", capitalCirculanteLiq=300, creditoRotativo=5),
		)
	)
	assert [r.risk_status for r in rows] == ["critical", "healthy", "attention"]
	summary = summarize_financial_risk(rows)
	assert summary.best_nwc == "Beta"
	assert summary.worst_nwc == "Alfa"
	assert summary.teams_in_revolving_credit == 2
	assert summary.critical_teams == ["Alfa"]


def test_empty_input():
	assert analyze_financial_risk({}) == []
	summary = summarize_financial_risk([])
	assert summary.best_nwc is None and summary.critical_teams == []
