import pytest
from conftest import snap, snapshots

from tutor_copilot.analytics.benchmarking import analyze_benchmarking, summarize_benchmarking


def test_operating_margin_from_income_and_revenue():
	rows = analyze_benchmarking(
		snapshots(snap(1, "Alfa", resultadoOperacionalLiquido=2180, receitaLiquidaTotal=9625, resultadoBruto=3850))
	)
	assert rows[0].operating_margin == pytest.approx(22.65, abs=0.01)
	assert rows[0].ebitda_margin == pytest.approx(40.0)


def test_margins_are_zero_without_revenue():
	rows = analyze_benchmarking(snapshots(snap(1, "Alfa", resultadoOperacionalLiquido=-500, resultadoBruto=100)))
	assert rows[0].operating_margin == 0
	assert rows[0].ebitda_margin == 0


def test_rows_sorted_by_supplied_ranking_ties_keep_team_order():
	rows = analyze_benchmarking(
		snapshots(
			snap(1, "Alfa", colocacaoRankingPeriodo=3),
			snap(2, "Beta", colocacaoRankingPeriodo=1),
			snap(3, "Gama", colocacaoRankingPeriodo=2),
			snap(4, "Delta", colocacaoRankingPeriodo=2),
		)
	)
	assert [r.team for r in rows] == ["Beta", "Gama", "Delta", "Alfa"]
	rankings = [r.overall_ranking for r in rows]
	assert rankings == sorted(rankings)


def test_fields_copied_from_source():
	row = analyze_benchmarking(
		snapshots(
			snap(
				7,
				"Alfa",
				valor_acao=12.5,
				vidasAtendidas=18000,
				medicosCadastrados=42,
				capitalCirculanteLiq=-300,
				colocacaoRankingPeriodo=1,
			)
		)
	)[0]
	assert row.team_number == 7
	assert row.share_price == 12.5
	assert row.patients_attended == 18000
	assert row.registered_doctors == 42
	assert row.nwc == -300


def test_summary():
	rows = analyze_benchmarking(
		snapshots(
			snap(1, "Alfa", receitaLiquidaTotal=100, resultadoOperacionalLiquido=10, colocacaoRankingPeriodo=2),
			snap(2, "Beta", receitaLiquidaTotal=300, resultadoOperacionalLiquido=90, colocacaoRankingPeriodo=1),
		)
	)
	summary = summarize_benchmarking(rows)
	assert summary.leader == "Beta"
	assert summary.average_net_revenue == 200
	assert summary.average_operating_margin == pytest.approx(20.0)


def test_empty_input():
	assert analyze_benchmarking({}) == []
	assert summarize_benchmarking([]).leader is None
