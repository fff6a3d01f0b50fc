from conftest import snap, snapshots

from tutor_copilot.analytics.profitability import analyze_profitability, group_by_service


def team(number, name, margin_pa, contribution_pa=0.0, **extra):
	return snap(
		number,
		name,
		receita_total_prontoAtendimento=1_000_000,
		glosa_prontoAtendimento=50_000,
		inadimplenciaParticularesprontoAtendimento=10_000,
		receita_liquida_prontoAtendimento=940_000,
		custo_insumos_prontoAtendimento=200_000,
		custo_pessoal_prontoAtendimento=300_000,
		margem_contribuicao_prontoAtendimento=contribution_pa,
		percentual_total_margem_contribuicao_prontoAtendimento=margin_pa,
		**extra,
	)


def test_rows_copy_upstream_figures_per_service():
	rows = analyze_profitability(snapshots(team(1, "Alfa", 46.8, 440_000)))
	assert len(rows) == 3
	pa = rows[0]
	assert pa.service_key == "emergency"
	assert pa.service == "Pronto Atendimento"
	assert pa.total_revenue == 1_000_000
	assert pa.disallowances == 50_000
	assert pa.defaults == 10_000
	assert pa.net_revenue == 940_000
	assert pa.input_costs == 200_000
	assert pa.labor_costs == 300_000
	assert pa.contribution_margin == 440_000
	assert pa.margin_percent == 46.8
	# nothing reported for inpatient: every field reads zero
	assert rows[1].service_key == "inpatient"
	assert rows[1].total_revenue == 0 and rows[1].margin_percent == 0


def test_grouping_sorts_by_margin_descending_with_highlights():
	rows = analyze_profitability(
		snapshots(team(1, "Alfa", 12.0), team(2, "Beta", 40.0, 500_000), team(3, "Gama", -5.5)),
		"en",
	)
	grouped = group_by_service(rows, "en")
	emergency = grouped["emergency"]
	assert [r.team for r in emergency.rows] == ["Beta", "Alfa", "Gama"]
	assert emergency.average_margin == (12.0 + 40.0 - 5.5) / 3
	assert emergency.takeaways[0].startswith("Best margin: Beta (40.0%")
	assert emergency.takeaways[1] == "Worst margin: Gama (-5.5%), operating at a loss in this line"
	assert emergency.takeaways[2] == "Group average: 15.5% contribution margin in Emergency Care"


def test_positive_worst_margin_is_not_flagged():
	grouped = group_by_service(analyze_profitability(snapshots(team(1, "Alfa", 12.0), team(2, "Beta", 3.0))))
	assert "prejuízo" not in grouped["emergency"].takeaways[1]


def test_empty_input():
	assert analyze_profitability({}) == []
	assert group_by_service([]) == {}
