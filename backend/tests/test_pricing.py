import pytest
from conftest import snap, snapshots

from tutor_copilot.analytics.pricing import analyze_pricing, group_averages, market_averages, price_position


@pytest.mark.parametrize(
	"price, expected",
	[(126.1, "above"), (125.9, None), (114.1, None), (113.9, "below"), (120.0, None)],
)
def test_position_band_is_five_percent(price, expected):
	assert price_position(price, 120.0) == expected


def test_rows_compare_against_group_average_price():
	decisions = snapshots(
		snap(1, "Alfa", fdreceitapa=150, boaSaude=1),
		snap(2, "Beta", fdreceitapa=100),
	)
	results = snapshots(
		snap(
			1,
			"Alfa",
			medias_prontoAtendimento=120,
			marketShareAtendimentosprontoAtendimento=0.3,
			receita_servico_plano_prontoAtendimento_boaSaude=1000,
			receita_servico_plano_internacao_boaSaude=500,
			atratividadeFinal_prontoAtendimento_boaSaude=0.6,
			atratividadeFinal_altaComplexidade_boaSaude=0.3,
		),
		snap(2, "Beta", medias_prontoAtendimento=120, marketShareAtendimentosprontoAtendimento=0.5),
	)
	report = analyze_pricing(decisions, results)
	alfa, beta = report.rows

	assert report.market_averages["emergency"] == 120
	assert report.group_averages["emergency"] == 125
	assert alfa.services["emergency"].market_average == 120
	assert alfa.services["emergency"].group_average == 125
	assert alfa.services["emergency"].position == "above"
	assert beta.services["emergency"].position == "below"

	assert alfa.accepted_channels["boaSaude"] is True
	assert alfa.revenue_by_channel["boaSaude"] == 1500
	assert alfa.attractiveness_by_channel["boaSaude"] == pytest.approx(0.3)
	# not accepted reads as not applicable, never zero
	assert alfa.revenue_by_channel["unique"] is None
	assert beta.accepted_channels["boaSaude"] is False
	assert beta.attractiveness_by_channel["boaSaude"] is None

	assert report.highest_price == "Alfa"
	assert report.lowest_price == "Beta"
	assert report.market_share_leader == "Beta"


def test_published_average_does_not_drive_position():
	decisions = snapshots(snap(1, "Alfa", fdreceitapa=150), snap(2, "Beta", fdreceitapa=140))
	results = snapshots(
		snap(1, "Alfa", medias_prontoAtendimento=200),
		snap(2, "Beta", medias_prontoAtendimento=200),
	)
	report = analyze_pricing(decisions, results)
	assert report.market_averages["emergency"] == 200
	assert report.group_averages["emergency"] == 145
	assert [r.services["emergency"].position for r in report.rows] == [None, None]


def test_published_average_is_zero_when_missing():
	averages = market_averages(snapshots(snap(1, "Alfa", medias_internacao=310)))
	assert averages["inpatient"] == 310
	assert averages["emergency"] == 0


def test_group_average_counts_teams_without_decisions_as_zero():
	decisions = snapshots(snap(1, "Alfa", fdreceitapa=150), snap(2, "Beta", fdreceitapa=90))
	assert group_averages(decisions, [1, 2])["emergency"] == 120
	assert group_averages(decisions, [1, 2, 3])["emergency"] == 80
	assert group_averages({}, [])["emergency"] == 0


def test_teams_are_the_union_of_decisions_and_results():
	decisions = snapshots(snap(1, "Alfa", fdreceitapa=150))
	results = snapshots(snap(3, "Gama", marketShareAtendimentosinternacao=0.2))
	report = analyze_pricing(decisions, results, "en")
	assert [r.team for r in report.rows] == ["Alfa", "Gama"]
	assert report.group_averages["emergency"] == 75
	alfa, gama = report.rows
	assert alfa.services["emergency"].position == "above"
	assert gama.services["emergency"].position == "below"
	assert gama.avg_price == 0
	assert gama.total_market_share == pytest.approx(0.2)
	assert not any(gama.accepted_channels.values())


def test_empty_input():
	report = analyze_pricing({}, {})
	assert report.rows == []
	assert report.highest_price is None
