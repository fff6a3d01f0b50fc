import pytest
from conftest import snap, snapshots

from tutor_copilot.analytics.timeseries import analyze_timeseries


def test_one_point_per_period_with_missing_values_as_zero():
	by_period = {
		1: snapshots(snap(1, "Alfa", valor_acao=10), snap(2, "Beta", valor_acao=12)),
		2: snapshots(snap(1, "Alfa", valor_acao=11, receitaLiquidaTotal=9625, resultadoOperacionalLiquido=2180)),
	}
	dataset = analyze_timeseries(by_period, 3, "en")
	assert dataset.teams == ["Alfa", "Beta"]
	assert dataset.team_numbers == [1, 2]
	assert [m.key for m in dataset.metrics] == ["share_price", "net_revenue", "operating_margin", "governance"]

	share = dataset.metrics[0]
	assert share.label == "Share Price"
	assert [p["period"] for p in share.data] == [1, 2, 3]
	assert share.data[0] == {"period": 1, "Alfa": 10, "Beta": 12}
	assert share.data[1]["Beta"] == 0
	assert share.data[2] == {"period": 3, "Alfa": 0, "Beta": 0}

	margin = dataset.metrics[2]
	assert margin.data[1]["Alfa"] == pytest.approx(22.65, abs=0.01)
	assert margin.data[0]["Alfa"] == 0


def test_portuguese_labels_by_default():
	dataset = analyze_timeseries({1: snapshots(snap(1, "Alfa"))}, 1)
	assert dataset.metrics[0].label == "Valor da Ação"


def test_no_periods():
	dataset = analyze_timeseries({}, 0)
	assert dataset.teams == []
	assert all(m.data == [] for m in dataset.metrics)


def test_clashing_names_keep_separate_series():
	by_period = {
		1: snapshots(snap(1, "Alfa", valor_acao=10), snap(2, "Alfa", valor_acao=12), snap(3, "period", valor_acao=7)),
	}
	dataset = analyze_timeseries(by_period, 1)
	assert dataset.team_numbers == [1, 2, 3]
	assert dataset.teams == ["Alfa (1)", "Alfa (2)", "period (3)"]
	assert dataset.metrics[0].data[0] == {"period": 1, "Alfa (1)": 10, "Alfa (2)": 12, "period (3)": 7}
