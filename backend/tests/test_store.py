import asyncio

from conftest import GROUP_ID

from tutor_copilot.store import (
	InMemoryVariableStore,
	SqlVariableStore,
	StrategyWeight,
	VariableRecord,
	get_or_zero,
	pivot_records,
)


def test_get_or_zero_reads_absent_and_null_as_zero():
	variables = {"a": 3, "b": None, "c": 0.0}
	assert get_or_zero(variables, "a") == 3.0
	assert get_or_zero(variables, "b") == 0.0
	assert get_or_zero(variables, "c") == 0.0
	assert get_or_zero(variables, "missing") == 0.0


def test_pivot_groups_rows_per_team_in_team_order():
	records = [
		VariableRecord(team_number=2, team_name="Beta", code="x", value=1),
		VariableRecord(team_number=1, team_name="Alfa", code="x", value=5),
		VariableRecord(team_number=2, team_name="Beta", code="y", value=2.5),
	]
	result = pivot_records(records)
	assert list(result) == [1, 2]
	assert result[2].team_name == "Beta"
	assert result[2].variables == {"x": 1.0, "y": 2.5}
	assert result[1].get("y") == 0.0
	assert result[1].has("x") and not result[1].has("y")


def test_pivot_of_nothing_is_empty():
	assert pivot_records([]) == {}


def test_in_memory_store_filters_codes_and_scopes():
	store = InMemoryVariableStore()
	store.add_variables(1, 1, 1, "Alfa", {"a": 1, "b": 2})
	store.add_variables(1, 2, 1, "Alfa", {"a": 3})
	store.add_variables(2, 1, 7, "Outro", {"a": 9})

	result = asyncio.run(store.fetch_variables(1, 1, ["a"]))
	assert list(result) == [1]
	assert result[1].variables == {"a": 1.0}
	assert asyncio.run(store.fetch_variables(1, 1, [])) == {}
	assert asyncio.run(store.fetch_variables(1, 9, ["a"])) == {}

	series = asyncio.run(store.fetch_all_periods(1, 3, ["a"]))
	assert sorted(series) == [1, 2]
	assert series[2][1].get("a") == 3.0
	assert asyncio.run(store.fetch_all_periods(1, 0, ["a"])) == {}


def test_in_memory_store_weights():
	store = InMemoryVariableStore()
	store.set_strategy_weights(1, 3, "Gama", [StrategyWeight(item_name="Preço da Ação", variable_code="valor_acao", weight=4)])
	weights = asyncio.run(store.fetch_strategy_weights(1))
	assert weights[3].weights[1].weight == 4
	assert asyncio.run(store.fetch_strategy_weights(99)) == {}


def test_sql_store_pivots_variables_for_one_group_and_period(seeded_db):
	store = SqlVariableStore(seeded_db)
	result = asyncio.run(store.fetch_variables(GROUP_ID, 2, ["valor_acao", "governancaCorporativa", "receitaLiquidaTotal"]))
	assert list(result) == [1, 2]
	assert result[1].team_name == "Alfa"
	assert result[1].get("valor_acao") == 11.0
	assert result[1].get("receitaLiquidaTotal") == 9625.0
	# stored NULL and absent both read as zero
	assert result[2].get("governancaCorporativa") == 0.0
	assert result[2].get("receitaLiquidaTotal") == 0.0


def test_sql_store_skips_query_for_empty_codes(seeded_db):
	store = SqlVariableStore(seeded_db)
	assert asyncio.run(store.fetch_variables(GROUP_ID, 2, [])) == {}
	assert asyncio.run(store.fetch_all_periods(GROUP_ID, 0, ["valor_acao"])) == {}


def test_sql_store_decisions_are_scoped_by_period(seeded_db):
	store = SqlVariableStore(seeded_db)
	result = asyncio.run(store.fetch_decisions(GROUP_ID, 2, ["fdreceitapa", "boaSaude"]))
	assert result[1].variables == {"boaSaude": 1.0, "fdreceitapa": 150.0}
	assert result[2].variables == {"fdreceitapa": 120.0}


def test_sql_store_strategy_weights(seeded_db):
	store = SqlVariableStore(seeded_db)
	weights = asyncio.run(store.fetch_strategy_weights(GROUP_ID))
	assert list(weights) == [1]
	declared = weights[1].weights
	assert declared[1].variable_code == "valor_acao" and declared[1].weight == 5
	assert declared[2].variable_code is None and declared[2].item_name == "Vidas Atendidas"


def test_sql_store_all_periods(seeded_db):
	store = SqlVariableStore(seeded_db)
	series = asyncio.run(store.fetch_all_periods(GROUP_ID, 3, ["valor_acao"]))
	assert sorted(series) == [1, 2]
	assert series[1][2].get("valor_acao") == 12.0
	assert series[2][2].get("valor_acao") == 9.0
