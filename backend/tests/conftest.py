from __future__ import annotations

import hashlib

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tutor_copilot.db import Base
from tutor_copilot.models import (
	BusinessVariable,
	Decision,
	DecisionItem,
	Game,
	Referee,
	Simulation,
	Strategy,
	StrategyItem,
	StrategyItemWeight,
	Team,
	User,
)
from tutor_copilot.store import TeamSnapshot

GROUP_ID = 10


def snap(number: int, name: str | None = None, **variables: float) -> TeamSnapshot:
	return TeamSnapshot(team_number=number, team_name=name or f"Team {number}", variables=variables)


def snapshots(*snaps: TeamSnapshot) -> dict[int, TeamSnapshot]:
	return {s.team_number: s for s in snaps}


@pytest.fixture()
def session_factory():
	engine = create_engine(
		"sqlite://",
		connect_args={"check_same_thread": False},
		poolclass=StaticPool,
		future=True,
	)
	Base.metadata.create_all(bind=engine)
	factory = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
	yield factory
	engine.dispose()


@pytest.fixture()
def seeded_db(session_factory):
	"""Two teams in one hospital game, three processed periods."""
	with session_factory() as db:
		db.add_all(
			[
				Simulation(id=1, name="Jogo de Hospitais"),
				Simulation(id=2, name="Jogo de Varejo"),
				Game(id=GROUP_ID, code="HOSP-26A", last_processed_period=3, team_count=2, simulation_id=1),
				Game(id=11, code="VAREJO-1", last_processed_period=2, team_count=1, simulation_id=2),
				Team(id=101, name="Alfa", number=1, group_id=GROUP_ID),
				Team(id=102, name="Beta", number=2, group_id=GROUP_ID),
				Team(id=201, name="Loja", number=1, group_id=11),
				User(id=5, name="Prof. Silva", email="Silva@Example.com", password_hash=hashlib.sha256(b"pw").hexdigest()),
				User(id=6, name="Prof. Costa", email="costa@example.com", password_hash=hashlib.sha256(b"pw").hexdigest()),
				Referee(group_id=GROUP_ID, user_id=5),
				Referee(group_id=11, user_id=6),
			]
		)
		db.add_all(
			[
				BusinessVariable(team_id=101, period=1, code="valor_acao", value=10.0),
				BusinessVariable(team_id=102, period=1, code="valor_acao", value=12.0),
				BusinessVariable(team_id=101, period=2, code="valor_acao", value=11.0),
				BusinessVariable(team_id=101, period=2, code="receitaLiquidaTotal", value=9625.0),
				BusinessVariable(team_id=101, period=2, code="resultadoOperacionalLiquido", value=2180.0),
				BusinessVariable(team_id=102, period=2, code="valor_acao", value=9.0),
				BusinessVariable(team_id=102, period=2, code="governancaCorporativa", value=None),
				BusinessVariable(team_id=201, period=2, code="valor_acao", value=99.0),
			]
		)
		db.add_all(
			[
				Decision(id=1, team_id=101),
				Decision(id=2, team_id=102),
				DecisionItem(id=1, decision_id=1, period=2, code="fdreceitapa", value=150.0),
				DecisionItem(id=2, decision_id=1, period=2, code="boaSaude", value=1.0),
				DecisionItem(id=3, decision_id=2, period=2, code="fdreceitapa", value=120.0),
				DecisionItem(id=4, decision_id=2, period=1, code="fdreceitapa", value=80.0),
			]
		)
		db.add_all(
			[
				Strategy(id=1, team_id=101),
				StrategyItem(id=1, name="Preço da Ação", variable_code="valor_acao"),
				StrategyItem(id=2, name="Vidas Atendidas", variable_code=None),
				StrategyItemWeight(strategy_id=1, item_id=1, weight=5),
				StrategyItemWeight(strategy_id=1, item_id=2, weight=1),
			]
		)
		db.commit()
	return session_factory
