from __future__ import annotations
from sqlalchemy import Column, String, Integer, Float, ForeignKey
from .db import Base

# Read-only mappings of the simulator's schema. Table and column names are the
# simulator's own (Portuguese); attribute names are ours.


class Simulation(Base):
	__tablename__ = "jogo"
	id = Column(Integer, primary_key=True)
	name = Column("nome", String(255), nullable=False)


class Game(Base):
	"""A competitive cohort ("industrial group") running one simulation."""
	__tablename__ = "grupo_industrial"
	id = Column(Integer, primary_key=True)
	code = Column("codigo", String(64), nullable=False)
	last_processed_period = Column("ultimo_periodo_processado", Integer, default=0, nullable=False)
	team_count = Column("num_empresas", Integer, default=0, nullable=False)
	simulation_id = Column("jogo_id", Integer, ForeignKey("jogo.id"), nullable=False)


class Team(Base):
	__tablename__ = "empresa"
	id = Column(Integer, primary_key=True)
	name = Column("nome", String(255), nullable=True)
	number = Column("numero", Integer, nullable=False)
	group_id = Column("grupo_id", Integer, ForeignKey("grupo_industrial.id"), nullable=False, index=True)


class BusinessVariable(Base):
	# EAV: one row per (team, period, code)
	__tablename__ = "variavel_empresarial"
	team_id = Column("empresa_id", Integer, ForeignKey("empresa.id"), primary_key=True)
	period = Column("periodo", Integer, primary_key=True)
	code = Column("codigo", String(128), primary_key=True)
	value = Column("valor", Float, nullable=True)


class Decision(Base):
	__tablename__ = "decisao"
	id = Column(Integer, primary_key=True)
	team_id = Column("empresa_id", Integer, ForeignKey("empresa.id"), nullable=False, index=True)


class DecisionItem(Base):
	__tablename__ = "item_decisao"
	id = Column(Integer, primary_key=True)
	decision_id = Column("decisao_id", Integer, ForeignKey("decisao.id"), nullable=False, index=True)
	period = Column("periodo", Integer, nullable=False)
	code = Column("codigo", String(128), nullable=False)
	value = Column("valor", Float, nullable=True)


class Strategy(Base):
	__tablename__ = "estrategia"
	id = Column(Integer, primary_key=True)
	team_id = Column("empresa_id", Integer, ForeignKey("empresa.id"), nullable=False, index=True)


class StrategyItem(Base):
	__tablename__ = "item_estrategia"
	id = Column(Integer, primary_key=True)
	name = Column("nome", String(255), nullable=False)
	variable_code = Column("codigo", String(128), nullable=True)


class StrategyItemWeight(Base):
	__tablename__ = "peso_item_estrategia"
	strategy_id = Column("estrategia_id", Integer, ForeignKey("estrategia.id"), primary_key=True)
	item_id = Column("item_estrategia_id", Integer, ForeignKey("item_estrategia.id"), primary_key=True)
	weight = Column("peso", Integer, default=0, nullable=False)


class User(Base):
	__tablename__ = "usuario"
	id = Column(Integer, primary_key=True)
	name = Column("nome", String(255), nullable=False)
	email = Column(String(255), nullable=False, index=True)
	password_hash = Column("senha_hash", String(128), nullable=False)  # SHA-256 hex


class Referee(Base):
	# Tutors assigned to a game
	__tablename__ = "arbitro"
	group_id = Column("grupo_id", Integer, ForeignKey("grupo_industrial.id"), primary_key=True)
	user_id = Column("usuario_id", Integer, ForeignKey("usuario.id"), primary_key=True)
