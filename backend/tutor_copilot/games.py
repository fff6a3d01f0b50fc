from __future__ import annotations
from typing import Dict, List, Optional

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Game, Referee, Simulation, Team, User
from .settings import settings


class GameInfo(BaseModel):
	id: int
	code: str
	last_processed_period: int
	team_count: int
	simulation_id: int
	simulation_name: str
	professors: List[str] = []


class TeamInfo(BaseModel):
	id: int
	name: str
	number: int
	group_id: int


def _games_query():
	return (
		select(Game, Simulation.name, User.name)
		.join(Simulation, Game.simulation_id == Simulation.id)
		.outerjoin(Referee, Referee.group_id == Game.id)
		.outerjoin(User, Referee.user_id == User.id)
		.where(Simulation.name.like(settings.game_name_pattern))
	)


def _collect(rows) -> List[GameInfo]:
	# One row per (game, professor); fold professors into each game.
	games: Dict[int, GameInfo] = {}
	for game, simulation_name, professor in rows:
		info = games.get(game.id)
		if info is None:
			info = games[game.id] = GameInfo(
				id=game.id,
				code=game.code,
				last_processed_period=game.last_processed_period or 0,
				team_count=game.team_count or 0,
				simulation_id=game.simulation_id,
				simulation_name=simulation_name,
			)
		if professor and professor not in info.professors:
			info.professors.append(professor)
	return list(games.values())


def list_hospital_games(db: Session, user_id: Optional[int] = None) -> List[GameInfo]:
	"""Processed hospital games, newest first; restricted to a tutor's games when user_id is given."""
	stmt = _games_query().where(Game.last_processed_period > 0)
	if user_id is not None:
		stmt = stmt.where(Game.id.in_(select(Referee.group_id).where(Referee.user_id == user_id)))
	rows = db.execute(stmt.order_by(Game.id.desc(), User.name)).all()
	return _collect(rows)


def get_game(db: Session, group_id: int) -> Optional[GameInfo]:
	rows = db.execute(_games_query().where(Game.id == group_id).order_by(User.name)).all()
	games = _collect(rows)
	return games[0] if games else None


def get_game_teams(db: Session, group_id: int) -> List[TeamInfo]:
	rows = db.execute(select(Team).where(Team.group_id == group_id).order_by(Team.number)).scalars().all()
	return [
		TeamInfo(id=t.id, name=t.name or f"Equipe {t.number}", number=t.number, group_id=t.group_id)
		for t in rows
	]


def is_referee(db: Session, group_id: int, user_id: int) -> bool:
	row = db.execute(select(Referee).where(Referee.group_id == group_id, Referee.user_id == user_id)).first()
	return row is not None
