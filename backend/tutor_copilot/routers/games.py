from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..db import SessionLocal, get_db
from ..games import GameInfo, TeamInfo, get_game, get_game_teams, is_referee, list_hospital_games
from ..store import SqlVariableStore, VariableStore
from .auth import SessionUser, get_current_user

router = APIRouter(prefix="/games", tags=["games"])


def get_store() -> VariableStore:
	return SqlVariableStore(SessionLocal)


def get_accessible_game(
	group_id: int,
	user: SessionUser = Depends(get_current_user),
	db: Session = Depends(get_db),
) -> GameInfo:
	game = get_game(db, group_id)
	if game is None:
		raise HTTPException(status_code=404, detail="game not found")
	if not user.is_admin and not is_referee(db, group_id, user.user_id):
		raise HTTPException(status_code=403, detail="not a tutor of this game")
	return game


def resolve_period(game: GameInfo, period: Optional[int]) -> int:
	"""Requested period, defaulting to the last processed one."""
	if period is None:
		period = game.last_processed_period
	if period < 1 or period > game.last_processed_period:
		raise HTTPException(
			status_code=400,
			detail=f"period must be between 1 and {game.last_processed_period}",
		)
	return period


@router.get("", response_model=List[GameInfo])
def list_games(user: SessionUser = Depends(get_current_user), db: Session = Depends(get_db)):
	return list_hospital_games(db, None if user.is_admin else user.user_id)


@router.get("/{group_id}", response_model=GameInfo)
def game_details(game: GameInfo = Depends(get_accessible_game)):
	return game


@router.get("/{group_id}/teams", response_model=List[TeamInfo])
def game_teams(game: GameInfo = Depends(get_accessible_game), db: Session = Depends(get_db)):
	return get_game_teams(db, game.id)
