from typing import NamedTuple, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_db
from ..facilitation import FacilitationGuide, GuideGenerationError, generate_facilitation_guide
from ..games import GameInfo, get_game, get_game_teams, is_referee
from ..i18n import resolve_locale
from ..llm_client import LLMClient, LLMError
from ..store import VariableStore
from .auth import SessionUser, get_current_user
from .games import get_store, resolve_period

router = APIRouter(prefix="/facilitation", tags=["facilitation"])

logger = logging.getLogger(__name__)


async def get_text_client():
	try:
		client = LLMClient()
	except LLMError as e:
		raise HTTPException(status_code=503, detail=str(e))
	try:
		yield client
	finally:
		await client.aclose()


class GuideTarget(NamedTuple):
	game: GameInfo
	period: int


def get_guide_target(
	group_id: Optional[int] = None,
	period: Optional[int] = None,
	user: SessionUser = Depends(get_current_user),
	db: Session = Depends(get_db),
) -> GuideTarget:
	# Must precede get_text_client in the handler signature: dependencies resolve in order.
	if not group_id or not period:
		raise HTTPException(status_code=400, detail="group_id and period are required")
	game = get_game(db, group_id)
	if game is None:
		raise HTTPException(status_code=404, detail="game not found")
	if not user.is_admin and not is_referee(db, group_id, user.user_id):
		raise HTTPException(status_code=403, detail="not a tutor of this game")
	return GuideTarget(game, resolve_period(game, period))


@router.get("", response_model=FacilitationGuide)
async def facilitation_guide(
	locale: Optional[str] = None,
	target: GuideTarget = Depends(get_guide_target),
	db: Session = Depends(get_db),
	store: VariableStore = Depends(get_store),
	client=Depends(get_text_client),
):
	game, period = target
	teams = get_game_teams(db, game.id)
	try:
		return await generate_facilitation_guide(store, client, game, teams, period, resolve_locale(locale))
	except GuideGenerationError as e:
		raise HTTPException(status_code=502, detail=str(e))
	except SQLAlchemyError:
		logger.exception("facilitation data fetch failed for game %s", game.id)
		raise HTTPException(status_code=500, detail="failed to load game data")
