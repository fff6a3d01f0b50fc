from typing import Any, Awaitable, Dict, Optional, TypeVar
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from .. import reports
from ..analytics.benchmarking import summarize_benchmarking
from ..analytics.financial_risk import summarize_financial_risk
from ..analytics.profitability import group_by_service
from ..analytics.strategy import summarize_strategy
from ..games import GameInfo
from ..i18n import resolve_locale
from ..store import VariableStore
from .games import get_accessible_game, get_store, resolve_period

router = APIRouter(prefix="/games/{group_id}", tags=["reports"])

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _fetch(report: Awaitable[T], game: GameInfo, name: str) -> T:
	try:
		return await report
	except SQLAlchemyError as e:
		logger.exception("%s report failed for game %s", name, game.id)
		raise HTTPException(status_code=500, detail=f"failed to load {name} data: {e.__class__.__name__}")


def _envelope(game: GameInfo, period: int, **payload: Any) -> Dict[str, Any]:
	return {"game": game.code, "period": period, "max_period": game.last_processed_period, **payload}


@router.get("/efficiency")
async def efficiency(
	period: Optional[int] = None,
	locale: Optional[str] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	p = resolve_period(game, period)
	data = await _fetch(reports.efficiency_report(store, game.id, p, resolve_locale(locale)), game, "efficiency")
	return _envelope(game, p, services=data)


@router.get("/profitability")
async def profitability(
	period: Optional[int] = None,
	locale: Optional[str] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	p = resolve_period(game, period)
	loc = resolve_locale(locale)
	rows = await _fetch(reports.profitability_report(store, game.id, p, loc), game, "profitability")
	return _envelope(game, p, services=group_by_service(rows, loc))


@router.get("/benchmarking")
async def benchmarking(
	period: Optional[int] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	p = resolve_period(game, period)
	rows = await _fetch(reports.benchmarking_report(store, game.id, p), game, "benchmarking")
	return _envelope(game, p, rows=rows, summary=summarize_benchmarking(rows))


@router.get("/financial-risk")
async def financial_risk(
	period: Optional[int] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	p = resolve_period(game, period)
	rows = await _fetch(reports.financial_risk_report(store, game.id, p), game, "financial risk")
	return _envelope(game, p, rows=rows, summary=summarize_financial_risk(rows))


@router.get("/governance")
async def governance(
	period: Optional[int] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	p = resolve_period(game, period)
	rows = await _fetch(reports.governance_report(store, game.id, p), game, "governance")
	return _envelope(game, p, rows=rows)


@router.get("/strategy")
async def strategy(
	period: Optional[int] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	p = resolve_period(game, period)
	rows = await _fetch(reports.strategy_report(store, game.id, p), game, "strategy")
	return _envelope(game, p, rows=rows, summary=summarize_strategy(rows))


@router.get("/pricing")
async def pricing(
	period: Optional[int] = None,
	locale: Optional[str] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	p = resolve_period(game, period)
	report = await _fetch(reports.pricing_report(store, game.id, p, resolve_locale(locale)), game, "pricing")
	return _envelope(game, p, report=report)


@router.get("/quality")
async def quality(
	period: Optional[int] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	p = resolve_period(game, period)
	rows = await _fetch(reports.quality_report(store, game.id, p), game, "quality")
	return _envelope(game, p, rows=rows)


@router.get("/lost-revenue")
async def lost_revenue(
	period: Optional[int] = None,
	locale: Optional[str] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	p = resolve_period(game, period)
	rows = await _fetch(reports.lost_revenue_report(store, game.id, p, resolve_locale(locale)), game, "lost revenue")
	ordered = sorted(rows, key=lambda r: r.total_lost_revenue, reverse=True)
	return _envelope(
		game,
		p,
		rows=ordered,
		aggregate_loss=sum(r.total_lost_revenue for r in rows),
	)


@router.get("/timeseries")
async def timeseries(
	locale: Optional[str] = None,
	game: GameInfo = Depends(get_accessible_game),
	store: VariableStore = Depends(get_store),
):
	dataset = await _fetch(
		reports.timeseries_report(store, game.id, game.last_processed_period, resolve_locale(locale)),
		game,
		"timeseries",
	)
	return {"game": game.code, "max_period": game.last_processed_period, "timeseries": dataset}
