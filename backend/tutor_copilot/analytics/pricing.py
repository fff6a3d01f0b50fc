from __future__ import annotations
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .. import i18n
from ..store import Snapshots, TeamSnapshot
from . import codes
from .base import ReportRow

PricePosition = Literal["above", "below"]

# Prices within +/-5% of the group average are not labelled.
POSITION_BAND = 0.05


class ServicePricing(BaseModel):
	model_config = ConfigDict(frozen=True)

	price: float
	market_share: float
	# published by the simulator; position is measured against group_average
	market_average: float
	group_average: float
	position: Optional[PricePosition] = None


class PricingRow(ReportRow):
	services: Dict[str, ServicePricing]
	avg_price: float
	total_market_share: float
	accepted_channels: Dict[str, bool]
	# None where the channel is not accepted (not applicable, not zero)
	revenue_by_channel: Dict[str, Optional[float]]
	attractiveness_by_channel: Dict[str, Optional[float]]


class PricingReport(BaseModel):
	model_config = ConfigDict(frozen=True)

	market_averages: Dict[str, float]
	group_averages: Dict[str, float]
	rows: List[PricingRow]
	highest_price: str | None
	lowest_price: str | None
	market_share_leader: str | None


def price_position(price: float, reference: float) -> Optional[PricePosition]:
	if price > reference * (1 + POSITION_BAND):
		return "above"
	if price < reference * (1 - POSITION_BAND):
		return "below"
	return None


def market_averages(results: Snapshots) -> Dict[str, float]:
	"""Published market average price per service line, 0 where none is published.

	The simulator publishes the same average to every team, so the first team
	reporting one wins.
	"""
	averages: Dict[str, float] = {}
	for svc in codes.SERVICE_LINES:
		published = [snap.get(codes.market_average(svc.suffix)) for _, snap in sorted(results.items())]
		averages[svc.key] = next((v for v in published if v), 0.0)
	return averages


def group_averages(decisions: Snapshots, team_numbers: List[int]) -> Dict[str, float]:
	"""Mean declared price per service line over every listed team.

	A team without a decision counts as price 0.
	"""
	averages: Dict[str, float] = {}
	for svc in codes.SERVICE_LINES:
		code = codes.PRICE_DECISIONS[svc.suffix]
		prices = [decisions[n].get(code) if n in decisions else 0.0 for n in team_numbers]
		averages[svc.key] = sum(prices) / len(prices) if prices else 0.0
	return averages


def _channel_figures(dec: Optional[TeamSnapshot], res: Optional[TeamSnapshot]):
	accepted: Dict[str, bool] = {}
	revenue: Dict[str, Optional[float]] = {}
	attractiveness: Dict[str, Optional[float]] = {}
	for channel in codes.PAYER_CHANNELS:
		accepted[channel] = dec is not None and dec.get(channel) == 1
		if not accepted[channel]:
			revenue[channel] = None
			attractiveness[channel] = None
			continue
		revenue[channel] = sum(res.get(codes.channel_revenue(svc.suffix, channel)) for svc in codes.SERVICE_LINES) if res else 0.0
		total_attr = sum(res.get(codes.channel_attractiveness(svc.suffix, channel)) for svc in codes.SERVICE_LINES) if res else 0.0
		attractiveness[channel] = total_attr / len(codes.SERVICE_LINES)
	return accepted, revenue, attractiveness


def analyze_pricing(decisions: Snapshots, results: Snapshots, locale: str = "pt") -> PricingReport:
	team_numbers = sorted(set(decisions) | set(results))
	published = market_averages(results)
	group = group_averages(decisions, team_numbers)
	rows: List[PricingRow] = []
	for number in team_numbers:
		dec = decisions.get(number)
		res = results.get(number)
		name = (dec.team_name if dec else None) or (res.team_name if res else None) or i18n.team_fallback_name(number, locale)

		services: Dict[str, ServicePricing] = {}
		for svc in codes.SERVICE_LINES:
			price = dec.get(codes.PRICE_DECISIONS[svc.suffix]) if dec else 0.0
			services[svc.key] = ServicePricing(
				price=price,
				market_share=res.get(codes.market_share(svc.suffix)) if res else 0.0,
				market_average=published[svc.key],
				group_average=group[svc.key],
				position=price_position(price, group[svc.key]),
			)
		accepted, revenue, attractiveness = _channel_figures(dec, res)
		rows.append(
			PricingRow(
				team=name,
				team_number=number,
				services=services,
				avg_price=sum(s.price for s in services.values()) / len(services),
				total_market_share=sum(s.market_share for s in services.values()),
				accepted_channels=accepted,
				revenue_by_channel=revenue,
				attractiveness_by_channel=attractiveness,
			)
		)

	by_price = sorted(rows, key=lambda r: r.avg_price, reverse=True)
	by_share = sorted(rows, key=lambda r: r.total_market_share, reverse=True)
	return PricingReport(
		market_averages=published,
		group_averages=group,
		rows=rows,
		highest_price=by_price[0].team if by_price else None,
		lowest_price=by_price[-1].team if by_price else None,
		market_share_leader=by_share[0].team if by_share else None,
	)
