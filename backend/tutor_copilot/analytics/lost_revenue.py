"""Revenue lost to capacity problems.

Overload loses the net revenue of every patient turned away; idleness loses
the contribution margin that the idle capacity could have earned. Inpatient
care has no idleness figure upstream, so only its overload side is counted.
"""
from __future__ import annotations
from typing import List, Literal

from pydantic import BaseModel, ConfigDict

from .. import i18n
from ..store import Snapshots, TeamSnapshot
from . import codes
from .base import ReportRow, per_unit, percent

DominantType = Literal["overload", "idleness", "balanced"]

# One cause dominates when it exceeds the other by this factor.
DOMINANCE_FACTOR = 1.5


class ServiceLostRevenue(BaseModel):
	model_config = ConfigDict(frozen=True)

	service: str
	service_key: str
	lost_volume: float
	revenue_per_unit: float
	lost_revenue: float
	idleness: float
	margin_per_unit: float
	idleness_revenue: float
	dominant_type: DominantType


class LostRevenueRow(ReportRow):
	services: List[ServiceLostRevenue]
	overload_loss: float
	idleness_loss: float
	total_lost_revenue: float
	total_net_revenue: float
	pct_revenue_lost: float
	dominant_type: DominantType


def dominant_type(overload_loss: float, idleness_loss: float) -> DominantType:
	if overload_loss > idleness_loss * DOMINANCE_FACTOR:
		return "overload"
	if idleness_loss > overload_loss * DOMINANCE_FACTOR:
		return "idleness"
	return "balanced"


def service_lost_revenue(snap: TeamSnapshot, svc: codes.ServiceLine, locale: str) -> ServiceLostRevenue:
	attended = snap.get(codes.attended(svc.suffix))
	revenue_per_unit = per_unit(snap.get(codes.net_revenue(svc.suffix)), attended)
	lost_volume = snap.get(codes.lost(svc.suffix))
	lost_revenue = lost_volume * revenue_per_unit

	idleness_code = codes.idleness(svc.suffix)
	idleness = snap.get(idleness_code) if idleness_code else 0.0
	margin_per_unit = per_unit(snap.get(codes.contribution_margin(svc.suffix)), attended)
	idleness_revenue = idleness * margin_per_unit

	return ServiceLostRevenue(
		service=i18n.service_label(svc.key, locale),
		service_key=svc.key,
		lost_volume=lost_volume,
		revenue_per_unit=revenue_per_unit,
		lost_revenue=lost_revenue,
		idleness=idleness,
		margin_per_unit=margin_per_unit,
		idleness_revenue=idleness_revenue,
		dominant_type=dominant_type(lost_revenue, idleness_revenue),
	)


def analyze_lost_revenue(snapshots: Snapshots, locale: str = "pt") -> List[LostRevenueRow]:
	rows: List[LostRevenueRow] = []
	for number in sorted(snapshots):
		snap = snapshots[number]
		services = [service_lost_revenue(snap, svc, locale) for svc in codes.SERVICE_LINES]
		overload_loss = sum(s.lost_revenue for s in services)
		idleness_loss = sum(s.idleness_revenue for s in services)
		total_lost = overload_loss + idleness_loss
		total_net_revenue = sum(snap.get(codes.net_revenue(svc.suffix)) for svc in codes.SERVICE_LINES)
		rows.append(
			LostRevenueRow(
				team=snap.team_name,
				team_number=snap.team_number,
				services=services,
				overload_loss=overload_loss,
				idleness_loss=idleness_loss,
				total_lost_revenue=total_lost,
				total_net_revenue=total_net_revenue,
				pct_revenue_lost=percent(total_lost, total_net_revenue),
				dominant_type=dominant_type(overload_loss, idleness_loss),
			)
		)
	return rows
