from __future__ import annotations
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict

from ..i18n import adequate_takeaway, idle_takeaway, overload_takeaway, service_label
from ..store import Snapshots
from . import codes
from .base import ReportRow, percent

EfficiencyStatus = Literal["ok", "overload", "overcapacity"]

# Below this utilization (in %) a service line is flagged as idle.
IDLE_THRESHOLD = 70


class ServiceEfficiency(ReportRow):
	capacity: int
	volume_served: float
	utilization_rate: float
	unmet_demand: float
	status: EfficiencyStatus


class ServiceEfficiencyReport(BaseModel):
	model_config = ConfigDict(frozen=True)

	service: str
	service_key: str
	teams: List[ServiceEfficiency]
	takeaways: List[str]


def classify_efficiency(utilization_rate: float, unmet_demand: float) -> EfficiencyStatus:
	# Lost patients mean overload whatever the utilization says.
	if unmet_demand > 0:
		return "overload"
	if utilization_rate < IDLE_THRESHOLD:
		return "overcapacity"
	return "ok"


def compute_efficiency(team: str, team_number: int, capacity: float, attended: float, unmet_demand: float) -> ServiceEfficiency:
	utilization_rate = percent(attended, capacity)
	return ServiceEfficiency(
		team=team,
		team_number=team_number,
		capacity=round(capacity),
		volume_served=attended,
		utilization_rate=round(utilization_rate * 10) / 10,
		unmet_demand=unmet_demand,
		status=classify_efficiency(utilization_rate, unmet_demand),
	)


def efficiency_takeaways(teams: List[ServiceEfficiency], service: str, locale: str) -> List[str]:
	overloaded = [t for t in teams if t.status == "overload"]
	idle = [t for t in teams if t.status == "overcapacity"]
	takeaways: List[str] = []
	if overloaded:
		total_lost = sum(t.unmet_demand for t in overloaded)
		takeaways.append(overload_takeaway([t.team for t in overloaded], total_lost, service, locale))
	if idle:
		takeaways.append(idle_takeaway([t.team for t in idle], service, locale))
	if not overloaded and not idle and teams:
		takeaways.append(adequate_takeaway(service, locale))
	return takeaways


def analyze_efficiency(snapshots: Snapshots, locale: str = "pt") -> Dict[str, ServiceEfficiencyReport]:
	result: Dict[str, ServiceEfficiencyReport] = {}
	for svc in codes.SERVICE_LINES:
		limit_code = codes.limit(svc.suffix)
		teams: List[ServiceEfficiency] = []
		for number in sorted(snapshots):
			snap = snapshots[number]
			demand = snap.get(codes.demand(svc.suffix))
			# Inpatient care has no capacity limit upstream; current demand stands in for it.
			capacity = (snap.get(limit_code) or demand) if limit_code else demand
			teams.append(
				compute_efficiency(
					snap.team_name,
					snap.team_number,
					capacity,
					snap.get(codes.attended(svc.suffix)),
					snap.get(codes.lost(svc.suffix)),
				)
			)
		label = service_label(svc.key, locale)
		result[svc.key] = ServiceEfficiencyReport(
			service=label,
			service_key=svc.key,
			teams=teams,
			takeaways=efficiency_takeaways(teams, label, locale),
		)
	return result
