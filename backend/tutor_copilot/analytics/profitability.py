from __future__ import annotations
from typing import Dict, List

from pydantic import BaseModel, ConfigDict

from .. import i18n
from ..store import Snapshots
from . import codes
from .base import ReportRow


class ProfitabilityRow(ReportRow):
	service: str
	service_key: str
	total_revenue: float
	disallowances: float
	defaults: float
	net_revenue: float
	input_costs: float
	labor_costs: float
	contribution_margin: float
	margin_percent: float


class ServiceProfitability(BaseModel):
	model_config = ConfigDict(frozen=True)

	service: str
	service_key: str
	rows: List[ProfitabilityRow]
	average_margin: float
	takeaways: List[str]


def analyze_profitability(snapshots: Snapshots, locale: str = "pt") -> List[ProfitabilityRow]:
	"""Select the upstream revenue/cost roll-up per (team, service line).

	All figures are computed by the simulator; nothing is derived here.
	"""
	rows: List[ProfitabilityRow] = []
	for number in sorted(snapshots):
		snap = snapshots[number]
		for svc in codes.SERVICE_LINES:
			values = {field: snap.get(pattern.format(svc.suffix)) for field, pattern in codes.PROFITABILITY_FIELDS.items()}
			rows.append(
				ProfitabilityRow(
					team=snap.team_name,
					team_number=snap.team_number,
					service=i18n.service_label(svc.key, locale),
					service_key=svc.key,
					**values,
				)
			)
	return rows


def margin_takeaways(rows: List[ProfitabilityRow], service: str, locale: str) -> List[str]:
	"""Best / worst / average margin lines for rows already sorted by margin descending."""
	if not rows:
		return []
	best, worst = rows[0], rows[-1]
	average = sum(r.margin_percent for r in rows) / len(rows)
	worst_line = f"{i18n.text('worst_margin', locale)}: {worst.team} ({worst.margin_percent:.1f}%)"
	if worst.margin_percent < 0:
		worst_line += f", {i18n.text('operating_at_loss', locale)}"
	return [
		f"{i18n.text('best_margin', locale)}: {best.team} ({best.margin_percent:.1f}%, "
		f"{i18n.text('contribution_margin', locale)} {i18n.format_number(best.contribution_margin, locale)})",
		worst_line,
		f"{i18n.text('group_average', locale)}: {average:.1f}% {i18n.text('contribution_margin_in', locale)} {service}",
	]


def group_by_service(rows: List[ProfitabilityRow], locale: str = "pt") -> Dict[str, ServiceProfitability]:
	result: Dict[str, ServiceProfitability] = {}
	for svc in codes.SERVICE_LINES:
		# sorted() is stable, so equal margins keep team order
		svc_rows = sorted((r for r in rows if r.service_key == svc.key), key=lambda r: r.margin_percent, reverse=True)
		if not svc_rows:
			continue
		label = i18n.service_label(svc.key, locale)
		result[svc.key] = ServiceProfitability(
			service=label,
			service_key=svc.key,
			rows=svc_rows,
			average_margin=sum(r.margin_percent for r in svc_rows) / len(svc_rows),
			takeaways=margin_takeaways(svc_rows, label, locale),
		)
	return result
