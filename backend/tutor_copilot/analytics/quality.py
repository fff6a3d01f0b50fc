from __future__ import annotations
from typing import List, Literal

from ..store import Snapshots
from . import codes
from .base import ReportRow

QualityStatus = Literal["excellent", "adequate", "critical"]

# More regulatory alerts than this in a quarter is critical on its own.
ALERT_LIMIT = 2


class QualityRow(ReportRow):
	infection_rate: float
	infection_attractiveness: float
	certification_attractiveness: float
	certifications: float
	accumulated_certification_investment: float
	accumulated_infection_investment: float
	accumulated_waste_investment: float
	regulatory_alerts: float
	regulatory_inspections: float
	regulatory_fines: float
	certification_successes: float
	period_certification_investment: float
	period_infection_investment: float
	waste_outsourcing_spend: float
	governance_infection_grade: float
	quality_status: QualityStatus


def classify_quality(fines: float, alerts: float, certifications: float) -> QualityStatus:
	if fines > 0 or alerts > ALERT_LIMIT:
		return "critical"
	if certifications > 0 and fines == 0:
		return "excellent"
	return "adequate"


def analyze_quality(snapshots: Snapshots) -> List[QualityRow]:
	rows: List[QualityRow] = []
	for number in sorted(snapshots):
		snap = snapshots[number]
		values = {field: snap.get(code) for field, code in codes.QUALITY_FIELDS.items()}
		rows.append(
			QualityRow(
				team=snap.team_name,
				team_number=snap.team_number,
				quality_status=classify_quality(values["regulatory_fines"], values["regulatory_alerts"], values["certifications"]),
				**values,
			)
		)
	return rows
