from __future__ import annotations
from pydantic import BaseModel, ConfigDict


class ReportRow(BaseModel):
	"""One derived row; every report row carries the display name and the join key."""
	model_config = ConfigDict(frozen=True)

	team: str
	team_number: int


def safe_div(numerator: float, denominator: float) -> float:
	# Ratios never propagate NaN or infinity: an empty denominator yields 0.
	if denominator == 0:
		return 0.0
	return numerator / denominator


def per_unit(amount: float, volume: float) -> float:
	"""Amount per unit of volume; 0 when the volume is zero or negative."""
	if volume <= 0:
		return 0.0
	return amount / volume


def percent(part: float, whole: float) -> float:
	return per_unit(part, whole) * 100
