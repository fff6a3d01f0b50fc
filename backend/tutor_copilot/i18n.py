"""Labels and takeaway phrasing in the two dashboard languages."""
from __future__ import annotations
from typing import Dict, List

from .settings import settings

LOCALES = ("pt", "en")

SERVICE_LABELS: Dict[str, Dict[str, str]] = {
	"pt": {
		"emergency": "Pronto Atendimento",
		"inpatient": "Internação sem Cirurgia",
		"surgery": "Cirurgia / Alta Complexidade",
	},
	"en": {
		"emergency": "Emergency Care",
		"inpatient": "Hospitalization without Surgery",
		"surgery": "Surgery / High Complexity",
	},
}


def resolve_locale(locale: str | None) -> str:
	loc = (locale or settings.default_locale or "pt").lower()[:2]
	return loc if loc in LOCALES else "pt"


def service_label(service_key: str, locale: str) -> str:
	return SERVICE_LABELS[resolve_locale(locale)][service_key]


def team_fallback_name(team_number: int, locale: str) -> str:
	return f"Team {team_number}" if resolve_locale(locale) == "en" else f"Equipe {team_number}"


def format_number(value: float, locale: str) -> str:
	# 12,345 in English, 12.345 in Portuguese
	text = f"{round(value):,}"
	return text if resolve_locale(locale) == "en" else text.replace(",", ".")


def join_names(names: List[str]) -> str:
	return ", ".join(names)


def overload_takeaway(names: List[str], total_lost: float, service: str, locale: str) -> str:
	joined = join_names(names)
	many = len(names) > 1
	lost = format_number(total_lost, locale)
	if resolve_locale(locale) == "en":
		return f"{joined} {'are' if many else 'is'} overloaded in {service}: {lost} patients lost this quarter."
	return f"{joined} {'estão' if many else 'está'} com sobrecarga em {service}: {lost} atendimentos perdidos no trimestre."


def idle_takeaway(names: List[str], service: str, locale: str) -> str:
	joined = join_names(names)
	many = len(names) > 1
	if resolve_locale(locale) == "en":
		return (
			f"{joined} {'operate' if many else 'operates'} with high idle capacity in {service}: "
			"underutilized capacity generates fixed costs without corresponding revenue."
		)
	return (
		f"{joined} opera{'m' if many else ''} com alta ociosidade em {service}: "
		"capacidade subutilizada gera custo fixo sem receita correspondente."
	)


def adequate_takeaway(service: str, locale: str) -> str:
	if resolve_locale(locale) == "en":
		return f"All teams operate within adequate range in {service}."
	return f"Todas as equipes operam dentro da faixa adequada em {service}."


_TEXT: Dict[str, Dict[str, str]] = {
	"pt": {
		"best_margin": "Melhor margem",
		"worst_margin": "Pior margem",
		"group_average": "Média do grupo",
		"contribution_margin": "margem de contribuição",
		"contribution_margin_in": "de margem de contribuição em",
		"operating_at_loss": "operando no prejuízo nesta linha",
	},
	"en": {
		"best_margin": "Best margin",
		"worst_margin": "Worst margin",
		"group_average": "Group average",
		"contribution_margin": "contribution margin",
		"contribution_margin_in": "contribution margin in",
		"operating_at_loss": "operating at a loss in this line",
	},
}


def text(key: str, locale: str) -> str:
	return _TEXT[resolve_locale(locale)][key]
