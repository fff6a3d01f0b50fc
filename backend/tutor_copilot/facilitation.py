"""Facilitation guide: a structured summary of the quarter handed to the text service.

The returned prose is passed through untouched; when the service fails the
caller gets the error, never a made-up guide.
"""
from __future__ import annotations
import asyncio
import logging
from collections import OrderedDict
from typing import Dict, List, Protocol

from pydantic import BaseModel

from .analytics.benchmarking import BenchmarkRow
from .analytics.efficiency import ServiceEfficiencyReport
from .analytics.profitability import ProfitabilityRow
from .games import GameInfo, TeamInfo
from .i18n import resolve_locale
from .llm_client import LLMError
from .reports import benchmarking_report, efficiency_report, profitability_report
from .store import VariableStore

logger = logging.getLogger(__name__)


class GuideGenerationError(RuntimeError):
	pass


class TextGenerator(Protocol):
	async def generate(self, prompt: str, *, max_tokens: int | None = None) -> str: ...


class FacilitationGuide(BaseModel):
	content: str
	game: str
	period: int
	teams: int


def _millions(value: float) -> str:
	return f"R${value / 1e6:.1f}M"


def _names_or_none(items: List[str]) -> str:
	return ", ".join(items) if items else "nenhum"


def efficiency_summary(efficiency: Dict[str, ServiceEfficiencyReport]) -> str:
	blocks = []
	for report in efficiency.values():
		overloaded = [f"{t.team} ({t.unmet_demand:g} perdidos, {t.utilization_rate:g}%)" for t in report.teams if t.unmet_demand > 0]
		idle = [f"{t.team} ({t.utilization_rate:g}%)" for t in report.teams if t.status == "overcapacity"]
		ok = [f"{t.team} ({t.utilization_rate:g}%)" for t in report.teams if t.status == "ok"]
		blocks.append(
			f"{report.service}:\n"
			f"  Sobrecarga: {_names_or_none(overloaded)}\n"
			f"  Ociosidade: {_names_or_none(idle)}\n"
			f"  OK: {_names_or_none(ok)}"
		)
	return "\n\n".join(blocks)


def profitability_summary(rows: List[ProfitabilityRow]) -> str:
	by_team: "OrderedDict[str, List[str]]" = OrderedDict()
	for r in rows:
		by_team.setdefault(r.team, []).append(
			f"{r.service}: receita bruta {_millions(r.total_revenue)}, glosa {_millions(r.disallowances)}, "
			f"margem contribuição {r.margin_percent:.1f}%"
		)
	return "\n\n".join(f"{team}:\n  " + "\n  ".join(lines) for team, lines in by_team.items())


def benchmarking_summary(rows: List[BenchmarkRow]) -> str:
	return "\n".join(
		f"#{b.overall_ranking} {b.team}: ação R${b.share_price:.2f}, receita {_millions(b.net_revenue)}, "
		f"resultado op. {_millions(b.net_operating_income)} (margem {b.operating_margin:.1f}%), "
		f"{b.patients_attended:g} vidas, {b.registered_doctors:g} médicos"
		for b in rows
	)


_LANGUAGE_RULE = {
	"pt": "Escreva em português brasileiro",
	"en": "Write in English",
}


def build_facilitation_prompt(
	game: GameInfo,
	teams: List[TeamInfo],
	period: int,
	efficiency: Dict[str, ServiceEfficiencyReport],
	profitability: List[ProfitabilityRow],
	benchmarking: List[BenchmarkRow],
	locale: str = "pt",
) -> str:
	team_names = ", ".join(t.name for t in teams)
	return f"""Você é um consultor especialista em jogos de simulação de hospitais. Analise os dados abaixo do Trimestre {period} do jogo "{game.code}" ({game.simulation_name}) com {len(teams)} equipes competindo: {team_names}.

## DADOS DE EFICIÊNCIA OPERACIONAL (Capacidade vs Demanda)

{efficiency_summary(efficiency)}

## DADOS DE LUCRATIVIDADE (por linha de serviço)

{profitability_summary(profitability)}

## RANKING GERAL (Benchmarking)

{benchmarking_summary(benchmarking)}

---

Com base nestes dados, gere um Guia de Facilitação para o tutor/professor que vai conduzir a discussão em sala. O guia deve conter:

1. **RESUMO EXECUTIVO** (3-4 frases): Visão geral do trimestre: quem está se destacando, quais são as principais tensões competitivas.

2. **PERGUNTAS DE ABERTURA** (3 perguntas): Perguntas provocativas para abrir a discussão, sem revelar diretamente os dados mas estimulando reflexão.

3. **ANÁLISE POR TEMA**: Para cada tema abaixo, forneça 2 perguntas direcionadas e 1 insight que o tutor pode usar:
   - Gestão de Capacidade (eficiência operacional)
   - Estratégia de Preços e Receita (lucratividade)
   - Posicionamento Competitivo (benchmarking)

4. **DESTAQUES PARA DISCUSSÃO** (3-4 bullets): Situações específicas de equipes que merecem atenção: decisões ousadas, erros evidentes, recuperações, ou estratégias divergentes.

5. **PERGUNTA DE ENCERRAMENTO** (1 pergunta): Uma pergunta reflexiva para fechar a sessão, conectando os aprendizados ao mundo real da gestão hospitalar.

Regras:
- Use linguagem profissional mas acessível
- Referencie equipes pelo nome
- Inclua números específicos quando relevante
- {_LANGUAGE_RULE[resolve_locale(locale)]}
- Use formatação markdown"""


async def generate_facilitation_guide(
	store: VariableStore,
	client: TextGenerator,
	game: GameInfo,
	teams: List[TeamInfo],
	period: int,
	locale: str = "pt",
) -> FacilitationGuide:
	# The summary always uses the Portuguese service labels the prompt is written in.
	efficiency, profitability, benchmarking = await asyncio.gather(
		efficiency_report(store, game.id, period, "pt"),
		profitability_report(store, game.id, period, "pt"),
		benchmarking_report(store, game.id, period),
	)
	prompt = build_facilitation_prompt(game, teams, period, efficiency, profitability, benchmarking, locale)
	try:
		content = await client.generate(prompt)
	except LLMError as err:
		logger.warning("facilitation guide for game %s period %s failed: %s", game.id, period, err)
		raise GuideGenerationError(str(err)) from err
	return FacilitationGuide(content=content, game=game.code, period=period, teams=len(teams))
