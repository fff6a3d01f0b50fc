from __future__ import annotations
from typing import List, NamedTuple, Optional

# Service lines as the simulator names them in variable codes.
EMERGENCY = "prontoAtendimento"
INPATIENT = "internacao"
SURGERY = "altaComplexidade"


class ServiceLine(NamedTuple):
	key: str
	suffix: str
	short: str
	# Only emergency and surgery have explicit capacity limits and idleness.
	has_limit: bool


SERVICE_LINES: List[ServiceLine] = [
	ServiceLine("emergency", EMERGENCY, "PA", True),
	ServiceLine("inpatient", INPATIENT, "INT", False),
	ServiceLine("surgery", SURGERY, "AC", True),
]


def attended(suffix: str) -> str:
	return f"atendimentos_{suffix}"


def lost(suffix: str) -> str:
	return f"atendimentosPerdidos{suffix}"


def demand(suffix: str) -> str:
	return f"demandaFinal_{suffix}"


def limit(suffix: str) -> Optional[str]:
	return f"limites_{suffix}" if suffix != INPATIENT else None


def idleness(suffix: str) -> Optional[str]:
	return f"ociosidade_{suffix}" if suffix != INPATIENT else None


def net_revenue(suffix: str) -> str:
	return f"receita_liquida_{suffix}"


def contribution_margin(suffix: str) -> str:
	return f"margem_contribuicao_{suffix}"


EFFICIENCY_CODES: List[str] = [
	code
	for svc in SERVICE_LINES
	for code in (attended(svc.suffix), lost(svc.suffix), demand(svc.suffix), limit(svc.suffix), idleness(svc.suffix))
	if code
]

PROFITABILITY_FIELDS = {
	"total_revenue": "receita_total_{}",
	"disallowances": "glosa_{}",
	"defaults": "inadimplenciaParticulares{}",
	"net_revenue": "receita_liquida_{}",
	"input_costs": "custo_insumos_{}",
	"labor_costs": "custo_pessoal_{}",
	"contribution_margin": "margem_contribuicao_{}",
	"margin_percent": "percentual_total_margem_contribuicao_{}",
}

PROFITABILITY_CODES: List[str] = [
	pattern.format(svc.suffix) for pattern in PROFITABILITY_FIELDS.values() for svc in SERVICE_LINES
]

SHARE_PRICE = "valor_acao"
NET_REVENUE = "receitaLiquidaTotal"
NET_OPERATING_INCOME = "resultadoOperacionalLiquido"
ACCUMULATED_OPERATING_INCOME = "resultadoOperacionalLiquidoAcumulado"
LIVES_ATTENDED = "vidasAtendidas"
REGISTERED_DOCTORS = "medicosCadastrados"
NWC = "capitalCirculanteLiq"
EQUITY = "patrimonioLiquido"
OVERALL_RANKING = "colocacaoRankingPeriodo"
ENDING_CASH = "saldoFinal"
GROSS_RESULT = "resultadoBruto"
GOVERNANCE = "governancaCorporativa"

BENCHMARKING_CODES: List[str] = [
	SHARE_PRICE,
	NET_REVENUE,
	NET_OPERATING_INCOME,
	ACCUMULATED_OPERATING_INCOME,
	LIVES_ATTENDED,
	REGISTERED_DOCTORS,
	NWC,
	EQUITY,
	OVERALL_RANKING,
	"numeroPontosPeriodo",
	ENDING_CASH,
	"receitasOperacionais",
	"despesasTotais",
	GROSS_RESULT,
	"resultadoAntesDosImpostos",
]

TIMESERIES_CODES: List[str] = [SHARE_PRICE, NET_REVENUE, NET_OPERATING_INCOME, GOVERNANCE]

FINANCIAL_RISK_CODES: List[str] = [
	ENDING_CASH,
	"saldoInicialTrimestre",
	NWC,
	EQUITY,
	"totalAtivo",
	"totalPassivo",
	"creditoRotativo",
	"utilizacaoCreditoRotativo",
	"hospitalPercentualCreditoRotativo",
	"despesaCreditoRotativo",
	"despesa_emprestimo",
	"taxa_juros_emprestimo",
	"planoEmergencial",
	NET_REVENUE,
]

GOVERNANCE_COMPONENTS = {
	"revolving_credit": "governancaCorporativa_creditoRotativo",
	"layoffs": "governancaCorporativa_totalDispensa",
	"overtime": "governancaCorporativa_usoMaoOBraExtra",
	"certifications": "governancaCorporativa_numeroCertificacoes",
	"transparency": "governancaCorporativa_liberouRelatoriosFinanceirosHospitais",
	"infection_rate": "governancaCorporativa_atratividadeParcial_taxaInfeccao",
}

GOVERNANCE_CODES: List[str] = [GOVERNANCE, *GOVERNANCE_COMPONENTS.values()]


class StrategyObjective(NamedTuple):
	key: str
	name: str
	code: str


# Names match the simulator's item_estrategia rows, used when a declared
# item carries no variable code.
STRATEGY_OBJECTIVES: List[StrategyObjective] = [
	StrategyObjective("share_price", "Preço da Ação", SHARE_PRICE),
	StrategyObjective("registered_doctors", "Médicos Cadastrados", REGISTERED_DOCTORS),
	StrategyObjective("net_revenue", "Receitas Op. Líquidas", NET_REVENUE),
	StrategyObjective("accumulated_result", "Resultado Op. Acumulado", ACCUMULATED_OPERATING_INCOME),
	StrategyObjective("nwc", "Capital Circulante Líq.", NWC),
	StrategyObjective("lives_attended", "Vidas Atendidas", LIVES_ATTENDED),
	StrategyObjective("governance", "Governança Corporativa", GOVERNANCE),
]

STRATEGY_RESULT_CODES: List[str] = [o.code for o in STRATEGY_OBJECTIVES]

PAYER_CHANNELS: List[str] = ["boaSaude", "goodShape", "healthy", "outras", "particulares", "tipTop", "unique"]

PRICE_DECISIONS = {
	EMERGENCY: "fdreceitapa",
	INPATIENT: "fdreceitaint",
	SURGERY: "fdreceitaaltacomplexidade",
}

PRICING_DECISION_CODES: List[str] = [*PRICE_DECISIONS.values(), *PAYER_CHANNELS]


def market_share(suffix: str) -> str:
	return f"marketShareAtendimentos{suffix}"


def market_average(suffix: str) -> str:
	return f"medias_{suffix}"


def channel_revenue(suffix: str, channel: str) -> str:
	return f"receita_servico_plano_{suffix}_{channel}"


def channel_attractiveness(suffix: str, channel: str) -> str:
	return f"atratividadeFinal_{suffix}_{channel}"


PRICING_RESULT_CODES: List[str] = [
	*(market_share(svc.suffix) for svc in SERVICE_LINES),
	*(market_average(svc.suffix) for svc in SERVICE_LINES),
	*(channel_revenue(svc.suffix, c) for svc in SERVICE_LINES for c in PAYER_CHANNELS),
	*(channel_attractiveness(svc.suffix, c) for svc in SERVICE_LINES for c in PAYER_CHANNELS),
]

QUALITY_FIELDS = {
	"infection_rate": "atratividadeParcial_taxaInfeccao",
	"infection_attractiveness": "atratividadeParcial_atratividade_Infeccao",
	"certification_attractiveness": "atratividadeParcial_certificacoesInternacionais",
	"certifications": "numeroCertificacoes",
	"accumulated_certification_investment": "investimentosAcumuladosCertificacao",
	"accumulated_infection_investment": "investimentosACumuladosControleInfeccao",
	"accumulated_waste_investment": "investimentosAcumuladosLixo",
	"regulatory_alerts": "alertaAnvisa",
	"regulatory_inspections": "fiscalizacaoAnvisa",
	"regulatory_fines": "multaAnvisa",
	"certification_successes": "sucessoCertificacoes",
	"period_certification_investment": "fdinvestimentocertificaointernacional",
	"period_infection_investment": "fdinvestimentocontroleinfeccao",
	"waste_outsourcing_spend": "gastosEmTerceirizacaoDelixo",
	"governance_infection_grade": "governancaCorporativa_atratividadeParcial_taxaInfeccao",
}

QUALITY_CODES: List[str] = list(QUALITY_FIELDS.values())

LOST_REVENUE_CODES: List[str] = [
	code
	for svc in SERVICE_LINES
	for code in (
		idleness(svc.suffix),
		lost(svc.suffix),
		net_revenue(svc.suffix),
		attended(svc.suffix),
		contribution_margin(svc.suffix),
		limit(svc.suffix),
		demand(svc.suffix),
	)
	if code
]
