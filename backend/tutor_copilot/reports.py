"""Fetch-then-derive entry points, one per report.

Each function asks the store for the codes its analyzer needs and hands the
pivoted snapshots to the pure analyzer. Store errors propagate unchanged.
"""
from __future__ import annotations
import asyncio
from typing import Dict, List

from .analytics import codes
from .analytics.benchmarking import BenchmarkRow, analyze_benchmarking
from .analytics.efficiency import ServiceEfficiencyReport, analyze_efficiency
from .analytics.financial_risk import RiskRow, analyze_financial_risk
from .analytics.governance import GovernanceRow, analyze_governance
from .analytics.lost_revenue import LostRevenueRow, analyze_lost_revenue
from .analytics.pricing import PricingReport, analyze_pricing
from .analytics.profitability import ProfitabilityRow, analyze_profitability
from .analytics.quality import QualityRow, analyze_quality
from .analytics.strategy import AlignmentRow, analyze_strategy
from .analytics.timeseries import TimeseriesDataset, analyze_timeseries
from .store import VariableStore


async def efficiency_report(store: VariableStore, group_id: int, period: int, locale: str = "pt") -> Dict[str, ServiceEfficiencyReport]:
	snapshots = await store.fetch_variables(group_id, period, codes.EFFICIENCY_CODES)
	return analyze_efficiency(snapshots, locale)


async def profitability_report(store: VariableStore, group_id: int, period: int, locale: str = "pt") -> List[ProfitabilityRow]:
	snapshots = await store.fetch_variables(group_id, period, codes.PROFITABILITY_CODES)
	return analyze_profitability(snapshots, locale)


async def benchmarking_report(store: VariableStore, group_id: int, period: int) -> List[BenchmarkRow]:
	snapshots = await store.fetch_variables(group_id, period, codes.BENCHMARKING_CODES)
	return analyze_benchmarking(snapshots)


async def financial_risk_report(store: VariableStore, group_id: int, period: int) -> List[RiskRow]:
	snapshots = await store.fetch_variables(group_id, period, codes.FINANCIAL_RISK_CODES)
	return analyze_financial_risk(snapshots)


async def governance_report(store: VariableStore, group_id: int, period: int) -> List[GovernanceRow]:
	snapshots = await store.fetch_variables(group_id, period, codes.GOVERNANCE_CODES)
	return analyze_governance(snapshots)


async def strategy_report(store: VariableStore, group_id: int, period: int) -> List[AlignmentRow]:
	weights, snapshots = await asyncio.gather(
		store.fetch_strategy_weights(group_id),
		store.fetch_variables(group_id, period, codes.STRATEGY_RESULT_CODES),
	)
	return analyze_strategy(snapshots, weights)


async def pricing_report(store: VariableStore, group_id: int, period: int, locale: str = "pt") -> PricingReport:
	decisions, results = await asyncio.gather(
		store.fetch_decisions(group_id, period, codes.PRICING_DECISION_CODES),
		store.fetch_variables(group_id, period, codes.PRICING_RESULT_CODES),
	)
	return analyze_pricing(decisions, results, locale)


async def quality_report(store: VariableStore, group_id: int, period: int) -> List[QualityRow]:
	snapshots = await store.fetch_variables(group_id, period, codes.QUALITY_CODES)
	return analyze_quality(snapshots)


async def lost_revenue_report(store: VariableStore, group_id: int, period: int, locale: str = "pt") -> List[LostRevenueRow]:
	snapshots = await store.fetch_variables(group_id, period, codes.LOST_REVENUE_CODES)
	return analyze_lost_revenue(snapshots, locale)


async def timeseries_report(store: VariableStore, group_id: int, max_period: int, locale: str = "pt") -> TimeseriesDataset:
	by_period = await store.fetch_all_periods(group_id, max_period, codes.TIMESERIES_CODES)
	return analyze_timeseries(by_period, max_period, locale)
