"""Domain layer for agencyledger application."""

from agencyledger.domain.client import ClientService
from agencyledger.domain.project import ProjectService
from agencyledger.domain.cost import CostService
from agencyledger.domain.report import ReportService
from agencyledger.domain.settings import SettingsService
from agencyledger.domain.metrics import MetricsService
from agencyledger.domain.advice import AdviceService
from agencyledger.domain.store import FinanceStore

__all__ = [
    "ClientService",
    "ProjectService",
    "CostService",
    "ReportService",
    "SettingsService",
    "MetricsService",
    "AdviceService",
    "FinanceStore",
]
