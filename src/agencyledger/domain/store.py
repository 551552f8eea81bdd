"""State store: pure transitions keyed by action type.

Every transition takes the previous FinanceState and an action payload and
returns a new FinanceState; nothing is mutated in place. FinanceStore owns
the current state, runs transitions and persists the result after each one.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Callable, Optional

from agencyledger.domain.entities import (
    Client,
    Cost,
    CostCategory,
    FinanceState,
    FinancialReport,
    Project,
    ReportType,
    Settings,
    ViewMode,
    empty_costs,
    empty_reports,
)

logger = logging.getLogger(__name__)


class ActionType(str, Enum):
    """Names of every state transition."""

    ADD_CLIENT = "ADD_CLIENT"
    UPDATE_CLIENT = "UPDATE_CLIENT"
    DELETE_CLIENT = "DELETE_CLIENT"
    ADD_PROJECT = "ADD_PROJECT"
    UPDATE_PROJECT = "UPDATE_PROJECT"
    DELETE_PROJECT = "DELETE_PROJECT"
    ADD_COST = "ADD_COST"
    UPDATE_COST = "UPDATE_COST"
    DELETE_COST = "DELETE_COST"
    UPLOAD_FINANCIAL_REPORT = "UPLOAD_FINANCIAL_REPORT"
    DELETE_FINANCIAL_REPORT = "DELETE_FINANCIAL_REPORT"
    UPDATE_SETTINGS = "UPDATE_SETTINGS"
    CHANGE_FISCAL_YEAR = "CHANGE_FISCAL_YEAR"
    SET_VIEW_MODE = "SET_VIEW_MODE"
    LOAD_DATA = "LOAD_DATA"
    CLEAR_ALL_DATA = "CLEAR_ALL_DATA"


@dataclass(frozen=True)
class Action:
    """A requested transition and its payload."""

    type: ActionType
    payload: Any = None


@dataclass(frozen=True)
class ReportUpload:
    """Payload for applying a report to the current fiscal year."""

    report: FinancialReport
    file_name: Optional[str]
    uploaded_at: str


def initial_state(today: Optional[date] = None) -> FinanceState:
    """Return the empty state with default settings."""
    today = today or date.today()
    return FinanceState(settings=Settings(current_fiscal_year=today.year))


def _assign_id(state: FinanceState, entity):
    return replace(entity, id=state.next_id), state.next_id + 1


def _add_client(state: FinanceState, client: Client) -> FinanceState:
    client, next_id = _assign_id(state, client)
    return replace(state, clients=state.clients + (client,), next_id=next_id)


def _update_client(state: FinanceState, client: Client) -> FinanceState:
    return replace(
        state, clients=tuple(client if c.id == client.id else c for c in state.clients)
    )


def _delete_client(state: FinanceState, client_id: int) -> FinanceState:
    return replace(state, clients=tuple(c for c in state.clients if c.id != client_id))


def _add_project(state: FinanceState, project: Project) -> FinanceState:
    project, next_id = _assign_id(state, project)
    return replace(state, projects=state.projects + (project,), next_id=next_id)


def _update_project(state: FinanceState, project: Project) -> FinanceState:
    return replace(
        state, projects=tuple(project if p.id == project.id else p for p in state.projects)
    )


def _delete_project(state: FinanceState, project_id: int) -> FinanceState:
    return replace(state, projects=tuple(p for p in state.projects if p.id != project_id))


def _without_cost(
    costs: dict[CostCategory, tuple[Cost, ...]], cost_id: int
) -> dict[CostCategory, tuple[Cost, ...]]:
    return {
        category: tuple(c for c in entries if c.id != cost_id)
        for category, entries in costs.items()
    }


def _add_cost(state: FinanceState, cost: Cost) -> FinanceState:
    cost, next_id = _assign_id(state, cost)
    costs = dict(state.costs)
    costs[cost.category] = costs.get(cost.category, ()) + (cost,)
    return replace(state, costs=costs, next_id=next_id)


def _update_cost(state: FinanceState, cost: Cost) -> FinanceState:
    current = next((c for c in state.all_costs() if c.id == cost.id), None)
    if current is None:
        return state
    if current.category is cost.category:
        costs = dict(state.costs)
        costs[cost.category] = tuple(
            cost if c.id == cost.id else c for c in costs.get(cost.category, ())
        )
        return replace(state, costs=costs)

    costs = _without_cost(state.costs, cost.id)
    costs[cost.category] = costs.get(cost.category, ()) + (cost,)
    return replace(state, costs=costs)


def _delete_cost(state: FinanceState, cost_id: int) -> FinanceState:
    return replace(state, costs=_without_cost(state.costs, cost_id))


def _upload_report(state: FinanceState, upload: ReportUpload) -> FinanceState:
    fiscal_year = state.settings.current_fiscal_year
    report = upload.report
    stamped = replace(
        report,
        metadata=replace(
            report.metadata,
            fiscal_year=fiscal_year,
            upload_date=upload.uploaded_at,
            original_file_name=upload.file_name,
        ),
    )

    reports = dict(state.financial_reports)
    reports[report.report_type] = stamped

    historical = dict(state.historical_data)
    year_reports = dict(historical.get(fiscal_year, {}))
    year_reports[report.report_type] = stamped
    historical[fiscal_year] = year_reports

    logger.info("Stored %s report for FY %s", report.report_type.value, fiscal_year)
    return replace(state, financial_reports=reports, historical_data=historical)


def _delete_report(state: FinanceState, report_type: ReportType) -> FinanceState:
    reports = dict(state.financial_reports)
    reports[report_type] = None

    fiscal_year = state.settings.current_fiscal_year
    historical = dict(state.historical_data)
    if fiscal_year in historical:
        year_reports = dict(historical[fiscal_year])
        year_reports.pop(report_type, None)
        historical[fiscal_year] = year_reports

    return replace(state, financial_reports=reports, historical_data=historical)


def _update_settings(state: FinanceState, changes: dict[str, Any]) -> FinanceState:
    return replace(state, settings=replace(state.settings, **changes))


def _change_fiscal_year(state: FinanceState, fiscal_year: int) -> FinanceState:
    year_reports = state.historical_data.get(fiscal_year, {})
    reports = empty_reports()
    reports.update({report_type: year_reports.get(report_type) for report_type in ReportType})
    logger.info(
        "Changing fiscal year %s -> %s (%d archived reports)",
        state.settings.current_fiscal_year,
        fiscal_year,
        len(year_reports),
    )
    return replace(
        state,
        settings=replace(state.settings, current_fiscal_year=fiscal_year),
        financial_reports=reports,
    )


def _set_view_mode(state: FinanceState, view_mode: ViewMode) -> FinanceState:
    return replace(state, settings=replace(state.settings, view_mode=ViewMode(view_mode)))


def _load_data(state: FinanceState, loaded: FinanceState) -> FinanceState:
    costs = empty_costs()
    costs.update(loaded.costs)
    reports = empty_reports()
    reports.update(loaded.financial_reports)
    return replace(loaded, costs=costs, financial_reports=reports)


def _clear_all_data(state: FinanceState, today: Optional[date]) -> FinanceState:
    return initial_state(today)


TRANSITIONS: dict[ActionType, Callable[[FinanceState, Any], FinanceState]] = {
    ActionType.ADD_CLIENT: _add_client,
    ActionType.UPDATE_CLIENT: _update_client,
    ActionType.DELETE_CLIENT: _delete_client,
    ActionType.ADD_PROJECT: _add_project,
    ActionType.UPDATE_PROJECT: _update_project,
    ActionType.DELETE_PROJECT: _delete_project,
    ActionType.ADD_COST: _add_cost,
    ActionType.UPDATE_COST: _update_cost,
    ActionType.DELETE_COST: _delete_cost,
    ActionType.UPLOAD_FINANCIAL_REPORT: _upload_report,
    ActionType.DELETE_FINANCIAL_REPORT: _delete_report,
    ActionType.UPDATE_SETTINGS: _update_settings,
    ActionType.CHANGE_FISCAL_YEAR: _change_fiscal_year,
    ActionType.SET_VIEW_MODE: _set_view_mode,
    ActionType.LOAD_DATA: _load_data,
    ActionType.CLEAR_ALL_DATA: _clear_all_data,
}


def reduce(state: FinanceState, action: Action) -> FinanceState:
    """Apply one action to a state and return the new state."""
    transition = TRANSITIONS[ActionType(action.type)]
    return transition(state, action.payload)


class FinanceStore:
    """Owns the application state and persists it after every transition."""

    def __init__(self, db, today: Optional[date] = None):
        """Initialize the store.

        Args:
            db: StateRepository used to load and save the state blob
            today: Date used for defaults (current fiscal year); tests pin it
        """
        self.db = db
        self.today = today
        self._state: Optional[FinanceState] = None

    @property
    def state(self) -> FinanceState:
        """Current state, loaded from storage on first access."""
        if self._state is None:
            self._state = self._load()
        return self._state

    def _load(self) -> FinanceState:
        stored = self.db.load_state()
        if stored is None:
            return initial_state(self.today)
        return reduce(initial_state(self.today), Action(ActionType.LOAD_DATA, stored))

    def dispatch(self, action: Action) -> FinanceState:
        """Apply an action, persist the result and return the new state."""
        new_state = reduce(self.state, action)
        self.db.save_state(new_state)
        self._state = new_state
        logger.debug("Applied %s", ActionType(action.type).value)
        return new_state
