"""Mapper functions to convert between domain entities and the stored JSON shape.

The stored shape uses camelCase keys and writes money as decimal strings.
Loading accepts numbers as well as strings for any money field, so blobs
written by other tools still load.
"""

import json
from decimal import Decimal
from typing import Any, Optional

from agencyledger.domain import entities as domain
from agencyledger.domain.errors import ValidationError
from agencyledger.utils.amount_parser import to_decimal


def _money(value: Decimal) -> str:
    return str(value)


def _money_map(values: Optional[dict[str, Decimal]]) -> Optional[dict[str, str]]:
    if values is None:
        return None
    return {key: _money(value) for key, value in values.items()}


def _decimal_map(values: Optional[dict[str, Any]]) -> Optional[dict[str, Decimal]]:
    if values is None:
        return None
    return {key: to_decimal(value) for key, value in values.items()}


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


# Entities


def client_to_dict(client: domain.Client) -> dict[str, Any]:
    """Convert a Client entity to its stored shape."""
    return {
        "id": client.id,
        "name": client.name,
        "amount": _money(client.amount),
        "type": client.type.value,
        "startDate": client.start_date,
        "notes": client.notes,
        "email": client.email,
        "phone": client.phone,
        "company": client.company,
    }


def client_from_dict(data: dict[str, Any]) -> domain.Client:
    """Convert a stored client to a Client entity."""
    return domain.Client(
        id=int(data["id"]),
        name=data.get("name", ""),
        amount=to_decimal(data.get("amount")),
        type=domain.ClientType(data.get("type") or domain.ClientType.RETAINER.value),
        start_date=data.get("startDate") or None,
        notes=data.get("notes", ""),
        email=data.get("email", ""),
        phone=data.get("phone", ""),
        company=data.get("company", ""),
    )


def project_to_dict(project: domain.Project) -> dict[str, Any]:
    """Convert a Project entity to its stored shape."""
    return {
        "id": project.id,
        "name": project.name,
        "amount": _money(project.amount),
        "status": project.status.value,
        "startDate": project.start_date,
        "endDate": project.end_date,
        "client": project.client,
        "description": project.description,
        "notes": project.notes,
    }


def project_from_dict(data: dict[str, Any]) -> domain.Project:
    """Convert a stored project to a Project entity."""
    return domain.Project(
        id=int(data["id"]),
        name=data.get("name", ""),
        amount=to_decimal(data.get("amount")),
        status=domain.ProjectStatus(data.get("status") or domain.ProjectStatus.PENDING.value),
        start_date=data.get("startDate") or None,
        end_date=data.get("endDate") or None,
        client=data.get("client", ""),
        description=data.get("description", ""),
        notes=data.get("notes", ""),
    )


def cost_to_dict(cost: domain.Cost) -> dict[str, Any]:
    """Convert a Cost entity to its stored shape."""
    return {
        "id": cost.id,
        "name": cost.name,
        "category": cost.category.value,
        "amount": _money(cost.amount),
        "frequency": cost.frequency.value,
        "startDate": cost.start_date,
        "description": cost.description,
        "notes": cost.notes,
    }


def cost_from_dict(data: dict[str, Any], category: domain.CostCategory) -> domain.Cost:
    """Convert a stored cost to a Cost entity.

    The bucket a cost is stored under decides its category.
    """
    return domain.Cost(
        id=int(data["id"]),
        name=data.get("name", ""),
        category=category,
        amount=to_decimal(data.get("amount")),
        frequency=domain.CostFrequency(data.get("frequency") or domain.CostFrequency.MONTHLY.value),
        start_date=data.get("startDate") or None,
        description=data.get("description", ""),
        notes=data.get("notes", ""),
    )


# Reports


def line_item_to_dict(item: domain.LineItem) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": item.name,
        "value": _money(item.value),
        "notes": item.notes,
        "source": item.source,
    }
    if item.monthly_breakdown is not None:
        data["monthlyBreakdown"] = _money_map(item.monthly_breakdown)
    return data


def line_item_from_dict(data: dict[str, Any]) -> domain.LineItem:
    return domain.LineItem(
        name=data.get("name", ""),
        value=to_decimal(data.get("value")),
        monthly_breakdown=_decimal_map(data.get("monthlyBreakdown")),
        notes=data.get("notes", ""),
        source=data.get("source", ""),
    )


def _items_to_dict(items: dict[str, domain.LineItem]) -> dict[str, Any]:
    return {key: line_item_to_dict(item) for key, item in items.items()}


def _items_from_dict(data: Optional[dict[str, Any]]) -> dict[str, domain.LineItem]:
    return {key: line_item_from_dict(item) for key, item in (data or {}).items()}


def metadata_to_dict(metadata: domain.ReportMetadata) -> dict[str, Any]:
    return {
        "source": metadata.source.value,
        "extractedAt": metadata.extracted_at,
        "fiscalYear": metadata.fiscal_year,
        "uploadDate": metadata.upload_date,
        "originalFileName": metadata.original_file_name,
        "fiscalYearStart": metadata.fiscal_year_start,
        "fiscalMonthOrder": list(metadata.fiscal_month_order),
    }


def metadata_from_dict(data: dict[str, Any]) -> domain.ReportMetadata:
    try:
        source = domain.ReportSource(data.get("source"))
    except ValueError as e:
        raise ValidationError(f"Unknown report source '{data.get('source')}'") from e
    return domain.ReportMetadata(
        source=source,
        extracted_at=data.get("extractedAt"),
        fiscal_year=_optional_int(data.get("fiscalYear")),
        upload_date=data.get("uploadDate"),
        original_file_name=data.get("originalFileName"),
        fiscal_year_start=data.get("fiscalYearStart"),
        fiscal_month_order=tuple(data.get("fiscalMonthOrder") or ()),
    )


def _profit_loss_to_dict(report: domain.ProfitLossReport) -> dict[str, Any]:
    data: dict[str, Any] = {
        "revenue": _items_to_dict(report.revenue),
        "expenses": _items_to_dict(report.expenses),
        "totalRevenue": _money(report.total_revenue),
        "totalExpenses": _money(report.total_expenses),
        "netIncome": _money(report.net_income),
    }
    if report.monthly_totals is not None:
        data["monthlyTotals"] = {
            key: _money_map(values) for key, values in report.monthly_totals.items()
        }
    return data


def _profit_loss_from_dict(
    data: dict[str, Any], metadata: domain.ReportMetadata
) -> domain.ProfitLossReport:
    monthly_totals = data.get("monthlyTotals")
    return domain.ProfitLossReport(
        metadata=metadata,
        revenue=_items_from_dict(data.get("revenue")),
        expenses=_items_from_dict(data.get("expenses")),
        total_revenue=to_decimal(data.get("totalRevenue")),
        total_expenses=to_decimal(data.get("totalExpenses")),
        net_income=to_decimal(data.get("netIncome")),
        monthly_totals=(
            {key: _decimal_map(values) for key, values in monthly_totals.items()}
            if monthly_totals is not None
            else None
        ),
    )


def _balance_sheet_to_dict(report: domain.BalanceSheetReport) -> dict[str, Any]:
    return {
        "assets": _items_to_dict(report.assets),
        "liabilities": _items_to_dict(report.liabilities),
        "equity": _items_to_dict(report.equity),
        "totalAssets": _money(report.total_assets),
        "totalLiabilities": _money(report.total_liabilities),
        "totalEquity": _money(report.total_equity),
    }


def _balance_sheet_from_dict(
    data: dict[str, Any], metadata: domain.ReportMetadata
) -> domain.BalanceSheetReport:
    return domain.BalanceSheetReport(
        metadata=metadata,
        assets=_items_from_dict(data.get("assets")),
        liabilities=_items_from_dict(data.get("liabilities")),
        equity=_items_from_dict(data.get("equity")),
        total_assets=to_decimal(data.get("totalAssets")),
        total_liabilities=to_decimal(data.get("totalLiabilities")),
        total_equity=to_decimal(data.get("totalEquity")),
    )


def _bank_to_dict(report: domain.BankTransactionsReport) -> dict[str, Any]:
    return {
        "transactions": [
            {
                "id": txn.id,
                "date": txn.date,
                "description": txn.description,
                "amount": _money(txn.amount),
                "type": txn.type.value,
                "category": txn.category.value,
            }
            for txn in report.transactions
        ],
        "summary": {
            "totalTransactions": report.summary.total_transactions,
            "totalCredits": _money(report.summary.total_credits),
            "totalDebits": _money(report.summary.total_debits),
        },
    }


def _bank_from_dict(
    data: dict[str, Any], metadata: domain.ReportMetadata
) -> domain.BankTransactionsReport:
    transactions = tuple(
        domain.BankTransaction(
            id=str(txn.get("id", "")),
            date=txn.get("date", ""),
            description=txn.get("description", ""),
            amount=to_decimal(txn.get("amount")),
            type=domain.TransactionType(txn.get("type") or domain.TransactionType.UNKNOWN.value),
            category=domain.TransactionCategory(
                txn.get("category") or domain.TransactionCategory.OTHER.value
            ),
        )
        for txn in data.get("transactions") or ()
    )
    summary = data.get("summary") or {}
    return domain.BankTransactionsReport(
        metadata=metadata,
        transactions=transactions,
        summary=domain.TransactionSummary(
            total_transactions=int(summary.get("totalTransactions", len(transactions))),
            total_credits=to_decimal(summary.get("totalCredits")),
            total_debits=to_decimal(summary.get("totalDebits")),
        ),
    )


_REPORT_WRITERS = {
    domain.ReportType.PROFIT_LOSS: _profit_loss_to_dict,
    domain.ReportType.BALANCE_SHEET: _balance_sheet_to_dict,
    domain.ReportType.BANK_TRANSACTIONS: _bank_to_dict,
}

_REPORT_READERS = {
    domain.ReportType.PROFIT_LOSS: _profit_loss_from_dict,
    domain.ReportType.BALANCE_SHEET: _balance_sheet_from_dict,
    domain.ReportType.BANK_TRANSACTIONS: _bank_from_dict,
}


def report_to_dict(report: domain.FinancialReport) -> dict[str, Any]:
    """Convert a report variant to its tagged stored shape."""
    data = {"type": report.report_type.value, "metadata": metadata_to_dict(report.metadata)}
    data.update(_REPORT_WRITERS[report.report_type](report))
    return data


def report_from_dict(
    data: dict[str, Any], expected: Optional[domain.ReportType] = None
) -> domain.FinancialReport:
    """Convert a tagged stored report to its variant.

    Args:
        data: Stored report
        expected: Report type the slot holds; used when the tag is missing

    Raises:
        ValidationError: If the tag is unknown or disagrees with the slot
    """
    tag = data.get("type") or (expected.value if expected else None)
    try:
        report_type = domain.ReportType(tag)
    except ValueError as e:
        raise ValidationError(f"Unknown report type '{tag}'") from e
    if expected is not None and report_type is not expected:
        raise ValidationError(
            f"Report tagged '{report_type.value}' stored in the '{expected.value}' slot"
        )
    metadata = metadata_from_dict(data.get("metadata") or {})
    return _REPORT_READERS[report_type](data, metadata)


# Whole state


def settings_to_dict(settings: domain.Settings) -> dict[str, Any]:
    return {
        "fiscalYearStart": settings.fiscal_year_start,
        "currentFiscalYear": settings.current_fiscal_year,
        "corporationTaxRate": _money(settings.corporation_tax_rate),
        "currency": settings.currency,
        "viewMode": settings.view_mode.value,
    }


def settings_from_dict(data: dict[str, Any], defaults: domain.Settings) -> domain.Settings:
    return domain.Settings(
        fiscal_year_start=data.get("fiscalYearStart") or defaults.fiscal_year_start,
        current_fiscal_year=int(data.get("currentFiscalYear") or defaults.current_fiscal_year),
        corporation_tax_rate=to_decimal(
            data.get("corporationTaxRate"), defaults.corporation_tax_rate
        ),
        currency=data.get("currency") or defaults.currency,
        view_mode=domain.ViewMode(data.get("viewMode") or defaults.view_mode.value),
    )


def state_to_dict(state: domain.FinanceState) -> dict[str, Any]:
    """Convert the whole state to its stored shape."""
    return {
        "clients": [client_to_dict(c) for c in state.clients],
        "projects": [project_to_dict(p) for p in state.projects],
        "costs": {
            category.value: [cost_to_dict(c) for c in state.costs.get(category, ())]
            for category in domain.CostCategory
        },
        "financialReports": {
            report_type.value: (
                report_to_dict(report)
                if (report := state.financial_reports.get(report_type)) is not None
                else None
            )
            for report_type in domain.ReportType
        },
        "settings": settings_to_dict(state.settings),
        "historicalData": {
            str(year): {
                report_type.value: report_to_dict(report)
                for report_type, report in year_reports.items()
            }
            for year, year_reports in sorted(state.historical_data.items())
        },
        "nextId": state.next_id,
    }


def _next_id(data: dict[str, Any], state_ids: list[int]) -> int:
    stored = data.get("nextId")
    floor = max(state_ids, default=0) + 1
    return max(int(stored), floor) if stored is not None else floor


def state_from_dict(
    data: dict[str, Any], defaults: Optional[domain.Settings] = None
) -> domain.FinanceState:
    """Convert a stored state to a FinanceState.

    Missing sections fall back to empty collections and default settings.

    Raises:
        ValidationError: If a report or enum value is malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("Stored state must be a JSON object")
    defaults = defaults or domain.Settings()

    try:
        clients = tuple(client_from_dict(c) for c in data.get("clients") or ())
        projects = tuple(project_from_dict(p) for p in data.get("projects") or ())

        costs = domain.empty_costs()
        stored_costs = data.get("costs") or {}
        for category in domain.CostCategory:
            costs[category] = tuple(
                cost_from_dict(c, category) for c in stored_costs.get(category.value) or ()
            )

        reports = domain.empty_reports()
        stored_reports = data.get("financialReports") or {}
        for report_type in domain.ReportType:
            stored = stored_reports.get(report_type.value)
            if stored:
                reports[report_type] = report_from_dict(stored, report_type)

        historical: dict[int, dict[domain.ReportType, domain.FinancialReport]] = {}
        for year, year_reports in (data.get("historicalData") or {}).items():
            historical[int(year)] = {
                domain.ReportType(tag): report_from_dict(stored, domain.ReportType(tag))
                for tag, stored in (year_reports or {}).items()
                if stored
            }

        settings = settings_from_dict(data.get("settings") or {}, defaults)

        entity_ids = [c.id for c in clients] + [p.id for p in projects]
        entity_ids += [c.id for entries in costs.values() for c in entries]
        next_id = _next_id(data, entity_ids)
    except ValidationError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed stored state: {e}") from e

    return domain.FinanceState(
        clients=clients,
        projects=projects,
        costs=costs,
        financial_reports=reports,
        settings=settings,
        historical_data=historical,
        next_id=next_id,
    )


def state_to_json(state: domain.FinanceState, indent: Optional[int] = None) -> str:
    """Serialize the state to JSON text."""
    return json.dumps(state_to_dict(state), indent=indent)


def state_from_json(payload: str, defaults: Optional[domain.Settings] = None) -> domain.FinanceState:
    """Parse JSON text into a FinanceState.

    Raises:
        ValidationError: If the text is not valid JSON or not a valid state
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Stored state is not valid JSON: {e}") from e
    return state_from_dict(data, defaults)
