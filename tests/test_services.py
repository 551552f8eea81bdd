"""Tests for client, project, cost and settings services."""

from decimal import Decimal

import pytest

from agencyledger.domain.entities import ClientType, CostCategory, ProjectStatus, ViewMode
from agencyledger.domain.errors import NotFoundError, ValidationError
from agencyledger.domain.metrics import MetricsService


class TestClientService:
    def test_create_and_get(self, client_service):
        client_id = client_service.create_client(
            "  Acme Ltd ", "£2,500", start_date="1 May 2024", email="a@acme.test"
        )
        client = client_service.get_client(client_id)
        assert client.name == "Acme Ltd"
        assert client.amount == Decimal("2500")
        assert client.type is ClientType.RETAINER
        assert client.start_date == "2024-05-01"
        assert client.email == "a@acme.test"

    def test_year_only_start_date_stored_as_first_of_year(self, client_service):
        client_id = client_service.create_client("Acme", "10", start_date="2025")
        assert client_service.get_client(client_id).start_date == "2025-01-01"

    def test_ids_are_unique_across_entities(self, sample_entities):
        ids = list(sample_entities.values())
        assert len(set(ids)) == len(ids)

    def test_negative_amount_rejected(self, client_service):
        with pytest.raises(ValidationError, match="must not be negative"):
            client_service.create_client("Acme", "-1")

    def test_blank_name_rejected(self, client_service):
        with pytest.raises(ValidationError):
            client_service.create_client("  ", "10")

    def test_unknown_type_rejected(self, client_service):
        with pytest.raises(ValidationError, match="client type"):
            client_service.create_client("Acme", "10", client_type="weekly")

    def test_list_by_type(self, client_service, sample_entities):
        assert [c.name for c in client_service.list_clients()] == ["Acme Ltd", "Beta Co"]
        assert [c.name for c in client_service.list_clients("one-time")] == ["Beta Co"]

    def test_update_keeps_unset_fields(self, client_service, sample_entities):
        client_id = sample_entities["retainer"]
        updated = client_service.update_client(client_id, amount="1200", notes="raised")
        assert updated.amount == Decimal("1200")
        assert updated.notes == "raised"
        assert updated.name == "Acme Ltd"
        assert client_service.get_client(client_id) == updated

    def test_update_missing(self, client_service):
        with pytest.raises(NotFoundError, match="Client 99 not found"):
            client_service.update_client(99, name="x")

    def test_delete(self, client_service, sample_entities):
        client_service.delete_client(sample_entities["retainer"])
        assert client_service.get_client(sample_entities["retainer"]) is None
        with pytest.raises(NotFoundError):
            client_service.delete_client(sample_entities["retainer"])


class TestProjectService:
    def test_create_defaults(self, project_service):
        project = project_service.get_project(project_service.create_project("Logo", "900"))
        assert project.status is ProjectStatus.PENDING
        assert project.start_date is None

    def test_end_before_start_rejected(self, project_service):
        with pytest.raises(ValidationError, match="before start date"):
            project_service.create_project(
                "Logo", "900", start_date="2024-06-01", end_date="2024-05-01"
            )

    def test_update_status_and_filter(self, project_service, sample_entities):
        project_service.update_project(sample_entities["project"], status="completed")
        assert len(project_service.list_projects(status="completed")) == 1
        assert project_service.list_projects(status="pending") == []

    def test_delete_missing(self, project_service):
        with pytest.raises(NotFoundError):
            project_service.delete_project(42)


class TestCostService:
    def test_create_in_category(self, cost_service, sample_entities):
        assert [c.name for c in cost_service.list_costs("team")] == ["Designer"]
        assert len(cost_service.list_costs()) == 2

    def test_unknown_category(self, cost_service):
        with pytest.raises(ValidationError, match="cost category"):
            cost_service.create_cost("Thing", "legal", "10")

    def test_category_change_moves_cost(self, cost_service, sample_entities):
        cost_id = sample_entities["ads"]
        moved = cost_service.update_cost(cost_id, category="operations", frequency="yearly")
        assert moved.category is CostCategory.OPERATIONS
        assert cost_service.list_costs("marketing") == []
        assert cost_service.list_costs("operations")[0].id == cost_id

    def test_delete(self, cost_service, sample_entities):
        cost_service.delete_cost(sample_entities["salary"])
        assert cost_service.get_cost(sample_entities["salary"]) is None


class TestSettingsService:
    def test_update_settings(self, settings_service):
        settings = settings_service.update_settings(
            fiscal_year_start="jan", corporation_tax_rate="0.25", currency="eur"
        )
        assert settings.fiscal_year_start == "January"
        assert settings.corporation_tax_rate == Decimal("0.25")
        assert settings.currency == "EUR"

    def test_invalid_month(self, settings_service):
        with pytest.raises(ValidationError, match="fiscal year start"):
            settings_service.update_settings(fiscal_year_start="Smarch")

    @pytest.mark.parametrize("rate", ["1.5", "-0.1", "abc"])
    def test_invalid_tax_rate(self, settings_service, rate):
        with pytest.raises(ValidationError, match="tax rate"):
            settings_service.update_settings(corporation_tax_rate=rate)

    def test_change_fiscal_year(self, settings_service):
        assert settings_service.change_fiscal_year(2022).current_fiscal_year == 2022
        with pytest.raises(ValidationError):
            settings_service.change_fiscal_year(0)
        with pytest.raises(ValidationError):
            settings_service.change_fiscal_year(9999)
        assert settings_service.change_fiscal_year(9998).current_fiscal_year == 9998

    def test_view_mode(self, settings_service):
        assert settings_service.set_view_mode("allTime").view_mode is ViewMode.ALL_TIME
        with pytest.raises(ValidationError, match="view mode"):
            settings_service.set_view_mode("weekly")

    def test_available_years(self, settings_service):
        assert settings_service.available_fiscal_years()[0] == 2024


def test_metrics_service_from_manual_entries(store, sample_entities):
    metrics = MetricsService(store).get_metrics()
    # Retainer (1000) and project (2000) fall in FY 2024; the one-time client does not count
    assert metrics.total_revenue == Decimal("3000")
    assert metrics.total_costs == Decimal("500")
    assert metrics.gross_profit == Decimal("2500")
    assert metrics.has_uploaded_data is False
