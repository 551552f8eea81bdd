"""Cost domain service."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional, Union

from agencyledger.domain.entities import Cost, CostCategory, CostFrequency
from agencyledger.domain.errors import NotFoundError, cost_not_found
from agencyledger.domain.store import Action, ActionType, FinanceStore
from agencyledger.domain.validation import choice, optional_date, require_amount, require_name

logger = logging.getLogger(__name__)


class CostService:
    """Service for managing costs in the team, marketing and operations buckets."""

    def __init__(self, store: FinanceStore):
        """Initialize cost service.

        Args:
            store: FinanceStore holding the application state
        """
        self.store = store

    def create_cost(
        self,
        name: str,
        category: Union[str, CostCategory],
        amount: Union[str, Decimal],
        frequency: Union[str, CostFrequency] = CostFrequency.MONTHLY,
        start_date: Optional[str] = None,
        description: str = "",
        notes: str = "",
    ) -> int:
        """Create a new cost.

        Args:
            name: Cost name
            category: "team", "marketing" or "operations"
            amount: Cost amount
            frequency: "monthly", "yearly", "quarterly" or "one-time"
            start_date: Optional date the cost starts
            description: Free text
            notes: Free text

        Returns:
            Cost ID

        Raises:
            ValidationError: If the name is blank, the amount is negative or
                the category or frequency is unknown
        """
        cost = Cost(
            id=0,
            name=require_name(name, "Cost"),
            category=choice(CostCategory, category, "cost category"),
            amount=require_amount(amount, "Cost"),
            frequency=choice(CostFrequency, frequency, "cost frequency"),
            start_date=optional_date(start_date),
            description=description,
            notes=notes,
        )
        cost_id = self.store.state.next_id
        self.store.dispatch(Action(ActionType.ADD_COST, cost))
        logger.info("Added %s cost %d '%s'", cost.category.value, cost_id, cost.name)
        return cost_id

    def get_cost(self, cost_id: int) -> Optional[Cost]:
        """Get cost by ID, searching every category."""
        return next((c for c in self.store.state.all_costs() if c.id == cost_id), None)

    def list_costs(self, category: Optional[Union[str, CostCategory]] = None) -> list[Cost]:
        """List costs, optionally restricted to one category."""
        if category is None:
            return self.store.state.all_costs()
        wanted = choice(CostCategory, category, "cost category")
        return list(self.store.state.costs.get(wanted, ()))

    def update_cost(
        self,
        cost_id: int,
        name: Optional[str] = None,
        category: Optional[Union[str, CostCategory]] = None,
        amount: Optional[Union[str, Decimal]] = None,
        frequency: Optional[Union[str, CostFrequency]] = None,
        start_date: Optional[str] = None,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Cost:
        """Update a cost. A new category moves the cost to that bucket.

        Raises:
            NotFoundError: If the cost does not exist
            ValidationError: If a new value is invalid
        """
        cost = self.get_cost(cost_id)
        if cost is None:
            raise NotFoundError(cost_not_found(cost_id))

        changes = {}
        if name is not None:
            changes["name"] = require_name(name, "Cost")
        if category is not None:
            changes["category"] = choice(CostCategory, category, "cost category")
        if amount is not None:
            changes["amount"] = require_amount(amount, "Cost")
        if frequency is not None:
            changes["frequency"] = choice(CostFrequency, frequency, "cost frequency")
        if start_date is not None:
            changes["start_date"] = optional_date(start_date)
        if description is not None:
            changes["description"] = description
        if notes is not None:
            changes["notes"] = notes

        updated = replace(cost, **changes)
        self.store.dispatch(Action(ActionType.UPDATE_COST, updated))
        return updated

    def delete_cost(self, cost_id: int) -> None:
        """Delete a cost.

        Raises:
            NotFoundError: If the cost does not exist
        """
        if self.get_cost(cost_id) is None:
            raise NotFoundError(cost_not_found(cost_id))
        self.store.dispatch(Action(ActionType.DELETE_COST, cost_id))
        logger.info("Deleted cost %d", cost_id)
