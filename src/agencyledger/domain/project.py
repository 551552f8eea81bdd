"""Project domain service."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional, Union

from agencyledger.domain.entities import Project, ProjectStatus
from agencyledger.domain.errors import NotFoundError, ValidationError, project_not_found
from agencyledger.domain.store import Action, ActionType, FinanceStore
from agencyledger.domain.validation import choice, optional_date, require_amount, require_name

logger = logging.getLogger(__name__)


def _check_dates(start_date: Optional[str], end_date: Optional[str]) -> None:
    # ISO strings compare in date order
    if start_date and end_date and end_date < start_date:
        raise ValidationError(f"Project end date {end_date} is before start date {start_date}")


class ProjectService:
    """Service for managing one-off projects."""

    def __init__(self, store: FinanceStore):
        self.store = store

    def create_project(
        self,
        name: str,
        amount: Union[str, Decimal],
        status: Union[str, ProjectStatus] = ProjectStatus.PENDING,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        client: str = "",
        description: str = "",
        notes: str = "",
    ) -> int:
        """Create a new project and return its ID.

        Raises:
            ValidationError: If the name is blank, the amount is negative, the
                status is unknown or the end date precedes the start date
        """
        start = optional_date(start_date)
        end = optional_date(end_date)
        _check_dates(start, end)
        project = Project(
            id=0,
            name=require_name(name, "Project"),
            amount=require_amount(amount, "Project"),
            status=choice(ProjectStatus, status, "project status"),
            start_date=start,
            end_date=end,
            client=client,
            description=description,
            notes=notes,
        )
        project_id = self.store.state.next_id
        self.store.dispatch(Action(ActionType.ADD_PROJECT, project))
        logger.info("Added project %d '%s'", project_id, project.name)
        return project_id

    def get_project(self, project_id: int) -> Optional[Project]:
        return next((p for p in self.store.state.projects if p.id == project_id), None)

    def list_projects(self, status: Optional[Union[str, ProjectStatus]] = None) -> list[Project]:
        projects = list(self.store.state.projects)
        if status is not None:
            wanted = choice(ProjectStatus, status, "project status")
            projects = [p for p in projects if p.status is wanted]
        return projects

    def update_project(
        self,
        project_id: int,
        name: Optional[str] = None,
        amount: Optional[Union[str, Decimal]] = None,
        status: Optional[Union[str, ProjectStatus]] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        client: Optional[str] = None,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Project:
        """Update a project. Arguments left as None keep their current value."""
        project = self.get_project(project_id)
        if project is None:
            raise NotFoundError(project_not_found(project_id))

        changes = {}
        if name is not None:
            changes["name"] = require_name(name, "Project")
        if amount is not None:
            changes["amount"] = require_amount(amount, "Project")
        if status is not None:
            changes["status"] = choice(ProjectStatus, status, "project status")
        if start_date is not None:
            changes["start_date"] = optional_date(start_date)
        if end_date is not None:
            changes["end_date"] = optional_date(end_date)
        for field_name, value in (("client", client), ("description", description), ("notes", notes)):
            if value is not None:
                changes[field_name] = value

        updated = replace(project, **changes)
        _check_dates(updated.start_date, updated.end_date)
        self.store.dispatch(Action(ActionType.UPDATE_PROJECT, updated))
        return updated

    def delete_project(self, project_id: int) -> None:
        if self.get_project(project_id) is None:
            raise NotFoundError(project_not_found(project_id))
        self.store.dispatch(Action(ActionType.DELETE_PROJECT, project_id))
        logger.info("Deleted project %d", project_id)
