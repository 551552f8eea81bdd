"""Client domain service."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional, Union

from agencyledger.domain.entities import Client, ClientType
from agencyledger.domain.errors import NotFoundError, client_not_found
from agencyledger.domain.store import Action, ActionType, FinanceStore
from agencyledger.domain.validation import choice, optional_date, require_amount, require_name

logger = logging.getLogger(__name__)


class ClientService:
    """Service for managing clients."""

    def __init__(self, store: FinanceStore):
        """Initialize client service.

        Args:
            store: FinanceStore holding the application state
        """
        self.store = store

    def create_client(
        self,
        name: str,
        amount: Union[str, Decimal],
        client_type: Union[str, ClientType] = ClientType.RETAINER,
        start_date: Optional[str] = None,
        notes: str = "",
        email: str = "",
        phone: str = "",
        company: str = "",
    ) -> int:
        """Create a new client.

        Args:
            name: Client name
            amount: Monthly retainer or one-off fee
            client_type: "retainer" or "one-time"
            start_date: Date the engagement starts
            notes: Free text
            email: Contact email
            phone: Contact phone
            company: Company name

        Returns:
            Client ID

        Raises:
            ValidationError: If the name is blank, the amount is negative or
                unparsable, or the type or date is invalid
        """
        client = Client(
            id=0,
            name=require_name(name, "Client"),
            amount=require_amount(amount, "Client"),
            type=choice(ClientType, client_type, "client type"),
            start_date=optional_date(start_date),
            notes=notes,
            email=email,
            phone=phone,
            company=company,
        )
        client_id = self.store.state.next_id
        self.store.dispatch(Action(ActionType.ADD_CLIENT, client))
        logger.info("Added client %d '%s'", client_id, client.name)
        return client_id

    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID, or None if not found."""
        return next((c for c in self.store.state.clients if c.id == client_id), None)

    def list_clients(self, client_type: Optional[Union[str, ClientType]] = None) -> list[Client]:
        """List clients, optionally only those of one type."""
        clients = list(self.store.state.clients)
        if client_type is not None:
            wanted = choice(ClientType, client_type, "client type")
            clients = [c for c in clients if c.type is wanted]
        return clients

    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        amount: Optional[Union[str, Decimal]] = None,
        client_type: Optional[Union[str, ClientType]] = None,
        start_date: Optional[str] = None,
        notes: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        company: Optional[str] = None,
    ) -> Client:
        """Update a client. Arguments left as None keep their current value.

        Returns:
            The updated client

        Raises:
            NotFoundError: If the client does not exist
            ValidationError: If a new value is invalid
        """
        client = self.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))

        changes = {}
        if name is not None:
            changes["name"] = require_name(name, "Client")
        if amount is not None:
            changes["amount"] = require_amount(amount, "Client")
        if client_type is not None:
            changes["type"] = choice(ClientType, client_type, "client type")
        if start_date is not None:
            changes["start_date"] = optional_date(start_date)
        for field_name, value in (
            ("notes", notes),
            ("email", email),
            ("phone", phone),
            ("company", company),
        ):
            if value is not None:
                changes[field_name] = value

        updated = replace(client, **changes)
        self.store.dispatch(Action(ActionType.UPDATE_CLIENT, updated))
        return updated

    def delete_client(self, client_id: int) -> None:
        """Delete a client.

        Raises:
            NotFoundError: If the client does not exist
        """
        if self.get_client(client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        self.store.dispatch(Action(ActionType.DELETE_CLIENT, client_id))
        logger.info("Deleted client %d", client_id)
