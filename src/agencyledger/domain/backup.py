"""Full-state backup export, import and reset."""

import logging
from datetime import date
from pathlib import Path
from typing import Optional, Union

from agencyledger.database.mappers import state_from_json, state_to_json
from agencyledger.domain.entities import FinanceState
from agencyledger.domain.errors import DocumentReadError
from agencyledger.domain.store import Action, ActionType, FinanceStore

logger = logging.getLogger(__name__)


def backup_filename(today: Optional[date] = None) -> str:
    """Return the default name for a backup written on a given day."""
    return f"agency-finance-backup-{(today or date.today()).isoformat()}.json"


class BackupService:
    """Service for exporting and restoring the whole state as JSON."""

    def __init__(self, store: FinanceStore):
        """Initialize backup service.

        Args:
            store: FinanceStore holding the application state
        """
        self.store = store

    def export_json(self) -> str:
        """Return the whole state as indented JSON."""
        return state_to_json(self.store.state, indent=2)

    def export_backup(self, target: Optional[Union[str, Path]] = None) -> Path:
        """Write a backup file.

        Args:
            target: File or directory to write to; a directory (or None for the
                working directory) gets the default dated file name

        Returns:
            Path of the written file
        """
        path = Path(target) if target is not None else Path.cwd()
        if path.is_dir():
            path = path / backup_filename(self.store.today)
        path.write_text(self.export_json() + "\n", encoding="utf-8")
        logger.info("Exported backup to %s", path)
        return path

    def import_backup(self, source: Union[str, Path]) -> FinanceState:
        """Replace the whole state with the contents of a backup file.

        Raises:
            DocumentReadError: If the file cannot be read
            ValidationError: If the file is not a valid backup
        """
        path = Path(source)
        try:
            payload = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(f"Failed to read backup '{path.name}': {e}") from e

        loaded = state_from_json(payload)
        state = self.store.dispatch(Action(ActionType.LOAD_DATA, loaded))
        logger.info(
            "Imported backup %s: %d clients, %d projects, %d costs",
            path.name,
            len(state.clients),
            len(state.projects),
            len(state.all_costs()),
        )
        return state

    def clear_all(self) -> FinanceState:
        """Reset to the empty initial state."""
        state = self.store.dispatch(Action(ActionType.CLEAR_ALL_DATA, self.store.today))
        logger.warning("Cleared all data")
        return state
