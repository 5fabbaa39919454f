"""Item deletion with a grace period for undo."""

import logging
from dataclasses import dataclass

from price_calculator.domain.items import Item
from price_calculator.domain.undo import UndoEvent
from price_calculator.services.feedback import FeedbackSink
from price_calculator.services.items import ItemService
from price_calculator.services.undo import UndoController

_logger = logging.getLogger(__name__)


@dataclass
class ItemDeletionService:
    """Deletes items while keeping the last one restorable."""

    item_service: ItemService
    undo_controller: UndoController[Item]
    feedback: FeedbackSink

    async def delete(self, item: Item) -> None:
        """Stage the item for undo, then delete it."""
        self.undo_controller.stage(item, action="deleted")
        await self.item_service.delete_item(item.id)

    async def undo(self) -> Item | None:
        """Restore the last deleted item.

        Returns None when nothing is pending or the restore could not be saved.
        """
        event = self.undo_controller.undo()
        if event is None or event.data is None:
            return None
        if not await self.item_service.restore_item(event.data):
            _logger.warning("Could not restore item %s", event.data.id)
            return None
        self.feedback.notify("success")
        return event.data

    def dismiss(self) -> None:
        """Drop the pending deletion without restoring it."""
        self.undo_controller.clear()

    def dispatch_expired(self) -> list[UndoEvent[Item]]:
        """Report expired deletions to the feedback sink."""
        events = self.undo_controller.drain_events()
        for _event in events:
            self.feedback.notify("expired")
        return events
