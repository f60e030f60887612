# apwalk/outbox.py
"""
Outbox traversal.

Walks a root collection and produces its activities in source order:

1. Inline `items`, then `orderedItems`, of the root
2. Only if the root has neither: the pages reachable from `first`,
   following `next`, items of each page before the next page

The walk stops when the item budget is spent or the graph is exhausted.
Links are resolved one at a time through the caller's resolver.
"""

import logging
from typing import AsyncIterator, List, Optional

from .model import Node, NodeRef
from .resolver import LinkResolver, resolve_ref
from .views import Activity

logger = logging.getLogger(__name__)


class Outbox:
    """
    An actor's outbox, the root of a walk.

    Args:
        node: The decoded root collection
    """

    def __init__(self, node: Node):
        self.node = node

    @classmethod
    def from_bytes(cls, data: bytes) -> "Outbox":
        """Decode an outbox from raw JSON. Raises DecodeError."""
        return cls(Node.from_json_bytes(data))

    from_json_bytes = from_bytes

    async def activity_items(self, resolver: LinkResolver, max_items: int) -> List[Activity]:
        """
        Collect up to max_items activities.

        Args:
            resolver: Resolver for linked activities and pages
            max_items: Maximum number of activities to return

        Returns:
            Activities in source order

        Any resolution failure is raised and the activities gathered so far
        are discarded. Use iter_activity_items() to keep partial results.
        """
        return [activity async for activity in self.iter_activity_items(resolver, max_items)]

    async def iter_activity_items(
        self, resolver: LinkResolver, max_items: int
    ) -> AsyncIterator[Activity]:
        """
        Yield up to max_items activities, one at a time.

        Same order and stopping rules as activity_items(). A resolution
        failure is raised after the activities already yielded.
        """
        if isinstance(max_items, bool) or not isinstance(max_items, int) or max_items < 0:
            raise ValueError(f"max_items must be a non-negative integer, got {max_items!r}")

        # A collection declared empty is never paged through
        if self.node.total_items == 0:
            return
        if max_items == 0:
            return

        remaining = max_items
        produced = 0
        for ref in self.node.items + self.node.ordered_items:
            yield Activity(await resolve_ref(ref, resolver))
            produced += 1
            remaining -= 1
            if remaining == 0:
                return

        if produced:
            return

        if self.node.first is None:
            return

        page_ref: Optional[NodeRef] = self.node.first
        page_number = 0
        while page_ref is not None:
            page = await resolve_ref(page_ref, resolver)
            page_number += 1
            logger.debug(f"Walking page {page_number} ({page.id or 'inline'})")

            if remaining == 0:
                return

            entries = page.items + page.ordered_items
            for ref in entries:
                yield Activity(await resolve_ref(ref, resolver))
                remaining -= 1
                if remaining == 0:
                    return

            # An empty page ends the walk even if it points further
            if not entries:
                logger.debug(f"Page {page_number} is empty, stopping")
                return

            page_ref = page.next

    def __repr__(self) -> str:
        return f"Outbox(id={self.node.id!r})"
