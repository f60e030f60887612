# apwalk/views.py
"""
Typed views over resolved nodes.

- Activity: one entry of an outbox (Create, Announce, ...)
- Item: the object an activity targets (a post)
- Attachment: media or documents attached to an item

Views are projections. The only I/O they perform is resolving nested
references, and only when a method taking a resolver is awaited.
"""

import logging
from enum import Enum
from typing import List, Optional

from .model import Node
from .resolver import LinkResolver, resolve_ref

logger = logging.getLogger(__name__)


class ActivityType(Enum):
    """Activity type tags the views understand."""
    CREATE = "Create"
    ANNOUNCE = "Announce"

    @classmethod
    def classify(cls, tag: str) -> "ActivityType | str":
        """Return the matching member, or the raw tag if unrecognized."""
        try:
            return cls(tag)
        except ValueError:
            return tag


class MediaType(Enum):
    """Attachment media types treated as displayable media."""
    PNG = "image/png"
    JPEG = "image/jpeg"

    @classmethod
    def classify(cls, value: str) -> "MediaType | str":
        """Return the matching member, or the raw value if unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return value


def _report_unsupported(kind: str, value: str) -> None:
    logger.warning(f"Not supported {kind}: {value}")


class _View:
    """
    Common behaviour for node views.

    Views compare equal when their nodes do. Nodes are mutable, so views
    are not hashable.
    """

    __hash__ = None

    def __init__(self, node: Node):
        self.node = node

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.node == other.node

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.node.id!r})"


class Activity(_View):
    """An activity taken from an outbox."""

    def id(self) -> Optional[str]:
        return self.node.id

    def types(self) -> List["ActivityType | str"]:
        """Classified type tags, in source order."""
        return [ActivityType.classify(tag) for tag in self.node.type_tags]

    def is_create(self) -> bool:
        """
        True if any type tag is Create.

        Announce is recognized and ignored. Any other tag is reported as
        unsupported and does not change the result.
        """
        for activity_type in self.types():
            if activity_type is ActivityType.CREATE:
                return True
            if activity_type is ActivityType.ANNOUNCE:
                continue
            _report_unsupported("type", activity_type)
        return False

    async def item(self, resolver: LinkResolver) -> Optional["Item"]:
        """
        Resolve the object of this activity.

        Only the first entry of the object list is used.

        Returns:
            The Item, or None if the activity has no object
        """
        if not self.node.object:
            return None
        return Item(await resolve_ref(self.node.object[0], resolver))


class Item(_View):
    """The object of an activity, typically a Note."""

    def id(self) -> Optional[str]:
        return self.node.id

    def url(self) -> Optional[str]:
        """Explicit url if present, otherwise the id."""
        if self.node.url is not None:
            return self.node.url.href
        return self.id()

    def content(self) -> Optional[str]:
        if not self.node.content:
            return None
        return self.node.content[0]

    def is_reply(self) -> bool:
        return bool(self.node.in_reply_to)

    def is_sensitive(self) -> bool:
        return bool(self.node.sensitive)

    async def attachments(self, resolver: LinkResolver) -> List["Attachment"]:
        """
        Resolve all attachments, in order.

        Links are fetched one at a time. If any fetch fails the error is
        raised and nothing is returned.
        """
        result = []
        for ref in self.node.attachment:
            result.append(Attachment(await resolve_ref(ref, resolver)))
        return result


class Attachment(_View):
    """An attachment of an item."""

    def media_types(self) -> List["MediaType | str"]:
        return [MediaType.classify(value) for value in self.node.media_type]

    def is_media(self) -> bool:
        """True if any media type is PNG or JPEG."""
        for media_type in self.media_types():
            if isinstance(media_type, MediaType):
                return True
            _report_unsupported("media type", media_type)
        return False

    def url(self) -> Optional[str]:
        if self.node.url is None:
            return None
        return self.node.url.href
