# apwalk - Traversal of ActivityPub outboxes
#
# Walks a federated outbox collection under an item budget. Any object in
# the graph may be embedded inline or only referenced by URL; referenced
# objects are fetched through a resolver supplied by the caller.
#
# Core concepts:
# - Node: A decoded ActivityStreams object
# - Link: A reference to a remote Node
# - LinkResolver: Fetches the Node behind a Link
# - Outbox: The root collection, walked into Activities
# - Activity / Item / Attachment: Typed views resolved on demand

__version__ = "0.1.0"

from .model import Node, Link, NodeRef, DecodeError
from .config import WalkerConfig
from .resolver import LinkResolver, ResolutionError, StaticResolver, HTTPResolver, resolve_ref
from .views import Activity, Item, Attachment, ActivityType, MediaType
from .outbox import Outbox

__all__ = [
    # Model
    "Node",
    "Link",
    "NodeRef",
    "DecodeError",
    # Resolution
    "LinkResolver",
    "ResolutionError",
    "StaticResolver",
    "HTTPResolver",
    "resolve_ref",
    # Traversal
    "Outbox",
    "Activity",
    "Item",
    "Attachment",
    "ActivityType",
    "MediaType",
    # Configuration
    "WalkerConfig",
]
