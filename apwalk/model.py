# apwalk/model.py
"""
Read-only object model for decoded ActivityStreams JSON.

A Node is one decoded object. Any field that may reference another object
holds a NodeRef: either an inline Node or a Link that has to be resolved
before it can be inspected.

Only the projections the traversal uses are decoded; everything else stays
available in Node.raw.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


class DecodeError(ValueError):
    """Input could not be decoded into a Node."""


@dataclass(frozen=True)
class Link:
    """A bare reference to a remote object."""
    href: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "Link", "href": self.href}


@dataclass
class Node:
    """
    A decoded ActivityStreams object.

    Attributes:
        type_tags: Type tags ("Create", "Note", ...), possibly empty
        id: Object identifier (usually a URL)
        total_items: Collection size, if declared
        items: Unordered collection members
        first: First page of a paginated collection
        ordered_items: Ordered collection members
        next: Following collection page
        object: Targets of an activity
        url: Explicit reachable URL
        content: Content values (HTML)
        in_reply_to: Objects this one replies to
        attachment: Attached objects (media, documents)
        media_type: MIME types
        sensitive: Extension flag marking sensitive content
        raw: The decoded JSON this node was built from
    """
    type_tags: List[str] = field(default_factory=list)
    id: Optional[str] = None
    total_items: Optional[int] = None
    items: List["NodeRef"] = field(default_factory=list)
    first: Optional["NodeRef"] = None
    ordered_items: List["NodeRef"] = field(default_factory=list)
    next: Optional["NodeRef"] = None
    object: List["NodeRef"] = field(default_factory=list)
    url: Optional[Link] = None
    content: List[str] = field(default_factory=list)
    in_reply_to: List["NodeRef"] = field(default_factory=list)
    attachment: List["NodeRef"] = field(default_factory=list)
    media_type: List[str] = field(default_factory=list)
    sensitive: Optional[bool] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        """Build a node from decoded JSON."""
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")

        total_items = data.get("totalItems")
        if total_items is not None and (
            isinstance(total_items, bool) or not isinstance(total_items, int)
        ):
            raise DecodeError(f"totalItems must be an integer, got {total_items!r}")

        sensitive = data.get("sensitive")
        if sensitive is not None and not isinstance(sensitive, bool):
            raise DecodeError(f"sensitive must be a boolean, got {sensitive!r}")

        node_id = data.get("id")
        if node_id is not None and not isinstance(node_id, str):
            raise DecodeError(f"id must be a string, got {node_id!r}")

        return cls(
            type_tags=_strings(data, "type"),
            id=node_id,
            total_items=total_items,
            items=_refs(data, "items"),
            first=_ref(data, "first"),
            ordered_items=_refs(data, "orderedItems"),
            next=_ref(data, "next"),
            object=_refs(data, "object"),
            url=_url(data.get("url")),
            content=_strings(data, "content"),
            in_reply_to=_refs(data, "inReplyTo"),
            attachment=_refs(data, "attachment"),
            media_type=_strings(data, "mediaType"),
            sensitive=sensitive,
            raw=data,
        )

    @classmethod
    def from_json_bytes(cls, data: bytes) -> "Node":
        """Decode a node from raw JSON bytes."""
        try:
            decoded = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"Invalid JSON: {e}") from e
        return cls.from_dict(decoded)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the decoded projections back to ActivityStreams JSON."""
        data: Dict[str, Any] = {}
        if self.type_tags:
            data["type"] = self.type_tags[0] if len(self.type_tags) == 1 else list(self.type_tags)
        if self.id is not None:
            data["id"] = self.id
        if self.total_items is not None:
            data["totalItems"] = self.total_items
        for key, refs in (
            ("items", self.items),
            ("orderedItems", self.ordered_items),
            ("object", self.object),
            ("inReplyTo", self.in_reply_to),
            ("attachment", self.attachment),
        ):
            if refs:
                data[key] = [ref.to_dict() for ref in refs]
        if self.first is not None:
            data["first"] = self.first.to_dict()
        if self.next is not None:
            data["next"] = self.next.to_dict()
        if self.url is not None:
            data["url"] = self.url.href
        if self.content:
            data["content"] = self.content[0] if len(self.content) == 1 else list(self.content)
        if self.media_type:
            data["mediaType"] = self.media_type[0] if len(self.media_type) == 1 else list(self.media_type)
        if self.sensitive is not None:
            data["sensitive"] = self.sensitive
        return data


NodeRef = Union[Node, Link]


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _strings(data: Dict[str, Any], key: str) -> List[str]:
    values = _as_list(data.get(key))
    for value in values:
        if not isinstance(value, str):
            raise DecodeError(f"{key} must contain strings, got {value!r}")
    return values


def _is_link(value: Dict[str, Any]) -> bool:
    tags = _as_list(value.get("type"))
    if "Link" in tags or "Mention" in tags:
        return True
    return "href" in value and not tags and "id" not in value


def decode_ref(value: Any) -> NodeRef:
    """Decode one reference value into an inline Node or a Link."""
    if isinstance(value, str):
        return Link(value)
    if isinstance(value, dict):
        if _is_link(value):
            href = value.get("href")
            if not isinstance(href, str):
                raise DecodeError(f"Link without href: {value!r}")
            return Link(href)
        return Node.from_dict(value)
    raise DecodeError(f"Expected a reference, got {value!r}")


def _refs(data: Dict[str, Any], key: str) -> List[NodeRef]:
    return [decode_ref(value) for value in _as_list(data.get(key))]


def _ref(data: Dict[str, Any], key: str) -> Optional[NodeRef]:
    value = data.get(key)
    if value is None:
        return None
    return decode_ref(value)


def _url(value: Any) -> Optional[Link]:
    """
    Decode an object's url field.

    ActivityStreams allows a string, a Link, or a list of either; the first
    entry is used.
    """
    values = _as_list(value)
    if not values:
        return None
    first = values[0]
    if isinstance(first, str):
        return Link(first)
    if isinstance(first, dict) and isinstance(first.get("href"), str):
        return Link(first["href"])
    raise DecodeError(f"Unsupported url value: {first!r}")
