# tests/test_views.py
"""Tests for Activity, Item and Attachment views."""

import logging

import pytest

from apwalk.model import Node
from apwalk.resolver import ResolutionError, StaticResolver
from apwalk.views import Activity, ActivityType, Attachment, Item, MediaType


@pytest.fixture
def resolver():
    return StaticResolver()


class TestClassification:
    """Test tag classification."""

    def test_activity_type_known(self):
        assert ActivityType.classify("Create") is ActivityType.CREATE
        assert ActivityType.classify("Announce") is ActivityType.ANNOUNCE

    def test_activity_type_unknown(self):
        """Unrecognized tags are returned raw."""
        assert ActivityType.classify("Like") == "Like"

    def test_media_type(self):
        assert MediaType.classify("image/png") is MediaType.PNG
        assert MediaType.classify("image/jpeg") is MediaType.JPEG
        assert MediaType.classify("image/gif") == "image/gif"


class TestActivity:
    """Test Activity view."""

    def test_is_create(self):
        assert Activity(Node.from_dict({"type": "Create"})).is_create()

    def test_create_anywhere_in_tags(self):
        """Create is found among other tags."""
        assert Activity(Node.from_dict({"type": ["Announce", "Create"]})).is_create()

    def test_announce_is_silent(self, caplog):
        """Announce is not a create and is not reported."""
        with caplog.at_level(logging.WARNING):
            assert not Activity(Node.from_dict({"type": "Announce"})).is_create()
        assert caplog.records == []

    def test_unsupported_type_warns(self, caplog):
        """Other tags are reported without affecting the result."""
        with caplog.at_level(logging.WARNING):
            assert not Activity(Node.from_dict({"type": "Like"})).is_create()
        assert "Not supported type: Like" in caplog.text

    def test_no_tags(self):
        assert not Activity(Node.from_dict({})).is_create()

    def test_types(self):
        activity = Activity(Node.from_dict({"type": ["Create", "Follow"]}))
        assert activity.types() == [ActivityType.CREATE, "Follow"]

    @pytest.mark.asyncio
    async def test_item_none(self, resolver):
        """No object means no item."""
        assert await Activity(Node.from_dict({"type": "Create"})).item(resolver) is None

    @pytest.mark.asyncio
    async def test_item_inline(self, resolver):
        """An inline object is wrapped without a fetch."""
        activity = Activity(Node.from_dict({
            "type": "Create",
            "object": {"type": "Note", "id": "https://example.com/notes/1"},
        }))
        item = await activity.item(resolver)
        assert item.id() == "https://example.com/notes/1"
        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_item_linked(self, resolver):
        """A linked object is resolved once."""
        resolver.add("https://example.com/notes/1", {"type": "Note", "content": "hi"})
        activity = Activity(Node.from_dict({
            "type": "Announce",
            "object": "https://example.com/notes/1",
        }))
        item = await activity.item(resolver)
        assert item.content() == "hi"
        assert resolver.calls == ["https://example.com/notes/1"]

    @pytest.mark.asyncio
    async def test_item_first_object_only(self, resolver):
        """Objects after the first are ignored."""
        resolver.add("https://example.com/notes/1", {"id": "first"})
        resolver.add("https://example.com/notes/2", {"id": "second"})
        activity = Activity(Node.from_dict({
            "object": ["https://example.com/notes/1", "https://example.com/notes/2"],
        }))
        item = await activity.item(resolver)
        assert item.id() == "first"
        assert resolver.calls == ["https://example.com/notes/1"]

    @pytest.mark.asyncio
    async def test_item_failure(self, resolver):
        activity = Activity(Node.from_dict({"object": "https://example.com/gone"}))
        with pytest.raises(ResolutionError):
            await activity.item(resolver)

    def test_equality(self):
        node = Node.from_dict({"type": "Create", "id": "a"})
        assert Activity(node) == Activity(Node.from_dict({"type": "Create", "id": "a"}))
        assert Activity(node) != Item(node)

    def test_views_are_unhashable(self):
        """Views define equality on mutable nodes and cannot be hashed."""
        node = Node.from_dict({"type": "Create", "id": "a"})
        for view in (Activity(node), Item(node), Attachment(node)):
            with pytest.raises(TypeError):
                hash(view)


class TestItem:
    """Test Item view."""

    def test_url_explicit(self):
        """Explicit url wins over id."""
        item = Item(Node.from_dict({"id": "https://a/id", "url": "https://a/url"}))
        assert item.url() == "https://a/url"

    def test_url_falls_back_to_id(self):
        item = Item(Node.from_dict({"id": "https://a/id"}))
        assert item.url() == "https://a/id"

    def test_url_missing(self):
        assert Item(Node.from_dict({})).url() is None

    def test_content(self):
        assert Item(Node.from_dict({"content": ["<p>one</p>", "<p>two</p>"]})).content() == "<p>one</p>"
        assert Item(Node.from_dict({})).content() is None

    def test_is_reply(self):
        assert Item(Node.from_dict({"inReplyTo": "https://a/1"})).is_reply()
        assert not Item(Node.from_dict({})).is_reply()

    def test_is_sensitive(self):
        assert Item(Node.from_dict({"sensitive": True})).is_sensitive()
        assert not Item(Node.from_dict({"sensitive": False})).is_sensitive()
        assert not Item(Node.from_dict({})).is_sensitive()

    @pytest.mark.asyncio
    async def test_attachments_in_order(self, resolver):
        """Inline and linked attachments keep source order."""
        resolver.add("https://a/media/2", {"type": "Image", "id": "m2"})
        item = Item(Node.from_dict({
            "attachment": [
                {"type": "Image", "id": "m1"},
                "https://a/media/2",
                {"type": "Document", "id": "m3"},
            ],
        }))
        attachments = await item.attachments(resolver)
        assert [a.node.id for a in attachments] == ["m1", "m2", "m3"]
        assert resolver.calls == ["https://a/media/2"]

    @pytest.mark.asyncio
    async def test_no_attachments(self, resolver):
        assert await Item(Node.from_dict({})).attachments(resolver) == []

    @pytest.mark.asyncio
    async def test_attachment_failure_discards(self, resolver):
        """One failed link fails the whole call."""
        resolver.add("https://a/media/1", {"type": "Image"})
        resolver.add("https://a/media/3", {"type": "Image"})
        item = Item(Node.from_dict({
            "attachment": ["https://a/media/1", "https://a/media/2", "https://a/media/3"],
        }))
        with pytest.raises(ResolutionError):
            await item.attachments(resolver)
        assert resolver.calls == ["https://a/media/1", "https://a/media/2"]


class TestAttachment:
    """Test Attachment view."""

    @pytest.mark.parametrize("media_type", ["image/png", "image/jpeg"])
    def test_is_media(self, media_type):
        assert Attachment(Node.from_dict({"mediaType": media_type})).is_media()

    def test_other_media_type(self, caplog):
        """Other media types are reported and not media."""
        with caplog.at_level(logging.WARNING):
            assert not Attachment(Node.from_dict({"mediaType": "video/mp4"})).is_media()
        assert "Not supported media type: video/mp4" in caplog.text

    def test_no_media_type(self):
        assert not Attachment(Node.from_dict({})).is_media()

    def test_any_entry_matches(self):
        attachment = Attachment(Node.from_dict({"mediaType": ["image/webp", "image/jpeg"]}))
        assert attachment.is_media()

    def test_url(self):
        assert Attachment(Node.from_dict({"url": "https://a/m.png"})).url() == "https://a/m.png"

    def test_url_no_id_fallback(self):
        """Unlike Item, the id is not used as a url."""
        assert Attachment(Node.from_dict({"id": "https://a/m"})).url() is None
