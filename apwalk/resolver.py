# apwalk/resolver.py
"""
Link resolvers.

A resolver turns a Link href into a materialized Node. The traversal only
depends on the LinkResolver interface; callers choose the implementation:

- HTTPResolver: fetches over HTTP with aiohttp
- StaticResolver: serves documents from memory (offline use, tests)
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import aiohttp

from .config import WalkerConfig
from .model import DecodeError, Link, Node, NodeRef

logger = logging.getLogger(__name__)


class ResolutionError(Exception):
    """A Link could not be resolved."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to resolve {url}: {reason}")
        self.url = url
        self.reason = reason


class LinkResolver(ABC):
    """
    Base class for resolvers.

    Subclasses implement resolve() to fetch and decode the object behind a
    URL. Failures raise; nothing is retried or cached here.
    """

    @abstractmethod
    async def resolve(self, url: str) -> Node:
        """
        Resolve a URL to a Node.

        Args:
            url: The Link href

        Returns:
            The decoded Node, equivalent to an inline embedding
        """
        pass


async def resolve_ref(ref: NodeRef, resolver: LinkResolver) -> Node:
    """Materialize a reference. Inline nodes are returned without a fetch."""
    if isinstance(ref, Link):
        logger.debug(f"Resolving {ref.href}")
        return await resolver.resolve(ref.href)
    return ref


class StaticResolver(LinkResolver):
    """
    Resolver backed by an in-memory mapping of URL to document.

    Documents may be decoded JSON dicts or Nodes. Every requested URL is
    recorded in `calls`, in order.
    """

    def __init__(self, documents: Optional[Dict[str, Any]] = None):
        self._documents: Dict[str, Any] = dict(documents or {})
        self.calls: List[str] = []

    def add(self, url: str, document: Any) -> None:
        """Register a document for a URL."""
        self._documents[url] = document

    async def resolve(self, url: str) -> Node:
        self.calls.append(url)
        if url not in self._documents:
            raise ResolutionError(url, "not found")
        document = self._documents[url]
        if isinstance(document, Node):
            return document
        try:
            return Node.from_dict(document)
        except DecodeError as e:
            raise ResolutionError(url, str(e)) from e

    def __contains__(self, url: str) -> bool:
        return url in self._documents

    def __len__(self) -> int:
        return len(self._documents)


class HTTPResolver(LinkResolver):
    """
    Resolver that fetches ActivityStreams documents over HTTP.

    Usage:
        async with HTTPResolver(config) as resolver:
            outbox = Outbox.from_bytes(await resolver.fetch_bytes(url))
            activities = await outbox.activity_items(resolver, 20)

    Used outside `async with`, each fetch opens its own session.
    """

    def __init__(self, config: Optional[WalkerConfig] = None):
        self.config = config or WalkerConfig()
        self._session: Optional[aiohttp.ClientSession] = None

    def _new_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            headers={
                "Accept": self.config.accept_header,
                "User-Agent": self.config.user_agent,
            },
        )

    async def __aenter__(self) -> "HTTPResolver":
        self._session = self._new_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the shared session, if one is open."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _get(self, session: aiohttp.ClientSession, url: str) -> bytes:
        try:
            async with session.get(url) as response:
                if response.status < 200 or response.status >= 300:
                    raise ResolutionError(url, f"HTTP {response.status}")
                return await response.read()
        except aiohttp.ClientError as e:
            raise ResolutionError(url, str(e) or type(e).__name__) from e
        except asyncio.TimeoutError as e:
            raise ResolutionError(url, f"timed out after {self.config.timeout}s") from e

    async def fetch_bytes(self, url: str) -> bytes:
        """Fetch the raw body behind a URL."""
        logger.debug(f"GET {url}")
        if self._session is not None:
            return await self._get(self._session, url)
        async with self._new_session() as session:
            return await self._get(session, url)

    async def resolve(self, url: str) -> Node:
        body = await self.fetch_bytes(url)
        try:
            return Node.from_dict(json.loads(body))
        except (UnicodeDecodeError, json.JSONDecodeError, DecodeError) as e:
            raise ResolutionError(url, f"invalid document: {e}") from e
