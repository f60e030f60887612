#!/usr/bin/env python3
"""
apwalk CLI

Command-line interface for walking ActivityPub outboxes:
  apwalk activities - List the activities of an outbox
  apwalk media - List image attachments of the posts in an outbox

Usage:
  apwalk activities <file-or-url> [-n <max>] [--config <file>]
  apwalk media <file-or-url> [-n <max>] [--config <file>]
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import WalkerConfig
from .model import DecodeError
from .outbox import Outbox
from .resolver import HTTPResolver, ResolutionError


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def load_config(args) -> WalkerConfig:
    """Load the config file, if any, and apply command-line overrides."""
    config = WalkerConfig.from_file(Path(args.config)) if args.config else WalkerConfig()
    if args.max_items is not None:
        config = replace(config, max_items=args.max_items)
    return config


async def load_outbox(source: str, resolver: HTTPResolver) -> Outbox:
    """Read the root collection from a URL or a local file."""
    if is_url(source):
        data = await resolver.fetch_bytes(source)
    else:
        data = Path(source).read_bytes()
    return Outbox.from_bytes(data)


def summarize(text: Optional[str], width: int = 80) -> str:
    if not text:
        return ""
    text = " ".join(text.split())
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


async def list_activities(source: str, config: WalkerConfig) -> List[str]:
    lines = []
    async with HTTPResolver(config) as resolver:
        outbox = await load_outbox(source, resolver)
        for activity in await outbox.activity_items(resolver, config.max_items):
            if not activity.is_create():
                lines.append(f"other   {activity.id() or '-'}")
                continue

            item = await activity.item(resolver)
            if item is None:
                lines.append(f"create  {activity.id() or '-'}  (no object)")
                continue

            flags = []
            if item.is_reply():
                flags.append("reply")
            if item.is_sensitive():
                flags.append("sensitive")
            flag_text = f" [{','.join(flags)}]" if flags else ""
            lines.append(f"create  {item.url() or '-'}{flag_text}  {summarize(item.content())}".rstrip())
    return lines


async def list_media(source: str, config: WalkerConfig) -> List[str]:
    lines = []
    async with HTTPResolver(config) as resolver:
        outbox = await load_outbox(source, resolver)
        for activity in await outbox.activity_items(resolver, config.max_items):
            if not activity.is_create():
                continue
            item = await activity.item(resolver)
            if item is None:
                continue
            for attachment in await item.attachments(resolver):
                if attachment.is_media() and attachment.url():
                    lines.append(attachment.url())
    return lines


def cmd_activities(args) -> int:
    """List activities."""
    config = load_config(args)
    for line in asyncio.run(list_activities(args.source, config)):
        print(line)
    return 0


def cmd_media(args) -> int:
    """List media attachment URLs."""
    config = load_config(args)
    for url in asyncio.run(list_media(args.source, config)):
        print(url)
    return 0


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog="apwalk",
        description="apwalk - Walk ActivityPub outboxes",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    for name, help_text in (
        ("activities", "List the activities of an outbox"),
        ("media", "List image attachments of posts in an outbox"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("source", help="Outbox JSON file or URL")
        sub.add_argument("-n", "--max-items", type=int,
                         help="Maximum number of activities (default from config: 20)")
        sub.add_argument("--config", help="YAML configuration file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    commands = {
        "activities": cmd_activities,
        "media": cmd_media,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        status = command(args)
    except (DecodeError, ResolutionError, ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
