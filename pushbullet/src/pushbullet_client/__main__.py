"""
Command line entry point for the Pushbullet client.

Usage:
    python -m pushbullet_client devices
    python -m pushbullet_client note "title" "message" [--device IDEN]
    python -m pushbullet_client link "title" "message" https://example.com
    python -m pushbullet_client pushes --limit 5

The access token is read from --config (YAML) or PUSHBULLET_TOKEN
(environment or .env file).
"""

import argparse
import logging
import sys
from typing import List, Optional

from .client import PushbulletClient
from .config import get_access_token
from .errors import PushbulletError
from .headers import ResponseHeaders
from .push import (
    BroadcastTarget,
    ChannelTarget,
    ClientTarget,
    DeviceTarget,
    EmailTarget,
    LinkRequest,
    ListCondition,
    NoteRequest,
    Target,
)


def _add_target_options(parser: argparse.ArgumentParser):
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--device", help="iden of the device to push to")
    group.add_argument("--email", help="email address to push to")
    group.add_argument("--channel", help="channel tag to push to")
    group.add_argument("--client", help="OAuth client iden to push to")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pushbullet_client",
        description="Minimal Pushbullet API command line client."
    )
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("devices", help="list devices")

    note = sub.add_parser("note", help="create a note push")
    note.add_argument("title")
    note.add_argument("body")
    _add_target_options(note)

    link = sub.add_parser("link", help="create a link push")
    link.add_argument("title")
    link.add_argument("body")
    link.add_argument("url")
    _add_target_options(link)

    pushes = sub.add_parser("pushes", help="list push history")
    pushes.add_argument("--limit", type=int, default=10)
    pushes.add_argument(
        "--all", action="store_true", help="include deleted pushes"
    )
    pushes.add_argument(
        "--modified-after", type=float, help="float unix timestamp"
    )
    pushes.add_argument("--cursor")
    return parser


def _target_from_args(args: argparse.Namespace) -> Target:
    if args.device is not None:
        return DeviceTarget(device_iden=args.device)
    if args.email is not None:
        return EmailTarget(email=args.email)
    if args.channel is not None:
        return ChannelTarget(channel_tag=args.channel)
    if args.client is not None:
        return ClientTarget(client_iden=args.client)
    return BroadcastTarget()


def _print_headers(headers: ResponseHeaders):
    reset = headers.ratelimit_reset_time()
    print("response_headers:")
    print(f"  ratelimit_limit: {headers.ratelimit_limit or 0}")
    print(f"  ratelimit_remaining: {headers.ratelimit_remaining or 0}")
    print(f"  ratelimit_reset (UTC): {reset.isoformat() if reset else ''}")


def _make_client(args: argparse.Namespace) -> PushbulletClient:
    if args.config:
        return PushbulletClient.from_settings(args.config)
    return PushbulletClient(get_access_token())


def run(args: argparse.Namespace, client: PushbulletClient) -> int:
    if args.command == "devices":
        devices, headers = client.list_devices()
        for device in devices:
            print(f"result: {device!r}")
    elif args.command in ("note", "link"):
        if args.command == "note":
            request = NoteRequest(title=args.title, body=args.body)
        else:
            request = LinkRequest(title=args.title, body=args.body, url=args.url)
        push, headers = client.create_push(_target_from_args(args), request)
        print(f"result: {push!r}")
    else:
        condition = ListCondition(
            active=not args.all,
            limit=args.limit,
            modified_after=args.modified_after,
            cursor=args.cursor
        )
        pushes, headers = client.list_push(condition)
        for push in pushes:
            print(f"result: {push!r}")
    _print_headers(headers)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    try:
        return run(args, _make_client(args))
    except (PushbulletError, KeyError, FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
