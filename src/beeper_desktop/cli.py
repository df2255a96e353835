"""
Command line access to a running Beeper Desktop.

Usage:
    beeper-desktop token
    beeper-desktop chats --query team --all
    beeper-desktop send '!room:beeper.local' "hello"
    beeper-desktop archive '!room:beeper.local' --format html -o chat.html

The token is read from BEEPER_ACCESS_TOKEN (or a .env file given with
--env-file). Results are printed as JSON with API (camelCase) names.
"""

import argparse
import html
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .client import BeeperDesktop
from .core.env_config import load_from_env, print_config_summary
from .core.exceptions import BeeperDesktopError
from .core.logging import LoggingConfig
from .resources.shared import ApiModel, Attachment, Chat, Message

ARCHIVE_PAGE_SIZE = 100
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, ApiModel):
        return value.to_wire()
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def _print_json(value: Any) -> None:
    print(json.dumps(_to_jsonable(value), indent=2, ensure_ascii=False))


def _make_client(args: argparse.Namespace) -> BeeperDesktop:
    overrides: Dict[str, Any] = {}
    if args.base_url:
        overrides['base_url'] = args.base_url
    if args.log_level:
        overrides['logging'] = LoggingConfig.create(level=args.log_level)
    return BeeperDesktop(config=load_from_env(env_file=args.env_file, **overrides))

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# COMMANDS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def cmd_token(client: BeeperDesktop, args: argparse.Namespace) -> None:
    _print_json(client.token.info())


def cmd_accounts(client: BeeperDesktop, args: argparse.Namespace) -> None:
    _print_json(client.accounts.list())


def cmd_chats(client: BeeperDesktop, args: argparse.Namespace) -> None:
    params = dict(query=args.query, limit=args.limit)
    if args.all:
        _print_json(list(client.chats.search_all(**params)))
    else:
        _print_json(client.chats.search(**params).items)


def cmd_messages(client: BeeperDesktop, args: argparse.Namespace) -> None:
    params = dict(
        chat_ids=args.chat_id or [],
        account_ids=args.account_id or [],
        query=args.query,
        limit=args.limit,
    )
    if args.all:
        _print_json(list(client.messages.search_all(**params)))
    else:
        _print_json(client.messages.search(**params).items)


def cmd_send(client: BeeperDesktop, args: argparse.Namespace) -> None:
    _print_json(client.messages.send(chat_id=args.chat_id, text=args.text, reply_to_id=args.reply_to))


def cmd_contacts(client: BeeperDesktop, args: argparse.Namespace) -> None:
    _print_json(client.contacts.search(account_id=args.account_id, query=args.query).items)


def fetch_chat_messages(client: BeeperDesktop, chat: Chat) -> List[Message]:
    """All messages of a chat, oldest first."""
    messages = list(client.messages.search_all(
        chat_ids=[chat.id],
        account_ids=[chat.account_id],
        limit=ARCHIVE_PAGE_SIZE,
        direction="before",
    ))
    messages.sort(key=lambda m: m.timestamp)
    return messages


def render_markdown(chat: Chat, messages: List[Message], archived_at: datetime) -> str:
    lines = [
        f"# {chat.title}",
        "",
        f"**Network:** {chat.network}",
        "",
        f"**Chat ID:** `{chat.id}`",
        "",
        f"**Participants:** {chat.participants.total}",
        "",
    ]
    if chat.last_activity:
        lines += [f"**Last Activity:** {chat.last_activity}", ""]
    lines += [
        f"**Total Messages:** {len(messages)}",
        "",
        f"**Archived At:** {archived_at.isoformat()}",
        "",
        "---",
        "",
    ]

    if chat.participants.items:
        lines += ["## Participants", ""]
        for i, user in enumerate(chat.participants.items, 1):
            lines.append(f"{i}. **{user.full_name or 'Unknown'}** (`{user.id}`)")
        lines += ["", "---", ""]

    lines += ["## Messages", ""]
    current_date = None
    for i, message in enumerate(messages, 1):
        day = message.timestamp.date()
        if day != current_date:
            current_date = day
            lines += ["", f"### {message.timestamp.strftime('%A, %B %d, %Y')}", ""]

        lines += [
            f"#### Message #{i}",
            "",
            f"**From:** {message.sender_name or 'Unknown'}  ",
            f"**Time:** {message.timestamp.strftime('%H:%M:%S')}  ",
            f"**Message ID:** `{message.message_id}`",
            "",
        ]
        if message.text:
            lines += [message.text, ""]
        for attachment in message.attachments or []:
            lines.append(f"- Attachment: {attachment.file_name or attachment.type}")
        if message.attachments:
            lines.append("")

    return "\n".join(lines) + "\n"


def render_json(chat: Chat, messages: List[Message], archived_at: datetime) -> str:
    payload = {
        "title": chat.title,
        "network": chat.network,
        "chat_id": chat.id,
        "participants": chat.participants.to_wire(),
        "last_activity": chat.last_activity,
        "archived_at": archived_at.isoformat(),
        "messages": [m.to_wire() for m in messages],
    }
    if payload["last_activity"] is None:
        del payload["last_activity"]
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def format_file_size(size: int) -> str:
    """Human readable size: ``512 B``, ``1.5 KB``, ``3.0 MB``."""
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in "KMGTP":
        if value < 1024:
            break
        value /= 1024
    else:
        unit = "E"
    return f"{value:.1f} {unit}B"


def _attachment_parts(attachment: Attachment) -> List[str]:
    parts = [attachment.file_name or "unknown", f"({attachment.type})"]
    if attachment.file_size is not None:
        parts.append(format_file_size(attachment.file_size))
    return parts


def _reaction_keys(message: Message) -> str:
    return ", ".join(r.reaction_key for r in message.reactions or [])


def render_text(chat: Chat, messages: List[Message], archived_at: datetime) -> str:
    rule = "-" * 40
    lines = [
        f"Chat: {chat.title}",
        f"Network: {chat.network}",
        f"Chat ID: {chat.id}",
        f"Participants: {chat.participants.total}",
    ]
    if chat.last_activity:
        lines.append(f"Last Activity: {chat.last_activity}")
    lines += [f"Total Messages: {len(messages)}", rule, ""]

    current_date = None
    for i, message in enumerate(messages, 1):
        day = message.timestamp.date()
        if day != current_date:
            current_date = day
            lines += [message.timestamp.strftime('%A, %B %d, %Y'), "=" * 40]

        lines += [
            f"Message #{i}",
            f"From: {message.sender_name or 'Unknown'}",
            f"Time: {message.timestamp.strftime(TIME_FORMAT)}",
            f"Message ID: {message.message_id}",
            message.text or "[No text content]",
        ]
        if message.attachments:
            lines.append("Attachments:")
            for attachment in message.attachments:
                parts = _attachment_parts(attachment)
                if attachment.src_url:
                    parts.append(attachment.src_url)
                lines.append("- " + " ".join(parts))
        if message.reactions:
            lines.append(f"Reactions: {_reaction_keys(message)}")
        lines.append(rule)

    lines += [
        f"Archived: {archived_at.strftime(TIME_FORMAT)}",
        f"Total Messages: {len(messages)}",
    ]
    return "\n".join(lines) + "\n"


_HTML_STYLE = (
    "body{font-family:system-ui,sans-serif;margin:2rem;max-width:960px;}"
    ".message{border-top:1px solid #ddd;padding:1rem 0;}"
    ".meta{color:#555;font-size:0.9rem;}"
    "blockquote{background:#f8f8f8;border-left:4px solid #ccc;padding:0.75rem;margin:0.75rem 0;}"
)


def render_html(chat: Chat, messages: List[Message], archived_at: datetime) -> str:
    """Standalone HTML page; all server text is escaped."""
    esc = html.escape
    out = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{esc(chat.title)}</title>",
        f"<style>{_HTML_STYLE}</style>",
        "</head>",
        "<body>",
        f"<h1>{esc(chat.title)}</h1>",
        "<ul>",
        f"<li><strong>Network:</strong> {esc(chat.network)}</li>",
        f"<li><strong>Chat ID:</strong> <code>{esc(chat.id)}</code></li>",
        f"<li><strong>Participants:</strong> {chat.participants.total}</li>",
    ]
    if chat.last_activity:
        out.append(f"<li><strong>Last Activity:</strong> {esc(str(chat.last_activity))}</li>")
    out += [f"<li><strong>Total Messages:</strong> {len(messages)}</li>", "</ul>"]

    if chat.participants.items:
        out += ["<h2>Participants</h2>", "<ol>"]
        for user in chat.participants.items:
            out.append(f"<li><strong>{esc(user.full_name or 'Unknown')}</strong> (<code>{esc(user.id)}</code>)</li>")
        out.append("</ol>")

    out.append("<h2>Messages</h2>")
    current_date = None
    for i, message in enumerate(messages, 1):
        day = message.timestamp.date()
        if day != current_date:
            current_date = day
            out.append(f"<h3>{message.timestamp.strftime('%A, %B %d, %Y')}</h3>")

        out += [
            '<div class="message">',
            f'<div class="meta"><strong>Message #{i}</strong> &middot; '
            f"From {esc(message.sender_name or 'Unknown')} at {message.timestamp.strftime('%H:%M:%S')} &middot; "
            f"ID <code>{esc(message.message_id)}</code></div>",
        ]
        if message.text:
            text = esc(message.text).replace("\n", "<br>")
            out.append(f"<blockquote>{text}</blockquote>")
        else:
            out.append("<blockquote><em>No text content</em></blockquote>")

        if message.attachments:
            out.append("<div><strong>Attachments:</strong><ul>")
            for attachment in message.attachments:
                item = esc(" ".join(_attachment_parts(attachment)))
                if attachment.src_url:
                    item += f' &middot; <a href="{esc(attachment.src_url)}">Download</a>'
                out.append(f"<li>{item}</li>")
            out.append("</ul></div>")
        if message.reactions:
            out.append(f"<div><strong>Reactions:</strong> {esc(_reaction_keys(message))}</div>")
        out.append("</div>")

    out += [
        f"<footer><p><strong>Archived:</strong> {archived_at.strftime(TIME_FORMAT)}</p>",
        f"<p><strong>Total Messages:</strong> {len(messages)}</p></footer>",
        "</body>",
        "</html>",
    ]
    return "\n".join(out) + "\n"


ARCHIVE_RENDERERS: Dict[str, Callable[[Chat, List[Message], datetime], str]] = {
    "html": render_html,
    "json": render_json,
    "markdown": render_markdown,
    "text": render_text,
}


def cmd_archive(client: BeeperDesktop, args: argparse.Namespace) -> None:
    chat = client.chats.retrieve(chat_id=args.chat_id)
    messages = fetch_chat_messages(client, chat)
    content = ARCHIVE_RENDERERS[args.format](chat, messages, datetime.now(timezone.utc))

    if args.output:
        args.output.write_text(content, encoding="utf-8")
        print(f"Archived {len(messages)} messages to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(content)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ENTRYPOINT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beeper-desktop",
        description="Query and control a running Beeper Desktop",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check the token
  beeper-desktop token

  # All chats matching a query, following every page
  beeper-desktop chats --query team --all

  # Messages of one chat
  beeper-desktop messages --chat-id '!room:beeper.local' --limit 20

  # Export a chat
  beeper-desktop archive '!room:beeper.local' --format markdown -o chat.md
        """
    )

    parser.add_argument("--env-file", help="Read settings from a .env file")
    parser.add_argument("--base-url", help="Beeper Desktop address (default: BEEPER_DESKTOP_BASE_URL)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log requests to stderr at this level"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("token", help="Show information about the access token").set_defaults(handler=cmd_token)
    sub.add_parser("accounts", help="List connected accounts").set_defaults(handler=cmd_accounts)
    sub.add_parser("config", help="Show the resolved configuration")

    chats = sub.add_parser("chats", help="Search chats")
    chats.add_argument("--query", help="Text to search for")
    chats.add_argument("--limit", type=int, help="Page size")
    chats.add_argument("--all", action="store_true", help="Follow every page")
    chats.set_defaults(handler=cmd_chats)

    messages = sub.add_parser("messages", help="Search messages")
    messages.add_argument("--chat-id", action="append", help="Limit to a chat (repeatable)")
    messages.add_argument("--account-id", action="append", help="Limit to an account (repeatable)")
    messages.add_argument("--query", help="Text to search for")
    messages.add_argument("--limit", type=int, help="Page size")
    messages.add_argument("--all", action="store_true", help="Follow every page")
    messages.set_defaults(handler=cmd_messages)

    send = sub.add_parser("send", help="Send a text message")
    send.add_argument("chat_id", help="Target chat")
    send.add_argument("text", help="Message text")
    send.add_argument("--reply-to", help="Message ID to reply to")
    send.set_defaults(handler=cmd_send)

    contacts = sub.add_parser("contacts", help="Search contacts of an account")
    contacts.add_argument("account_id", help="Account to search in")
    contacts.add_argument("query", help="Name, username or phone number")
    contacts.set_defaults(handler=cmd_contacts)

    archive = sub.add_parser("archive", help="Export every message of a chat")
    archive.add_argument("chat_id", help="Chat to export")
    archive.add_argument("--format", choices=sorted(ARCHIVE_RENDERERS), default="markdown")
    archive.add_argument("-o", "--output", type=Path, help="Write to file instead of stdout")
    archive.set_defaults(handler=cmd_archive)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        client = _make_client(args)
    except BeeperDesktopError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    with client:
        if args.command == "config":
            print_config_summary(client.config)
            return 0
        try:
            args.handler(client, args)
        except BeeperDesktopError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
