"""Command-line front end for the directory controller.

Usage:
    directory-admin list
    directory-admin create --uid alice --name "Alice" --email alice@example.com
    directory-admin update alice --name "Alice B."
    directory-admin delete alice --yes
"""
from __future__ import annotations
import argparse
import logging
import sys

from directory_admin.config import load_settings
from directory_admin.core.controller import DirectoryController
from directory_admin.core.directory import DirectoryClient, UserService
from directory_admin.core.view import render_table

FIELD_OPTIONS = (
    ("--email", "email"),
    ("--directory", "directory"),
    ("--given-name", "given_name"),
    ("--middle-name", "middle_name"),
    ("--family-name", "family_name"),
    ("--nickname", "nickname"),
    ("--phone-number", "phone_number"),
    ("--comment", "comment"),
)


def prompt_confirm(uid: str) -> bool:
    """Ask on stdin before deleting."""
    answer = input(f"Are you sure you want to delete user '{uid}'? [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="directory-admin", description="Directory user management")
    parser.add_argument("--url", default=None, help="Directory API base URL (default: WEAVY_URL)")
    parser.add_argument("--api-key", default=None, help="Bearer token (default: WEAVY_API_KEY)")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("list")

    sc = sub.add_parser("create")
    sc.add_argument("--uid", required=True)
    sc.add_argument("--name", required=True)
    _add_field_options(sc)

    su = sub.add_parser("update")
    su.add_argument("uid")
    su.add_argument("--name")
    _add_field_options(su)

    sd = sub.add_parser("delete")
    sd.add_argument("uid")
    sd.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    return parser


def _add_field_options(sp: argparse.ArgumentParser) -> None:
    for option, dest in FIELD_OPTIONS:
        sp.add_argument(option, dest=dest)
    sp.add_argument("--tag", dest="tags", action="append", help="Repeat for several tags")


def _apply_fields(controller: DirectoryController, args: argparse.Namespace) -> None:
    for _, dest in FIELD_OPTIONS:
        value = getattr(args, dest)
        if value is not None:
            controller.edit_field(dest, value)
    if args.tags:
        controller.edit_field("tags", args.tags)


def _finish(controller: DirectoryController, label: str) -> int:
    if controller.state.error:
        print(f"[{label}] Error: {controller.state.error}", file=sys.stderr)
        return 1
    print(render_table(controller.state.users))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_settings(api_key=args.api_key, base_url=args.url)

    service = UserService(DirectoryClient.from_config(cfg))
    confirm = (lambda _uid: True) if getattr(args, "yes", False) else prompt_confirm
    controller = DirectoryController(service, confirm=confirm)

    if args.cmd == "list":
        controller.refresh()
        return _finish(controller, "list")

    if args.cmd == "create":
        controller.edit_field("uid", args.uid)
        controller.edit_field("name", args.name)
        _apply_fields(controller, args)
        controller.submit()
        return _finish(controller, "create")

    if args.cmd == "update":
        controller.refresh()
        if controller.state.error:
            return _finish(controller, "update")
        user = controller.find_user(args.uid)
        if user is None:
            print(f"[update] Error: user '{args.uid}' not found", file=sys.stderr)
            return 1
        controller.begin_edit(user)
        if args.name is not None:
            controller.edit_field("name", args.name)
        _apply_fields(controller, args)
        controller.submit()
        return _finish(controller, "update")

    if args.cmd == "delete":
        before = controller.state
        controller.delete(args.uid)
        if controller.state is before:
            print(f"[delete] Cancelled; user '{args.uid}' kept")
            return 0
        return _finish(controller, "delete")

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
