"""Script Registry command line.

Created: 2026-10-12

Usage:
  script-registry tree                     Show the registry tree
  script-registry tree --filter foo        Show only matching entries
  script-registry tree --json              Dump the tree as JSON
  script-registry mkdir Reports --parent 1 Create a directory
  script-registry rename 2 "Nightly jobs"  Rename a directory
  script-registry move 10 1 2              Move script 10 from directory 1 to 2
  script-registry rm-dir 2 [--yes]         Delete a directory
  script-registry rm-script 10 [--yes]     Delete a script
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.tree import Tree as RichTree

from scriptregistry.client import RegistryClient
from scriptregistry.config import get_settings
from scriptregistry.coordinator import RegistryCoordinator
from scriptregistry.errors import OperationFailed
from scriptregistry.events import MoveEvent
from scriptregistry.logging_setup import setup_logging
from scriptregistry.models import Directory, Tree
from scriptregistry.view import RegistryView

logger = logging.getLogger(__name__)
console = Console()


def render_tree(tree: Tree, title: str = "Scripts") -> RichTree:
    """Build a Rich tree for display."""
    root = RichTree(f"[bold]{escape(title)}[/bold]")

    def add(node: RichTree, directory: Directory) -> None:
        branch = node.add(f"[blue]{escape(directory.name)}[/blue] [dim]#{directory.id}[/dim]")
        for child in directory.children:
            add(branch, child)
        for script in directory.scripts:
            branch.add(f"{escape(script.name)} [dim]#{script.id}[/dim]")

    for directory in tree.directories:
        add(root, directory)
    return root


def _confirm(assume_yes: bool):
    def confirm(prompt: str) -> bool:
        return assume_yes or Confirm.ask(prompt, console=console)

    return confirm


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="script-registry",
        description="Organize registry scripts into directories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default=None, help="Log level (default from settings)")
    sub = parser.add_subparsers(dest="command", required=True)

    tree = sub.add_parser("tree", help="Show the registry tree")
    tree.add_argument("--filter", default="", help="Filter text (2+ characters)")
    tree.add_argument("--json", action="store_true", help="Print JSON instead of a tree")

    mkdir = sub.add_parser("mkdir", help="Create a directory")
    mkdir.add_argument("name")
    mkdir.add_argument("--parent", type=int, default=None)

    rename = sub.add_parser("rename", help="Rename a directory")
    rename.add_argument("id", type=int)
    rename.add_argument("name")

    move = sub.add_parser("move", help="Move a script to another directory")
    move.add_argument("script_id", type=int)
    move.add_argument("source_id", type=int)
    move.add_argument("destination_id", type=int)

    for name in ("rm-dir", "rm-script"):
        rm = sub.add_parser(name, help=f"Delete a {name[3:]}")
        rm.add_argument("id", type=int)
        rm.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    return parser


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    coordinator = RegistryCoordinator(
        RegistryClient(settings), confirm=_confirm(getattr(args, "yes", False))
    )
    view = RegistryView(coordinator, settings)
    await coordinator.load()

    if args.command == "tree":
        view.set_filter(args.filter)
        visible = view.visible_tree
        if args.json:
            console.print_json(json.dumps(visible.to_list()))
        elif view.empty_message:
            console.print(view.empty_message)
        else:
            console.print(render_tree(visible))
        return 0

    if args.command in ("mkdir", "rename"):
        dialog = view.directory_dialog
        if args.command == "mkdir":
            dialog.open_for_create(args.parent)
        else:
            await dialog.open_for_edit(args.id)
        dialog.set_field("name", args.name)
        draft = dialog.draft
        if not await dialog.submit():
            message = draft.field_error("name") or draft.general_error or ""
            console.print(f"[red]{escape(message)}[/red]")
            return 1
        console.print(render_tree(coordinator.tree))
        return 0

    if args.command == "move":
        await coordinator.move_script(
            MoveEvent(args.script_id, args.source_id, args.destination_id)
        )
        console.print(render_tree(coordinator.tree))
        return 0

    if args.command == "rm-dir":
        directory = coordinator.tree.find_directory(args.id)
        name = directory.name if directory else str(args.id)
        deleted = await coordinator.delete_directory(args.id, name)
    else:
        script = coordinator.tree.find_script(args.id)
        name = script.name if script else str(args.id)
        deleted = await coordinator.delete_script(args.id, name)
    if deleted:
        console.print(render_tree(coordinator.tree))
    return 0


def main() -> None:
    """Main entry point."""
    args = build_parser().parse_args()
    setup_logging(level=args.log_level or get_settings().log_level)
    try:
        sys.exit(asyncio.run(run(args)))
    except OperationFailed as e:
        logger.error(f"Operation failed: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
