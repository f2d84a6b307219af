"""Command line entry point: list the files and hunks of a patch."""

import argparse
import json
import sys
from typing import List, Optional

import structlog

from diff_parser import Diff, PatchError
from git_operations import parse_commit
from log_setup import configure_logging
from settings import LOG_LEVELS

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-patch-view",
        description="Show the file sections and hunks of a unified diff.",
    )
    parser.add_argument("patch", nargs="?", default="-",
                        help="Patch file to read ('-' or omitted for stdin)")
    parser.add_argument("--repo", help="Read the patch from a commit in this git repository")
    parser.add_argument("--commit", help="Commit to diff (requires --repo)")
    parser.add_argument("--parent", help="Diff against this commit instead of the first parent")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper,
                        help="Override PATCH_VIEW_LOG_LEVEL")
    return parser


def read_patch(path: str) -> str:
    """Read patch text from a file, or from stdin for '-'."""
    if path == "-":
        return sys.stdin.read()
    # newline="" keeps "\r\n" terminators as they are on disk
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def render_text(diff: Diff) -> str:
    lines = []
    for entry in diff.summary():
        noun = "chunk" if entry["chunks"] == 1 else "chunks"
        lines.append(f"{entry['name']}: {entry['chunks']} {noun}")
    total_chunks = sum(len(patched_file.chunks) for patched_file in diff.files)
    lines.append(f"{len(diff.files)} file(s), {total_chunks} chunk(s)")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.commit and not args.repo:
        parser.error("--commit requires --repo")
    if args.repo and not args.commit:
        parser.error("--repo requires --commit")

    configure_logging(args.log_level)

    try:
        if args.repo:
            diff = parse_commit(args.repo, args.commit, args.parent)
        else:
            diff = Diff.parse(read_patch(args.patch))

        if args.json:
            output = json.dumps(diff.summary(), indent=2)
        else:
            output = render_text(diff)
    except (PatchError, OSError, UnicodeDecodeError) as exc:
        logger.debug("patch_read_failed", exc_info=True)
        print(f"git-patch-view: {exc}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
