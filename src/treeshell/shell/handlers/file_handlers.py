"""File handlers: backup, find, findlike, tree, empty, prefix, suffix, rm, mkdir, touch."""

from __future__ import annotations

from dataclasses import dataclass

from treeshell.filesystem.copying import backup, empty
from treeshell.filesystem.errors import NotFoundError, UsageError
from treeshell.filesystem.mutation import create_file, make_directory, remove, rename_prefix, rename_suffix
from treeshell.filesystem.paths import PathResolver
from treeshell.filesystem.search import find_exact, find_substring, format_matches
from treeshell.filesystem.tree import render_tree
from treeshell.filesystem.types import ItemOutcome, OperationResult
from treeshell.shell.context import ShellContext
from treeshell.shell.dispatcher import CommandHandler

RELATIVE_FLAG = "-r"


def _report_failures(failures: list[ItemOutcome], context: ShellContext) -> None:
    for failure in failures:
        context.console.outcome(failure)


# --- BackupHandler ---


@dataclass
class BackupPayload:
    source: str
    destination: str | None


class BackupHandler(CommandHandler):
    names = ("backup",)
    usage = "backup {source} {destination}"
    summary = "copies the source dir/file into the destination dir (default: current dir)"

    def validate(self, args: list[str]) -> BackupPayload:
        if not args:
            raise UsageError("Expected source path")
        return BackupPayload(source=args[0], destination=args[1] if len(args) > 1 else None)

    def execute(self, payload: BackupPayload, context: ShellContext) -> None:
        result = backup(context.cwd, payload.source, payload.destination, progress=context.console.outcome)
        if result.success:
            context.console.success(f"'{payload.source}' backed up successfully")
        else:
            context.console.error(f"Backup of '{payload.source}' finished with {len(result.failures)} error(s)")


# --- FindHandler / FindLikeHandler ---


@dataclass
class SearchPayload:
    pattern: str
    relative: bool


def _parse_search_args(args: list[str]) -> SearchPayload:
    if not args:
        raise UsageError("Expected filename")
    return SearchPayload(pattern=args[0], relative=RELATIVE_FLAG in args[1:])


class FindHandler(CommandHandler):
    names = ("find",)
    usage = "find {file name} [-r]"
    summary = "searches the subdirectories for a file with the specified name"

    def validate(self, args: list[str]) -> SearchPayload:
        return _parse_search_args(args)

    def execute(self, payload: SearchPayload, context: ShellContext) -> None:
        result = find_exact(context.cwd, payload.pattern)
        _report_failures(result.failures, context)
        if result.first is None:
            raise NotFoundError("File not found", {"name": payload.pattern})
        context.console.line(format_matches(result, relative=payload.relative)[0])


class FindLikeHandler(CommandHandler):
    names = ("findlike",)
    usage = "findlike {match} [-r]"
    summary = "searches the subdirectories for files whose path contains the match"

    def validate(self, args: list[str]) -> SearchPayload:
        return _parse_search_args(args)

    def execute(self, payload: SearchPayload, context: ShellContext) -> None:
        result = find_substring(context.cwd, payload.pattern)
        _report_failures(result.failures, context)
        context.console.info(f"Found {result.count} matches.")
        for line in format_matches(result, relative=payload.relative):
            context.console.line(line)


# --- TreeHandler ---


@dataclass
class TreePayload:
    depth: int | None


class TreeHandler(CommandHandler):
    names = ("tree",)
    usage = "tree {depth}"
    summary = "displays the current directory and subdirectories as a tree with a specified depth"

    def validate(self, args: list[str]) -> TreePayload:
        if not args:
            return TreePayload(depth=None)
        try:
            depth = int(args[0])
        except ValueError:
            depth = -1
        if depth < 0:
            raise UsageError("Depth must be a non-negative integer", {"depth": args[0]})
        return TreePayload(depth=depth)

    def execute(self, payload: TreePayload, context: ShellContext) -> None:
        settings = context.settings
        depth = settings.tree_depth if payload.depth is None else payload.depth
        result = render_tree(context.cwd, depth, indent=settings.tree_indent, marker=settings.tree_marker)
        context.console.line(result.text, end="")
        _report_failures(result.failures, context)


# --- EmptyHandler ---


@dataclass
class PathPayload:
    path: str


class EmptyHandler(CommandHandler):
    names = ("empty",)
    usage = "empty {dir name}"
    summary = "moves the contents of the specified dir up into the current directory"

    def validate(self, args: list[str]) -> PathPayload:
        if not args:
            raise UsageError("Expected a directory path")
        return PathPayload(path=args[0])

    def execute(self, payload: PathPayload, context: ShellContext) -> None:
        result = empty(context.cwd, payload.path, progress=context.console.outcome)
        if result.success:
            context.console.success("Finished emptying directory")
        else:
            context.console.error(f"Finished emptying directory with {len(result.failures)} error(s)")


# --- PrefixHandler / SuffixHandler ---


@dataclass
class AffixPayload:
    value: str


def _report_renames(result: OperationResult, context: ShellContext) -> None:
    for outcome in result.outcomes:
        context.console.outcome(outcome)
    if result.success:
        context.console.success(f"Renamed {len(result.succeeded)} file(s)")
    else:
        context.console.error(f"Renamed {len(result.succeeded)} file(s), {len(result.failures)} failed")


class PrefixHandler(CommandHandler):
    names = ("prefix",)
    usage = "prefix {prefix}"
    summary = "adds the specified prefix to all the files in the current directory"

    def validate(self, args: list[str]) -> AffixPayload:
        if not args or not args[0]:
            raise UsageError("Expected prefix")
        return AffixPayload(value=args[0])

    def execute(self, payload: AffixPayload, context: ShellContext) -> None:
        _report_renames(rename_prefix(context.cwd, payload.value), context)


class SuffixHandler(CommandHandler):
    names = ("suffix",)
    usage = "suffix {suffix}"
    summary = "adds the specified suffix to all the files in the current directory"

    def validate(self, args: list[str]) -> AffixPayload:
        if not args or not args[0]:
            raise UsageError("Expected suffix")
        return AffixPayload(value=args[0])

    def execute(self, payload: AffixPayload, context: ShellContext) -> None:
        _report_renames(rename_suffix(context.cwd, payload.value), context)


# --- RemoveHandler ---


class RemoveHandler(CommandHandler):
    names = ("rm", "del")
    usage = "rm {file/dir name}"
    summary = "deletes the specified dir/file"

    def validate(self, args: list[str]) -> PathPayload:
        if not args:
            raise UsageError("Expected a file or directory name")
        return PathPayload(path=" ".join(args))

    def execute(self, payload: PathPayload, context: ShellContext) -> None:
        result = remove(context.cwd, payload.path, restrict_to_working_directory=context.settings.restrict_remove_to_cwd)
        name = PathResolver.resolve(context.cwd, payload.path).name
        if result.success:
            context.console.success(f"Removed '{name}' successfully")
            return
        context.console.error(f"An error occurred while trying to delete '{name}'")
        for failure in result.failures:
            context.console.error(failure.error or "unknown error")


# --- MakeDirectoryHandler / TouchHandler ---


class MakeDirectoryHandler(CommandHandler):
    names = ("mkdir",)
    usage = "mkdir {dir name}"
    summary = "creates a directory"

    def validate(self, args: list[str]) -> PathPayload:
        if not args:
            raise UsageError("Expected a directory name")
        return PathPayload(path=" ".join(args))

    def execute(self, payload: PathPayload, context: ShellContext) -> None:
        make_directory(context.cwd, payload.path)
        context.console.success(f"Directory '{payload.path}' created successfully")


class TouchHandler(CommandHandler):
    names = ("touch",)
    usage = "touch {file name}"
    summary = "creates an empty file"

    def validate(self, args: list[str]) -> PathPayload:
        if not args:
            raise UsageError("Expected a file name")
        return PathPayload(path=" ".join(args))

    def execute(self, payload: PathPayload, context: ShellContext) -> None:
        create_file(context.cwd, payload.path)
        context.console.success(f"File '{payload.path}' created successfully")
