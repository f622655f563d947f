"""Tests for the command dispatcher."""

from __future__ import annotations

from typing import Any

import pytest

from treeshell.filesystem.errors import NotFoundError, UsageError
from treeshell.shell.context import ShellContext
from treeshell.shell.dispatcher import UNKNOWN_COMMAND, CommandDispatcher, CommandHandler, tokenize


class MockHandler(CommandHandler):
    names: tuple[str, ...] = ()

    def __init__(self, *names: str):
        self.names = names
        self.called_with = None

    def validate(self, args: list[str]) -> Any:
        return args

    def execute(self, payload: Any, context: ShellContext) -> None:
        self.called_with = (payload, context)


class ErrorHandler(CommandHandler):
    names = ("boom",)

    def __init__(self, error: Exception):
        self.error = error

    def validate(self, args: list[str]) -> Any:
        return args

    def execute(self, payload: Any, context: ShellContext) -> None:
        raise self.error


class TestTokenize:
    def test_splits_on_whitespace(self) -> None:
        assert tokenize("find  a.txt -r") == ["find", "a.txt", "-r"]

    def test_quotes_keep_spaces(self) -> None:
        assert tokenize('rm "my file.txt"') == ["rm", "my file.txt"]

    def test_blank_line_is_empty(self) -> None:
        assert tokenize("   ") == []

    def test_unbalanced_quote_is_usage_error(self) -> None:
        with pytest.raises(UsageError):
            tokenize('rm "oops')


class TestCommandDispatcher:
    def test_dispatches_to_correct_handler(self, shell_context: ShellContext) -> None:
        handler_a = MockHandler("cmd_a")
        handler_b = MockHandler("cmd_b")
        dispatcher = CommandDispatcher([handler_a, handler_b])

        dispatcher.dispatch(["cmd_a", "arg"], shell_context)

        assert handler_a.called_with == (["arg"], shell_context)
        assert handler_b.called_with is None

    def test_aliases_and_case_insensitive_command(self, shell_context: ShellContext) -> None:
        handler = MockHandler("rm", "del")
        dispatcher = CommandDispatcher([handler])

        dispatcher.dispatch_line("DEL x.txt", shell_context)

        assert handler.called_with is not None
        assert handler.called_with[0] == ["x.txt"]

    def test_unknown_command_reports(self, shell_context: ShellContext, shell_output) -> None:
        CommandDispatcher([MockHandler("known")]).dispatch(["unknown"], shell_context)
        assert UNKNOWN_COMMAND in shell_output()

    def test_empty_line_is_ignored(self, shell_context: ShellContext, shell_output) -> None:
        CommandDispatcher([MockHandler("known")]).dispatch_line("", shell_context)
        assert shell_output() == ""

    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (UsageError("Expected prefix"), "Expected prefix"),
            (NotFoundError("File not found"), "File not found"),
            (PermissionError(13, "Permission denied", "/locked"), "/locked: Permission denied"),
        ],
    )
    def test_handler_errors_are_reported_not_raised(
        self, shell_context: ShellContext, shell_output, error: Exception, message: str
    ) -> None:
        CommandDispatcher([ErrorHandler(error)]).dispatch(["boom"], shell_context)
        assert message in shell_output()

    def test_parse_error_is_reported(self, shell_context: ShellContext, shell_output) -> None:
        CommandDispatcher([MockHandler("rm")]).dispatch_line('rm "oops', shell_context)
        assert "Cannot parse command" in shell_output()

    def test_register_adds_handler(self, shell_context: ShellContext) -> None:
        dispatcher = CommandDispatcher([])
        handler = MockHandler("late")
        dispatcher.register(handler)

        dispatcher.dispatch(["late"], shell_context)

        assert handler.called_with is not None
        assert dispatcher.handlers == [handler]
