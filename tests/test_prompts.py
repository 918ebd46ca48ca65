"""Tests for the rich console prompter."""

import io

import pytest
from rich.console import Console

from commit_helper.composer import validate_short_description
from commit_helper.prompts import ConsolePrompter, PromptCancelled

OPTIONS = [("FIX", "bug fixes"), ("ADD", "new features"), ("PERF", "performance")]


@pytest.fixture
def prompter():
    return ConsolePrompter(Console(file=io.StringIO(), width=120))


def feed(monkeypatch, *answers):
    """Answer successive input() calls, raising EOFError when exhausted."""
    remaining = list(answers)

    def fake_input(*args):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    monkeypatch.setattr("builtins.input", fake_input)


def output_of(prompter):
    return prompter.console.file.getvalue()


class TestSelect:
    """Tests for ConsolePrompter.select."""

    def test_by_number(self, prompter, monkeypatch):
        feed(monkeypatch, "2")
        assert prompter.select("Action", OPTIONS) == 1

    def test_by_label_case_insensitive(self, prompter, monkeypatch):
        feed(monkeypatch, "perf")
        assert prompter.select("Action", OPTIONS) == 2

    def test_invalid_choice_is_asked_again(self, prompter, monkeypatch):
        feed(monkeypatch, "9", "feat", "1")
        assert prompter.select("Action", OPTIONS) == 0
        assert "Invalid choice: 9" in output_of(prompter)

    def test_empty_answer_cancels(self, prompter, monkeypatch):
        feed(monkeypatch, "")
        with pytest.raises(PromptCancelled):
            prompter.select("Action", OPTIONS)

    def test_eof_cancels(self, prompter, monkeypatch):
        feed(monkeypatch)
        with pytest.raises(PromptCancelled):
            prompter.select("Action", OPTIONS)


class TestText:
    """Tests for ConsolePrompter.text."""

    def test_returns_answer(self, prompter, monkeypatch):
        feed(monkeypatch, "sale")
        assert prompter.text("Module") == "sale"

    def test_validation_error_is_shown_inline(self, prompter, monkeypatch):
        feed(monkeypatch, "x" * 85, "Fix totals")
        answer = prompter.text("Short", validate=validate_short_description)
        assert answer == "Fix totals"
        assert "(85)" in output_of(prompter)

    def test_empty_required_cancels(self, prompter, monkeypatch):
        feed(monkeypatch, "")
        with pytest.raises(PromptCancelled):
            prompter.text("Module")

    def test_empty_optional_is_allowed(self, prompter, monkeypatch):
        feed(monkeypatch, "")
        assert prompter.text("Long", required=False) == ""

    def test_interrupt_cancels(self, prompter, monkeypatch):
        def interrupted(*args):
            raise KeyboardInterrupt

        monkeypatch.setattr("builtins.input", interrupted)
        with pytest.raises(PromptCancelled):
            prompter.text("Module")
