"""Unit tests for command intent resolution."""

import pytest

from detection.intent import Intent, is_greeting, normalize_text, resolve_intent
from workflows.definitions import CONFIRMATION_SHORTCUTS


class TestResolveIntent:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("hi", Intent.GREETING),
            ("  HELLO ", Intent.GREETING),
            ("Menu", Intent.MENU),
            ("back", Intent.BACK),
            ("help?", Intent.HELP),
            ("Proceed", Intent.PROCEED),
            ("apply", Intent.PROCEED),
            ("confirm!", Intent.CONFIRM),
            ("cancel", Intent.CANCEL),
            ("edit", Intent.EDIT),
            ("retry", Intent.RETRY),
            ("documents", Intent.DOCUMENTS),
            ("start", Intent.START),
            ("reset", Intent.RESET),
        ],
    )
    def test_keywords(self, text, expected):
        assert resolve_intent(text) == expected

    def test_free_text_is_none(self):
        assert resolve_intent("Acme Holdings") == Intent.NONE
        assert resolve_intent("please cancel my order") == Intent.NONE

    def test_empty_is_none(self):
        assert resolve_intent("") == Intent.NONE
        assert resolve_intent(None) == Intent.NONE

    def test_digits_need_state_shortcuts(self):
        assert resolve_intent("1") == Intent.NONE
        assert resolve_intent("1", CONFIRMATION_SHORTCUTS) == Intent.CONFIRM
        assert resolve_intent("2", CONFIRMATION_SHORTCUTS) == Intent.EDIT
        assert resolve_intent("3", CONFIRMATION_SHORTCUTS) == Intent.CANCEL

    def test_shortcuts_do_not_hide_keywords(self):
        assert resolve_intent("menu", CONFIRMATION_SHORTCUTS) == Intent.MENU


class TestHelpers:
    def test_normalize_text(self):
        assert normalize_text("  Hello!! ") == "hello"

    def test_is_greeting(self):
        assert is_greeting(Intent.GREETING)
        assert is_greeting(Intent.START)
        assert not is_greeting(Intent.MENU)
