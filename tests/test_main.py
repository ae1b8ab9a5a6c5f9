"""Tests for the CLI chat loop."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from medibot import prompts
from medibot.main import main, run_chat_loop


@pytest.fixture
def bot():
    mock = MagicMock()
    mock.respond.return_value = prompts.ASK_FACILITY
    return mock


class TestChatLoop:
    def test_exit_stops_loop(self, bot, capsys):
        with patch("builtins.input", side_effect=["EXIT"]):
            run_chat_loop(bot)
        bot.respond.assert_not_called()
        assert prompts.GOODBYE_REPLY in capsys.readouterr().out

    def test_replies_are_printed(self, bot, capsys):
        with patch("builtins.input", side_effect=["randevu almak istiyorum", "exit"]):
            run_chat_loop(bot)
        bot.respond.assert_called_once_with("randevu almak istiyorum")
        assert f"Bot: {prompts.ASK_FACILITY}" in capsys.readouterr().out

    def test_blank_lines_are_skipped(self, bot):
        with patch("builtins.input", side_effect=["", "   ", "exit"]):
            run_chat_loop(bot)
        bot.respond.assert_not_called()

    def test_turn_error_prints_generic_reply_and_continues(self, bot, capsys):
        bot.respond.side_effect = [RuntimeError("Wit.ai down"), "Gemini cevabı"]
        with patch("builtins.input", side_effect=["merhaba", "nasılsın", "exit"]):
            run_chat_loop(bot)
        out = capsys.readouterr().out
        assert f"Bot: {prompts.GENERIC_FAILURE_REPLY}" in out
        assert "Bot: Gemini cevabı" in out
        assert "Wit.ai down" not in out

    def test_eof_stops_loop(self, bot):
        with patch("builtins.input", side_effect=EOFError):
            run_chat_loop(bot)
        bot.respond.assert_not_called()


class TestMain:
    def test_main_runs_loop_and_closes_bot(self, bot):
        with patch("sys.argv", ["medibot"]), patch(
            "medibot.bot.create_chatbot", return_value=bot,
        ), patch("builtins.input", side_effect=["exit"]):
            main()
        bot.close.assert_called_once()
