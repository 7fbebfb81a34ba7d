import asyncio
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

pytest.importorskip("telegram")

import ground  # noqa: E402
from poet import GraphPoet  # noqa: E402

DATA = Path(__file__).resolve().parent / "data"


def _update(text):
    update = MagicMock()
    update.message.text = text
    update.message.reply_text = AsyncMock()
    return update


def test_message_triggers_poem():
    update = _update("meet requirement")
    context = MagicMock()
    context.bot_data = {"poet": GraphPoet.from_file(DATA / "meet.txt")}

    asyncio.run(ground.handle_message(update, context))

    update.message.reply_text.assert_awaited_once_with("meet ours requirement")


def test_empty_message_gets_no_reply():
    update = _update(None)
    context = MagicMock()
    context.bot_data = {"poet": GraphPoet.from_text("a b")}

    asyncio.run(ground.handle_message(update, context))

    update.message.reply_text.assert_not_awaited()


def test_build_application_loads_corpus():
    application = ground.build_application("123:abc", str(DATA / "turn.txt"))
    poet = application.bot_data["poet"]
    assert poet.poem("Turn around") == "Turn this around"


def test_build_application_missing_corpus():
    with pytest.raises(FileNotFoundError):
        ground.build_application("123:abc", str(DATA / "not-exist.txt"))


def test_main_requires_token(monkeypatch):
    monkeypatch.delenv("TELEGRAM_TOKEN", raising=False)
    with pytest.raises(RuntimeError, match="TELEGRAM_TOKEN"):
        ground.main()


def test_main_requires_corpus(monkeypatch):
    monkeypatch.setenv("TELEGRAM_TOKEN", "123:abc")
    monkeypatch.delenv("POET_CORPUS", raising=False)
    with pytest.raises(RuntimeError, match="POET_CORPUS"):
        ground.main()


def test_main_runs_polling(monkeypatch):
    monkeypatch.setenv("TELEGRAM_TOKEN", "123:abc")
    monkeypatch.setenv("POET_CORPUS", str(DATA / "meet.txt"))
    application = MagicMock()
    with patch.object(ground, "build_application", return_value=application) as build:
        ground.main()
    build.assert_called_once_with("123:abc", str(DATA / "meet.txt"))
    application.run_polling.assert_called_once_with()
