from __future__ import annotations

import logging
import os

from telegram import Update
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from poet import GraphPoet

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Answer incoming messages with ``GraphPoet.poem``."""
    try:
        text = update.message.text or ""
        response = context.bot_data["poet"].poem(text)
        if response:
            await update.message.reply_text(response)
    except Exception:  # pragma: no cover
        logger.exception("error handling message")


def build_application(token: str, corpus_path: str) -> Application:
    """Create the bot with a poet built from *corpus_path*.

    The corpus is read before the application is returned, so a missing
    file fails here rather than while polling.
    """
    poet = GraphPoet.from_file(corpus_path)
    application = Application.builder().token(token).build()
    application.bot_data["poet"] = poet
    application.add_handler(
        MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message)
    )
    return application


def main() -> None:
    """Run the Telegram bot."""
    token = os.environ.get("TELEGRAM_TOKEN")
    if not token:
        raise RuntimeError("TELEGRAM_TOKEN not set")
    corpus_path = os.environ.get("POET_CORPUS")
    if not corpus_path:
        raise RuntimeError("POET_CORPUS not set")

    application = build_application(token, corpus_path)
    logger.info("polling with corpus %s", corpus_path)
    application.run_polling()
    logger.info("shutting down")


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
