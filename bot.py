"""
Telegram Bot — chat interface to the weather lookup.

Send a city name (or /weather <city>) and the bot replies with the
current conditions and the daily forecast. Also serves the web dashboard.

Usage:
  python bot.py
"""

import asyncio
import logging
import sys
import threading

from telegram import Update
from telegram.ext import (
    ApplicationBuilder,
    CommandHandler,
    MessageHandler,
    filters,
    ContextTypes,
)

from abilities.card import format_card
from config import TELEGRAM_BOT_TOKEN, OWNER_CHAT_ID, OPENWEATHER_API_KEY, LOG_LEVEL
from pipeline import WeatherPipeline

logging.basicConfig(
    format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    level=LOG_LEVEL,
)
log = logging.getLogger("bot")

pipeline = WeatherPipeline()


# ── Auth ────────────────────────────────────────────────────────

def owner_only(func):
    """Restrict to OWNER_CHAT_ID. Set to 0 in .env to allow everyone."""
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE):
        if OWNER_CHAT_ID and update.effective_chat.id != OWNER_CHAT_ID:
            await update.message.reply_text("Not authorized.")
            return
        return await func(update, context)
    return wrapper


async def reply_weather(update: Update, city: str):
    # requests is blocking; keep the event loop free
    result = await asyncio.to_thread(pipeline.search, city)
    await update.message.reply_text(format_card(result))


# ── Command handlers ────────────────────────────────────────────

@owner_only
async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(
        "Weather bot online. Commands:\n\n"
        "/weather <city>  — current weather and 5-day forecast\n"
        "/help  — show this message\n\n"
        "Or just send a city name."
    )


@owner_only
async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await cmd_start(update, context)


@owner_only
async def cmd_weather(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not context.args:
        await update.message.reply_text("Usage: /weather <city>")
        return
    await reply_weather(update, " ".join(context.args))


@owner_only
async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Treat plain text as a city name."""
    text = update.message.text
    if not text:
        return
    await reply_weather(update, text)


# ── Main ────────────────────────────────────────────────────────

def start_dashboard_in_thread():
    """Run the Flask dashboard in a background thread."""
    try:
        from dashboard import create_app
        app = create_app(pipeline)
        # Suppress Flask request logs in the main console
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
        from config import DASHBOARD_HOST, DASHBOARD_PORT
        log.info(f"Dashboard: http://{DASHBOARD_HOST}:{DASHBOARD_PORT}")
        app.run(host=DASHBOARD_HOST, port=DASHBOARD_PORT, use_reloader=False)
    except Exception as e:
        log.error(f"Dashboard failed to start: {e}")


def main():
    if not TELEGRAM_BOT_TOKEN:
        log.error("TELEGRAM_BOT_TOKEN is not set")
        sys.exit(1)
    if not OPENWEATHER_API_KEY:
        log.error("OPENWEATHER_API_KEY is not set")
        sys.exit(1)

    logging.getLogger("httpx").setLevel(logging.WARNING)

    dash_thread = threading.Thread(target=start_dashboard_in_thread, daemon=True)
    dash_thread.start()

    app = ApplicationBuilder().token(TELEGRAM_BOT_TOKEN).build()
    app.add_handler(CommandHandler("start", cmd_start))
    app.add_handler(CommandHandler("help", cmd_help))
    app.add_handler(CommandHandler("weather", cmd_weather))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    log.info("Bot starting (Telegram polling)...")
    app.run_polling()


if __name__ == "__main__":
    main()
