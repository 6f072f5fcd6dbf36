"""
Weather Dashboard — Flask web UI for city lookups.

Provides:
  - Search form (button or Enter submits)
  - Current-conditions card and 5-day temperature chart
  - JSON API for programmatic access

Runs standalone or in a background thread alongside the Telegram bot.

Usage:
  python dashboard.py
"""

import logging
import sys

from flask import Flask, render_template, request, jsonify, flash

from abilities.card import card_fields
from abilities.forecast import chart_series
from config import (
    DASHBOARD_SECRET,
    DASHBOARD_HOST,
    DASHBOARD_PORT,
    LOG_LEVEL,
    OPENWEATHER_API_KEY,
)
from pipeline import WeatherPipeline

log = logging.getLogger(__name__)

STATUS_CODES = {
    "ok": 200,
    "input_error": 400,
    "not_found": 404,
    "fetch_error": 502,
}

_pipeline = None  # set via create_app()


def create_app(pipeline: WeatherPipeline):
    global _pipeline
    _pipeline = pipeline

    app = Flask(__name__)
    app.secret_key = DASHBOARD_SECRET

    # ── Pages ───────────────────────────────────────────────

    @app.route("/")
    def index():
        city = request.args.get("city")
        if city is None:
            return render_template("index.html", city="", card=None, series=None)

        result = _pipeline.search(city)
        if not result.ok:
            flash(result.message, "error")
        card = card_fields(result.current) if result.current else None
        series = chart_series(result.forecast) if result.has_chart else None
        return render_template("index.html", city=city, card=card, series=series)

    # ── API endpoints ───────────────────────────────────────

    @app.route("/api/weather", methods=["GET"])
    def api_weather():
        result = _pipeline.search(request.args.get("city", ""))
        return jsonify(result.to_dict()), STATUS_CODES[result.status]

    @app.route("/api/last", methods=["GET"])
    def api_last():
        result = _pipeline.last_result
        if not result:
            return jsonify({"error": "no results yet"}), 404
        return jsonify(result.to_dict())

    return app


def main():
    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        level=LOG_LEVEL,
    )
    if not OPENWEATHER_API_KEY:
        log.error("OPENWEATHER_API_KEY is not set")
        sys.exit(1)
    app = create_app(WeatherPipeline())
    log.info(f"Dashboard: http://{DASHBOARD_HOST}:{DASHBOARD_PORT}")
    app.run(host=DASHBOARD_HOST, port=DASHBOARD_PORT)


if __name__ == "__main__":
    main()
