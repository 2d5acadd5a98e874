#!/usr/bin/env python3
"""
Flask REST API for the horoscope content resolver.

Thin HTTP adapter over HoroscopeService: validates the payload, resolves,
and returns the content envelope (200) or the NotFound diagnostics (404).

Run locally:
    flask --app app:create_app run
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from horoscope_resolver import HoroscopeResolverError, HoroscopeService, InvalidDateError
from horoscope_resolver.config_loader import load_config_from_env
from horoscope_resolver.security import InputValidator, ValidationError

# Load environment variables
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)


def create_app(service: Optional[HoroscopeService] = None) -> Flask:
    """
    Create the Flask app.

    :param service: Pre-built service (tests); built from the environment otherwise
    """
    app = Flask(__name__)

    if service is None:
        service = HoroscopeService(load_config_from_env())
        logger.info(f"Horoscope service initialized (backend={service.config.store_backend})")

    app.config["HOROSCOPE_SERVICE"] = service

    @app.route("/health")
    def health():
        return jsonify({
            "status": "ok",
            "daily": service.has_kind("daily"),
            "monthly": service.has_kind("monthly"),
        })

    @app.route("/api/horoscope/<kind>", methods=["POST"])
    def horoscope(kind: str):
        if kind not in ("daily", "monthly"):
            return jsonify({"error": f"Unknown content kind '{kind}'"}), 404
        if not service.has_kind(kind):
            return jsonify({"error": f"No {kind} content source configured"}), 503

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        try:
            profile = InputValidator.validate_profile(data.get("profile"))
            date = InputValidator.validate_date(data.get("date"))
            force_fresh = InputValidator.validate_flag(data.get("force_fresh"), "force_fresh") or False
            allow_fallback = InputValidator.validate_flag(
                data.get("allow_single_sign_fallback"), "allow_single_sign_fallback"
            )
        except ValidationError as e:
            logger.warning(f"Rejected {kind} request: {e}")
            return jsonify({"error": str(e)}), 400

        resolve = service.daily if kind == "daily" else service.monthly
        try:
            outcome = resolve(
                profile,
                date=date,
                force_fresh=force_fresh,
                allow_single_sign_fallback=allow_fallback,
            )
        except InvalidDateError as e:
            return jsonify({"error": str(e)}), 400
        except HoroscopeResolverError as e:
            logger.error(f"{kind} resolution failed: {e}")
            return jsonify({"error": str(e)}), 500

        return jsonify(outcome.to_dict()), (200 if outcome.found else 404)

    return app


if __name__ == "__main__":
    port = int(os.getenv("PORT", "5000"))
    create_app().run(host="0.0.0.0", port=port)
