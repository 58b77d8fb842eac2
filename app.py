from dotenv import load_dotenv
import os
load_dotenv()

import logging
from dataclasses import asdict
from decimal import Decimal, InvalidOperation

from flask import Flask, Response, abort, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from thaiqr.banks import list_banks, lookup_bank
from thaiqr.errors import PromptPayError
from thaiqr.models import QrOptions
from thaiqr.promptpay import (
    build_bill_payment_payload, build_promptpay_payload, normalize_bank_code, parse_payload,
    verify_payload,
)
from thaiqr.qr import render_qr_data_url, render_qr_svg

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
)
logger = logging.getLogger(__name__)


def create_app(config=None):
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY", "dev-key")
    # ---- Payee / renderer config (from .env) ----
    app.config["SYSTEM_PROMPTPAY_ID"] = os.getenv("SYSTEM_PROMPTPAY_ID", "0812345678")
    app.config["QR_WIDTH"] = int(os.getenv("QR_WIDTH", "280"))
    app.config["QR_MARGIN"] = int(os.getenv("QR_MARGIN", "2"))
    app.config["QR_DARK_COLOR"] = os.getenv("QR_DARK_COLOR", "#1a1a1a")
    app.config["QR_LIGHT_COLOR"] = os.getenv("QR_LIGHT_COLOR", "#ffffff")
    if config:
        app.config.update(config)

    app.register_error_handler(PromptPayError, _codec_error)
    app.register_error_handler(HTTPException, _http_error)
    _register_routes(app)
    return app


def _codec_error(e):
    return jsonify(error=str(e)), 400


def _http_error(e):
    return jsonify(error=e.description), e.code


def _qr_options():
    cfg = current_app.config
    return QrOptions(
        width=cfg["QR_WIDTH"], margin=cfg["QR_MARGIN"],
        dark_color=cfg["QR_DARK_COLOR"], light_color=cfg["QR_LIGHT_COLOR"],
    )


def _amount_arg():
    raw = request.args.get("amount", "").strip()
    if not raw:
        return None
    try:
        amount = Decimal(raw)
    except InvalidOperation:
        abort(400, description=f"Invalid amount: {raw}")
    if not amount.is_finite():
        abort(400, description=f"Invalid amount: {raw}")
    return amount


def _register_routes(app):

    @app.route("/api/banks")
    def banks():
        return jsonify([asdict(b) for b in list_banks()])

    @app.route("/api/banks/<code>")
    def bank(code):
        entry = lookup_bank(code)
        if not entry:
            abort(404, description=f"Unknown bank code {code}")
        return jsonify(asdict(entry))

    @app.route("/api/promptpay")
    def promptpay():
        target = request.args.get("target") or current_app.config["SYSTEM_PROMPTPAY_ID"]
        payload = build_promptpay_payload(target, _amount_arg())
        return jsonify(payload=payload, qr=render_qr_data_url(payload, _qr_options()))

    @app.route("/api/promptpay.svg")
    def promptpay_svg():
        target = request.args.get("target") or current_app.config["SYSTEM_PROMPTPAY_ID"]
        payload = build_promptpay_payload(target, _amount_arg())
        return Response(render_qr_svg(payload, _qr_options()), mimetype="image/svg+xml")

    @app.route("/api/billpay")
    def billpay():
        bank_code = request.args.get("bank_code", "").strip()
        payload = build_bill_payment_payload(
            bank_code,
            request.args.get("account_number", "").strip(),
            _amount_arg(),
            reference1=request.args.get("ref1"),
            reference2=request.args.get("ref2"),
        )
        entry = lookup_bank(normalize_bank_code(bank_code))
        return jsonify(
            payload=payload,
            qr=render_qr_data_url(payload, _qr_options()),
            bank=asdict(entry) if entry else None,
        )

    @app.route("/api/verify", methods=["POST"])
    def verify():
        data = request.get_json(silent=True) or {}
        payload = (data.get("payload") or "").strip()
        if not payload:
            abort(400, description="payload is required")
        return jsonify(valid=verify_payload(payload), fields=parse_payload(payload))


app = create_app()

if __name__ == "__main__":
    app.run(debug=True)
