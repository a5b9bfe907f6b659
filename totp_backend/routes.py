"""
OTP BACKEND API ROUTES - FLASK BLUEPRINT

Thin HTTP layer over totp_core. Every endpoint takes a JSON body and answers
with {"success": true, ...} or, on a validation failure, 400 with
{"success": false, "error": <ErrorKind>, "message": <text>}.

EXAMPLES:
curl -X POST http://localhost:5000/generate_secret -H "Content-Type: application/json" -d "{}"
curl -X POST http://localhost:5000/totp -H "Content-Type: application/json" -d '{"secret": "JBSWY3DPEHPK3PXP"}'
"""

import logging
import time

from flask import Blueprint, jsonify, request

from totp_core import otp_core
from totp_core.results import ErrorKind, Result

logger = logging.getLogger(__name__)

otp_bp = Blueprint("otp", __name__)


def _failure(result: Result):
    logger.info("%s rejected: %s", request.path, result.error.value)
    return jsonify({
        "success": False,
        "error": result.error.value,
        "message": result.message,
    }), 400


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@otp_bp.route("/generate_secret", methods=["POST"])
def generate_secret():
    """
    GENERATE A SECRET

      curl -X POST http://localhost:5000/generate_secret -H "Content-Type: application/json" -d '{"length": 32}'
    """
    data = _json_body()
    result = otp_core.generate_secret(data.get("length", otp_core.DEFAULT_SECRET_LENGTH))
    if not result.ok:
        return _failure(result)
    return jsonify({"success": True, "secret": result.value})


@otp_bp.route("/totp", methods=["POST"])
def get_totp():
    """
    CURRENT TOTP CODE

    Input (JSON body):
      {
        "secret": "JBSWY3DPEHPK3PXP",  # required
        "digits": 6,                   # 6, 7 or 8
        "period": 30,                  # seconds
        "offset": 0                    # clock offset, seconds
      }

    Output:
      {"success": true, "code": "123456", "remaining": 17}
    """
    data = _json_body()
    if not data.get("secret"):
        return _failure(Result.failure(ErrorKind.MISSING_REQUIRED_FIELD))

    now = int(time.time())
    try:
        period = int(data.get("period", otp_core.DEFAULT_PERIOD))
        offset = int(data.get("offset", otp_core.DEFAULT_OFFSET))
        result = otp_core.compute_otp(
            data["secret"], data.get("digits", otp_core.DEFAULT_DIGITS), period, offset, now,
        )
    except (TypeError, ValueError, OverflowError) as e:
        # non-integer or non-finite period/offset, period <= 0 or a negative time step
        logger.info("/totp rejected: %s", e)
        return jsonify({"success": False, "error": "BadRequest", "message": str(e)}), 400
    if not result.ok:
        return _failure(result)
    remaining = otp_core.seconds_remaining(period, offset, now)
    return jsonify({"success": True, "code": result.value, "remaining": remaining})


@otp_bp.route("/otpauth_uri", methods=["POST"])
def get_otpauth_uri():
    """
    URI FOR AUTHENTICATOR APPS (render it as a QR code client-side)

    Input (JSON body):
      {
        "account": "user@gmail.com",  # required
        "secret": "JBSWY3DPEHPK3PXP", # required
        "issuer": "MyApp",            # optional
        "digits": 6,                  # optional, omitted from URI if absent
        "period": 30                  # optional, omitted from URI if absent
      }
    """
    data = _json_body()
    for field in ("account", "secret", "issuer"):
        if data.get(field) is not None and not isinstance(data[field], str):
            logger.info("/otpauth_uri rejected: %s is not a string", field)
            return jsonify({"success": False, "error": "BadRequest",
                            "message": f"{field} must be a string"}), 400
    result = otp_core.build_provisioning_uri(
        data.get("account"),
        data.get("secret"),
        digits=data.get("digits"),
        period=data.get("period"),
        issuer=data.get("issuer"),
    )
    if not result.ok:
        return _failure(result)
    return jsonify({"success": True, "uri": result.value})
