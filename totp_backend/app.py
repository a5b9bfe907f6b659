"""
FLASK APP MAIN ENTRY POINT - TOTP BACKEND SERVER
================================================

Sets up the Flask app, enables CORS and registers the OTP routes.

- Stateless: secrets arrive in each request body, nothing is stored.
- CORS origins come from TOTP_KIT_CORS_ORIGINS (default "*").

Run locally:
    flask --app totp_backend.app run
"""
import os

from flask import Flask, jsonify
from flask_cors import CORS

from totp_backend.routes import otp_bp

app = Flask(__name__)
app.config["CORS_ORIGINS"] = os.environ.get("TOTP_KIT_CORS_ORIGINS", "*")

# Allow a frontend served from another origin to call the API
CORS(app, origins=app.config["CORS_ORIGINS"])

app.register_blueprint(otp_bp)


@app.route("/", methods=["GET"])
def index():
    """List the available endpoints."""
    return jsonify({
        "service": "totp-kit",
        "endpoints": {
            "POST /generate_secret": "random base32 secret",
            "POST /totp": "current TOTP code for a secret",
            "POST /otpauth_uri": "otpauth:// provisioning URI",
        },
    })


if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=5000)
