#!/usr/bin/env python3
"""Local development server for VINQuoter Python functions.

This server mimics the Firebase Functions emulator endpoints.

Usage:
    cd functions
    source venv/bin/activate
    python serve_local.py

This will start a Flask server on port 5002 that handles:
- POST /api/quote -> quote function
- POST /vinquoter-dev/us-central1/quote -> quote function (emulator path)
- GET /health -> health check

QuoteApiClient talks to this server by default (QUOTE_API_BASE_URL).
"""

import os

# Set environment for local development
os.environ.setdefault('FUNCTIONS_EMULATOR', 'true')
os.environ.setdefault('GCLOUD_PROJECT', 'vinquoter-dev')

from flask import Flask, request, jsonify
from flask_cors import CORS

# Import the main module after setting env vars
from main import quote
from config.settings import settings
from utils.logging_config import configure_logging

app = Flask(__name__)
CORS(app)


class MockRequest:
    """Mock Firebase request object to wrap Flask request."""

    def __init__(self, flask_request):
        self._request = flask_request
        self.method = flask_request.method
        self.headers = dict(flask_request.headers)

    def get_json(self, force=False, silent=False):
        return self._request.get_json(force=force, silent=silent)


def wrap_firebase_function(firebase_fn):
    """Wrap a Firebase function to work with Flask."""
    def wrapper():
        mock_req = MockRequest(request)
        response = firebase_fn(mock_req)
        # Firebase Response has response_value, status, headers
        return response.get_data(), response.status_code, dict(response.headers)
    return wrapper


@app.route('/api/quote', methods=['POST', 'OPTIONS'])
def handle_quote():
    return wrap_firebase_function(quote)()


# Emulator-style path
@app.route('/vinquoter-dev/us-central1/quote', methods=['POST', 'OPTIONS'])
def handle_quote_emulator_path():
    return wrap_firebase_function(quote)()


# Health check
@app.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok', 'service': 'vinquoter'})


if __name__ == '__main__':
    configure_logging()
    settings.validate()
    port = int(os.environ.get('PORT', 5002))
    print(f"""
╔════════════════════════════════════════════════════════════════╗
║  VINQuoter Python Functions - Local Development Server         ║
╠════════════════════════════════════════════════════════════════╣
║                                                                ║
║  Server running on: http://127.0.0.1:{port}                     ║
║                                                                ║
║  Endpoints:                                                    ║
║  • POST /api/quote                                             ║
║  • POST /vinquoter-dev/us-central1/quote                       ║
║  • GET  /health                                                ║
║                                                                ║
╚════════════════════════════════════════════════════════════════╝
""")
    app.run(host='127.0.0.1', port=port, debug=True, threaded=True)
