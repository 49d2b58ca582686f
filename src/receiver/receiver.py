"""
Syndication Receiver - Flask Application.

This module implements a Flask-based receiver that accepts JF2 post records,
validates them against a JSON schema and syndicates them to every enabled
Mastodon account.

Architecture:
    1. Receive JSON payload via POST /syndicate
    2. Validate Content-Type header (must be application/json)
    3. Validate against the JF2 post schema (JSON Schema Draft 7)
    4. Syndicate to each enabled Mastodon account
    5. Return the syndicated status URL per account

Error Handling:
    - 200: Every account syndicated (or had nothing to syndicate)
    - 400: Non-JSON body or schema validation failure
    - 502: At least one account failed to syndicate
    - 500: Unexpected error

Example Request:
    POST /syndicate HTTP/1.1
    Content-Type: application/json

    {
      "me": "https://me.example",
      "properties": {
        "content": {"html": "<p>Hello <a href=\\"https://example.com/x\\">world</a></p>"},
        "url": "https://me.example/notes/1"
      }
    }
"""
import json
import logging
from typing import Any, Dict, List, Optional

from flask import Flask, request, jsonify, current_app
from flask_cors import CORS
from jsonschema import validate, ValidationError
from mastodon import MastodonError
from requests import RequestException

from config import load_config
from schema import JF2_POST_SCHEMA
from social.base_client import SyndicationError


logger = logging.getLogger(__name__)


class SyndicationRequestValidationError(Exception):
    """Raised when a syndication request does not match the JF2 post schema."""
    pass


def validate_syndication_request(payload: Dict[str, Any]) -> None:
    """Validate a syndication request against the JSON schema.

    Args:
        payload: Request body

    Raises:
        SyndicationRequestValidationError: If validation fails, with the
            failing path and constraint in the message
    """
    try:
        validate(instance=payload, schema=JF2_POST_SCHEMA)
    except ValidationError as e:
        path_str = ".".join(str(p) for p in e.path)
        error_msg = f"Schema validation failed: {e.message} at path: {path_str}"
        raise SyndicationRequestValidationError(error_msg) from e


def create_app(config: Optional[Dict[str, Any]] = None, mastodon_clients: Optional[List[Any]] = None) -> Flask:
    """Factory function to create and configure the Flask application.

    Args:
        config: Optional configuration dictionary (if None, will be loaded from config.yml)
        mastodon_clients: Optional list of MastodonClient instances

    Returns:
        Configured Flask application instance

    Example:
        >>> app = create_app(config={}, mastodon_clients=[])
        >>> client = app.test_client()
    """
    app = Flask(__name__)

    if config is None:
        config = load_config()

    cors_config = config.get("cors") or {}
    if cors_config.get("enabled", False):
        cors_origins = cors_config.get("origins", [])
        if cors_origins:
            CORS(app, origins=cors_origins)
            logger.info(f"CORS enabled for origins: {cors_origins}")
        else:
            logger.warning("CORS enabled but no origins configured")
    else:
        logger.info("CORS is disabled in configuration")

    app.config["MASTODON_CLIENTS"] = mastodon_clients or []
    app.config["PUBLICATION_URL"] = config.get("publication_url")

    @app.route("/syndicate", methods=["POST"])
    def syndicate():
        """Syndicate a JF2 post to every enabled Mastodon account.

        Success Response (200):
            {
              "status": "success",
              "syndication": [{"account": "personal", "url": "https://..."}]
            }

        Partial Failure Response (502):
            {
              "status": "error",
              "syndication": [{"account": "personal", "error": "..."}]
            }
        """
        try:
            if not request.is_json:
                logger.error("Received non-JSON payload")
                return jsonify({"error": "Content-Type must be application/json"}), 400

            payload = request.get_json(silent=True)
            if payload is None:
                logger.error("Received malformed JSON payload")
                return jsonify({"error": "Malformed JSON payload"}), 400

            validate_syndication_request(payload)

            properties = payload["properties"]
            me = payload.get("me") or current_app.config["PUBLICATION_URL"]
            logger.info(f"Received post for syndication: url={properties.get('url')}")
            logger.debug(f"Post payload: {json.dumps(payload, indent=2)}")

            results = []
            failed = False
            for client in current_app.config["MASTODON_CLIENTS"]:
                if not client.enabled:
                    continue
                try:
                    url = client.syndicate(properties, me)
                    results.append({"account": client.account_name, "url": url})
                except (SyndicationError, MastodonError, RequestException) as e:
                    logger.error(f"Failed to syndicate to Mastodon '{client.account_name}': {e}")
                    results.append({"account": client.account_name, "error": str(e)})
                    failed = True

            return jsonify({
                "status": "error" if failed else "success",
                "syndication": results
            }), 502 if failed else 200

        except SyndicationRequestValidationError as e:
            logger.error(f"Payload validation failed: {str(e)}")
            return jsonify({
                "status": "error",
                "message": "Invalid syndication request",
                "details": str(e)
            }), 400

        except Exception as e:
            logger.error(f"Unexpected error syndicating post: {str(e)}", exc_info=True)
            return jsonify({
                "status": "error",
                "message": "Internal server error"
            }), 500

    @app.route("/health", methods=["GET"])
    def health_check():
        """Health check endpoint for monitoring and load balancers."""
        return jsonify({"status": "healthy"}), 200

    return app
