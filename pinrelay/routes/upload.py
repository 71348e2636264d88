"""Upload route: POST /upload

Accepts a multipart form with one or more parts under ``files``, forwards
each file to Pinata concurrently, and returns
``{ successful_uploads: [...], errors?: [...] }`` with 200 when every file
was pinned and 206 when any file failed.

OPTIONS answers the browser preflight with 204. Every response on this path
carries the CORS headers below.
"""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import MethodNotAllowed, RequestEntityTooLarge

from pinrelay.schemas import FileEntry
from pinrelay.services.upload_service import UploadService

logger = logging.getLogger(__name__)

upload_bp = Blueprint("upload", __name__)

UPLOAD_PATH = "/upload"
FORM_FIELD = "files"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, pinata_api_key, pinata_secret_api_key",
}

# Common methods reach the view; anything else is answered by _method_not_allowed
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _resp_error(message: str, status: int = 400):
    return jsonify({"error": message}), status


# App-wide hooks: werkzeug rejects unknown methods before any blueprint hook runs
@upload_bp.after_app_request
def _add_cors_headers(response):
    if request.path == UPLOAD_PATH:
        response.headers.update(CORS_HEADERS)
    return response


@upload_bp.app_errorhandler(MethodNotAllowed)
def _method_not_allowed(e: MethodNotAllowed):
    if request.path == UPLOAD_PATH:
        return _resp_error("Method not allowed", 405)
    return e


def _parse_form_error() -> str | None:
    """Return a parse error message, or None when ``request.files`` is usable."""
    if request.mimetype != "multipart/form-data":
        return "request Content-Type isn't multipart/form-data"
    limit = current_app.config["MAX_CONTENT_LENGTH"]
    if request.content_length is not None and request.content_length > limit:
        return f"request body too large (limit {limit} bytes)"
    try:
        request.files  # noqa: B018 - forces parsing
    except RequestEntityTooLarge as e:
        return f"request body exceeds form limits: {e.description}"
    except ValueError as e:
        return str(e)
    return None


@upload_bp.route(UPLOAD_PATH, methods=ALL_METHODS)
def upload():
    if request.method == "OPTIONS":
        return "", 204
    if request.method != "POST":
        return _resp_error("Method not allowed", 405)

    err = _parse_form_error()
    if err:
        logger.warning("Rejected /upload: %s", err)
        return _resp_error(f"Failed to parse multipart form: {err}")

    files = [
        FileEntry(filename=f.filename, stream=f.stream)
        for f in request.files.getlist(FORM_FIELD)
        if f.filename
    ]
    if not files:
        logger.warning("Rejected /upload: no files under '%s'", FORM_FIELD)
        return _resp_error("No files were uploaded")

    svc = UploadService(current_app.config["PINRELAY"], transport=current_app.config.get("PINATA_TRANSPORT"))
    try:
        result = svc.upload_all(files)
    except Exception as e:
        logger.exception("Upload batch failed")
        return _resp_error(f"Upload failed: {e}", 500)
    return jsonify(result.to_dict()), result.status_code
