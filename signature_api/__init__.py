# signature_api/__init__.py
import logging
import os

from flask import Flask, jsonify, request

from config import Settings, settings
from .documents import DocumentStore, ensure_storage_dirs
from .errors import NotFound, SignatureServiceError, ValidationError
from .pdf_utils import SignatureStamper
from .physicians import PhysicianDirectory
from .routes.documents import documents_bp
from .routes.physicians import physicians_bp
from .signing import SigningService
from .storage import JsonFileStorage

logger = logging.getLogger(__name__)


def init_services(app: Flask, app_settings: Settings):
    # json record stores under the storage root, shared by every request
    root = app_settings.storage_root
    ensure_storage_dirs(root)
    documents = DocumentStore(JsonFileStorage(os.path.join(root, app_settings.DOCUMENTS_FILE)))
    physicians = PhysicianDirectory(JsonFileStorage(os.path.join(root, app_settings.PHYSICIANS_FILE)))
    stamper = SignatureStamper(app_settings.signature_image_path)
    app.extensions["signing"] = SigningService(
        documents, physicians, stamper, root, app_settings.STORAGE_MARKER
    )
    if not os.path.isfile(app_settings.signature_image_path):
        logger.warning("Signature image missing at %s, signing will fail", app_settings.signature_image_path)


def init_error_handlers(app: Flask, app_settings: Settings):
    expose = app_settings.expose_error_details

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify({"message": str(e)}), 400

    @app.errorhandler(NotFound)
    def handle_not_found(e):
        return jsonify({"message": str(e)}), 404

    @app.errorhandler(SignatureServiceError)
    def handle_service_error(e):
        # root cause only leaves the server when explicitly allowed
        logger.error("Request %s %s failed: %s", request.method, request.path, e)
        message = str(e) if expose else "Failed to sign document"
        body = {"message": message}
        if expose:
            body["error"] = type(e).__name__
            if e.__cause__ is not None:
                body["cause"] = f"{type(e.__cause__).__name__}: {e.__cause__}"
        return jsonify(body), 500


def init_cors(app: Flask, origins):
    allowed = set(origins or [])

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin and origin in allowed:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
            response.headers["Vary"] = "Origin"
        return response


def create_app(app_settings: Settings = None):
    app_settings = app_settings or settings
    app = Flask(__name__)
    # load configuration
    app.config.from_object(app_settings)
    init_services(app, app_settings)
    init_error_handlers(app, app_settings)
    init_cors(app, app_settings.CORS_ORIGINS)
    app.register_blueprint(documents_bp, url_prefix="/api/documents")
    app.register_blueprint(physicians_bp, url_prefix="/api/physicians")

    @app.route("/")
    def index():
        return jsonify({"status": "ok", "service": "physician-signature"})

    return app
