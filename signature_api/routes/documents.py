# signature_api/routes/documents.py
from flask import Blueprint, Response, current_app, jsonify, request

from ..errors import DocumentNotFound, ValidationError
from ..models import DocumentStatus

documents_bp = Blueprint("documents", __name__)


def _signing():
    return current_app.extensions["signing"]


def _required_physician_id():
    physician_id = request.args.get("physicianId")
    if not physician_id:
        raise ValidationError("physicianId is required")
    return physician_id


def _as_json(documents):
    return jsonify([d.to_dict() for d in documents])


@documents_bp.route("", methods=["GET"])
def list_documents():
    # full list, or only one physician's documents
    store = _signing().documents
    physician_id = request.args.get("physicianId")
    if physician_id:
        return _as_json(store.list_by_physician(physician_id))
    return _as_json(store.list())


@documents_bp.route("/unsigned", methods=["GET"])
def unsigned_documents():
    store = _signing().documents
    return _as_json(store.list_by_physician_and_status(_required_physician_id(), DocumentStatus.PENDING))


@documents_bp.route("/signed", methods=["GET"])
def signed_documents():
    store = _signing().documents
    return _as_json(store.list_by_physician_and_status(_required_physician_id(), DocumentStatus.SIGNED))


@documents_bp.route("/counts", methods=["GET"])
def document_counts():
    return jsonify(_signing().documents.counts_by_physician(_required_physician_id()))


@documents_bp.route("/sign-bulk", methods=["POST"])
def sign_bulk():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    ids = data.get("documentIds", data.get("DocumentIds"))
    if not isinstance(ids, list) or not ids or not all(isinstance(i, str) for i in ids):
        raise ValidationError("documentIds array is required")

    results = _signing().sign_bulk(ids)
    return jsonify({"results": [r.to_dict() for r in results]})


@documents_bp.route("/<document_id>", methods=["GET"])
def get_document(document_id):
    doc = _signing().documents.get(document_id)
    if doc is None:
        raise DocumentNotFound(document_id)
    return jsonify(doc.to_dict())


@documents_bp.route("/<document_id>/pdf", methods=["GET"])
def get_pdf(document_id):
    service = _signing()
    pdf = service.get_pdf_bytes(document_id)
    if pdf is None:
        return jsonify({"message": f"PDF not found for document {document_id}"}), 404

    doc = service.documents.get(document_id)
    filename = doc.name.replace(" ", "_") if doc and doc.name else f"document_{document_id}"
    if not filename.lower().endswith(".pdf"):
        filename += ".pdf"

    response = Response(pdf, mimetype="application/pdf")
    response.headers["Content-Disposition"] = f'inline; filename="{filename}"'
    response.headers["Accept-Ranges"] = "bytes"
    response.headers["Content-Length"] = str(len(pdf))
    return response


@documents_bp.route("/<document_id>/sign", methods=["POST"])
def sign_document(document_id):
    # failures propagate to the app error handlers
    doc = _signing().sign_one(document_id)
    return jsonify(doc.to_dict())
