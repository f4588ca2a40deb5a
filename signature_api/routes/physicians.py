# signature_api/routes/physicians.py
from flask import Blueprint, current_app, jsonify

from ..errors import PhysicianNotFound

physicians_bp = Blueprint("physicians", __name__)


@physicians_bp.route("", methods=["GET"])
def list_physicians():
    physicians = current_app.extensions["signing"].physicians.list()
    return jsonify([p.to_dict() for p in physicians])


@physicians_bp.route("/<physician_id>", methods=["GET"])
def get_physician(physician_id):
    physician = current_app.extensions["signing"].physicians.get(physician_id)
    if physician is None:
        raise PhysicianNotFound(physician_id)
    return jsonify(physician.to_dict())
