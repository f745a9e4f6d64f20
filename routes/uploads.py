from flask import Blueprint, current_app, jsonify, request, send_from_directory
from werkzeug.datastructures import CombinedMultiDict

from actions.upload_actions import upload_files

uploads_bp = Blueprint("uploads", __name__)


@uploads_bp.route("/uploads/<path:filename>")
def serve(filename):
    return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)


@uploads_bp.route("/api/uploads/<endpoint>", methods=["POST"])
def upload(endpoint):
    # FlaskForm only merges request.files when it reads the request itself
    result = upload_files(endpoint, CombinedMultiDict((request.files, request.form)))
    return jsonify(result.to_dict()), result.status
