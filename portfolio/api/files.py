"""
File Routes

Admin-only upload manager. Uploaded files are not tracked by the content
records that point at them: deleting a file can leave dangling references.
"""

from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required

from portfolio.errors import ValidationError

files_bp = Blueprint('files', __name__)

EXTENSION_KEY = 'portfolio.file_store'


def get_file_store():
    return current_app.extensions[EXTENSION_KEY]


@files_bp.route('', methods=['GET'])
@files_bp.route('/', methods=['GET'])
@login_required
def list_files():
    """List every stored upload, newest first"""
    return jsonify(get_file_store().list())


@files_bp.route('/upload', methods=['POST'])
@login_required
def upload_file():
    """Store the multipart field ``file``"""
    upload = request.files.get('file')
    if upload is None or not upload.filename:
        raise ValidationError('No file uploaded')

    stored = get_file_store().upload(upload.read(), upload.mimetype, upload.filename)
    return jsonify({'success': True, 'file': stored})


@files_bp.route('/<path:filename>', methods=['DELETE'])
@login_required
def delete_file(filename):
    get_file_store().delete(filename)
    return jsonify({'success': True, 'message': 'File deleted'})
