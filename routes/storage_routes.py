from flask import Blueprint, abort, current_app, request, jsonify, send_from_directory
from savour import storage
from savour.errors import StorageError
from .guards import shell_required

storage_bp = Blueprint('storage', __name__, url_prefix='/storage')


@storage_bp.route('/upload', methods=['POST'])
@shell_required
def upload():
    files = request.files.getlist('file')
    if len(files) > 1:
        return jsonify({'error': 'Upload one file at a time.'}), 400
    try:
        url = storage.upload(files[0] if files else None, request.form.get('path', ''))
    except StorageError as e:
        return jsonify({'error': e.message}), 400
    return jsonify({'url': url}), 201


@storage_bp.route('/<bucket>/<path:path>')
def public_file(bucket, path):
    if bucket != current_app.config['STORAGE_BUCKET']:
        abort(404)
    return send_from_directory(storage.bucket_root(bucket), path)
