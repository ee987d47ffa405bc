import os
import time
import uuid

from flask import Blueprint, current_app, jsonify, request
from werkzeug.utils import secure_filename

from memorygame.errors import UnsupportedFileType, ValidationError

uploads = Blueprint('uploads', __name__)


def _check_files(files):
    if not files:
        raise ValidationError('No images uploaded.')
    limit = int(current_app.config.get('MAX_UPLOAD_FILES', 20))
    if len(files) > limit:
        raise ValidationError(f'At most {limit} images per upload.')
    allowed = current_app.config.get('ALLOWED_IMAGE_MIMETYPES', ())
    for f in files:
        if f.mimetype not in allowed:
            raise UnsupportedFileType()


@uploads.route('/upload', methods=['POST'])
def upload_images():
    """
    Stores uploaded card images and returns their reference paths in upload
    order. Clients pass these back as `customImages` when creating a room.
    """
    files = [f for f in request.files.getlist('images') if f and f.filename]
    try:
        _check_files(files)
    except (UnsupportedFileType, ValidationError) as exc:
        return jsonify({'success': False, 'error': exc.message}), 400

    subdir = current_app.config.get('UPLOAD_SUBDIR', 'uploads')
    target_dir = os.path.join(current_app.static_folder, subdir)
    os.makedirs(target_dir, exist_ok=True)

    filenames = []
    for f in files:
        name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{secure_filename(f.filename)}"
        f.save(os.path.join(target_dir, name))
        filenames.append(f"/{subdir}/{name}")

    current_app.logger.info(f"[upload] stored={len(filenames)}")
    return jsonify({'success': True, 'filenames': filenames})
