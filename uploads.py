import logging
import os
import uuid

from flask import current_app, url_for
from PIL import Image, UnidentifiedImageError
from werkzeug.utils import secure_filename

from secure_action import ActionError

logger = logging.getLogger(__name__)

MB = 1024 * 1024
IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp"}
DOCUMENT_EXTENSIONS = {"pdf", "doc", "docx"}


class UploadEndpoint:
    def __init__(self, name, extensions, max_size, max_count, image=False):
        self.name = name
        self.extensions = extensions
        self.max_size = max_size
        self.max_count = max_count
        self.image = image


UPLOAD_ENDPOINTS = {
    "resume": UploadEndpoint("resume", DOCUMENT_EXTENSIONS, 4 * MB, 1),
    "primary-image": UploadEndpoint("primary-image", IMAGE_EXTENSIONS, 4 * MB, 1,
                                    image=True),
    "gallery": UploadEndpoint("gallery", IMAGE_EXTENSIONS, 4 * MB, 5, image=True),
}


def _extension(filename):
    return os.path.splitext(filename)[1].lstrip(".").lower()


def _stream_size(file):
    file.stream.seek(0, os.SEEK_END)
    size = file.stream.tell()
    file.stream.seek(0)
    return size


def _is_image(file):
    try:
        with Image.open(file.stream) as image:
            image.verify()
        return True
    except (UnidentifiedImageError, OSError, SyntaxError):
        return False
    finally:
        file.stream.seek(0)


def validate_upload(endpoint, files):
    """Check count, extension, size and (for images) content of ``files``."""
    files = [f for f in files if f and f.filename]
    if not files:
        raise ActionError("No files were uploaded.", 400)
    if len(files) > endpoint.max_count:
        raise ActionError(f"At most {endpoint.max_count} file(s) may be uploaded.", 400)

    for file in files:
        if _extension(file.filename) not in endpoint.extensions:
            raise ActionError(f"{file.filename}: file type not allowed.", 400)
        if _stream_size(file) > endpoint.max_size:
            raise ActionError(
                f"{file.filename}: file exceeds {endpoint.max_size // MB} MB.", 413)
        if endpoint.image and not _is_image(file):
            raise ActionError(f"{file.filename}: not a valid image.", 400)
    return files


def save_uploads(endpoint, files):
    files = validate_upload(endpoint, files)
    upload_folder = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(upload_folder, exist_ok=True)

    saved = []
    for file in files:
        original_filename = secure_filename(file.filename) or "unnamed_file"
        stored_filename = f"{uuid.uuid4().hex}.{_extension(file.filename)}"
        size = _stream_size(file)
        file.save(os.path.join(upload_folder, stored_filename))
        saved.append({
            "url": url_for("uploads.serve", filename=stored_filename),
            "key": stored_filename,
            "name": original_filename,
            "size": size,
        })
    logger.info("Stored %d file(s) for %s", len(saved), endpoint.name)
    return saved
