"""
Uploads Routes - Image and resume uploads
"""

import secrets
from flask import jsonify, request, current_app
from utils.auth import require_auth
from utils.decorators import api_auth_required
from utils.errors import ApiError, ErrorCodes
from utils.images import (
    BLOG_FEATURED, CERTIFICATION_BADGE, COMPANY_LOGO, HEADSHOT, ORIGINAL, PROJECT_VARIANTS,
    WEBP_CONTENT_TYPE, InvalidImageError, process_image
)
from utils.security import check_rate_limit
from utils.storage import StorageError, delete_image_variants, upload_to_s3
from utils.validation import UploadDelete, get_json_body, parse_body
from . import uploads_bp


ALLOWED_FOLDERS = ('projects', 'blog', 'profile', 'logos', 'certifications', 'resume')
ALLOWED_IMAGE_TYPES = ('image/jpeg', 'image/png', 'image/webp', 'image/gif')
PDF_CONTENT_TYPE = 'application/pdf'
RESUME_KEY = 'resume/resume_latest.pdf'

PROJECT_URL_NAMES = {'thumb': 'thumbnail', 'med': 'medium', 'lg': 'large', 'orig': 'original'}


def new_file_id():
    """12-character URL-safe random id"""
    return secrets.token_urlsafe(9)


def image_plan(folder, entity_id, file_id):
    """Work out what to render and where to store it.

    Returns ``(entries, primary_key)`` where each entry is
    ``(url_name, variant, key)``.
    """
    if folder == 'profile':
        entries = [
            ('display', HEADSHOT, f"profile/headshot_{file_id}.webp"),
            ('original', ORIGINAL, f"profile/orig_{file_id}.webp"),
        ]
        return entries, entries[0][2]

    if folder in ('logos', 'certifications'):
        if not entity_id:
            raise ApiError('entityId is required for logo/certification uploads', 400, 'MISSING_ENTITY_ID')
        variant = COMPANY_LOGO if folder == 'logos' else CERTIFICATION_BADGE
        entries = [
            ('display', variant, f"{folder}/{variant.prefix}_{entity_id}_{file_id}.webp"),
            ('original', ORIGINAL, f"{folder}/orig_{entity_id}_{file_id}.webp"),
        ]
        return entries, entries[0][2]

    if folder == 'blog':
        if not entity_id:
            raise ApiError('entityId (post ID) is required for blog uploads', 400, 'MISSING_ENTITY_ID')
        entries = [
            ('featured', BLOG_FEATURED, f"blog/{entity_id}/featured_{file_id}.webp"),
            ('original', ORIGINAL, f"blog/{entity_id}/orig_{file_id}.webp"),
        ]
        return entries, entries[0][2]

    base_path = f"{folder}/{entity_id}" if entity_id else folder
    entries = [
        (PROJECT_URL_NAMES[v.prefix], v, f"{base_path}/{v.prefix}_{file_id}.webp")
        for v in PROJECT_VARIANTS
    ]
    return entries, entries[-1][2]


def _store(data, key, content_type):
    try:
        return upload_to_s3(data, key, content_type)
    except StorageError as e:
        raise ApiError(f"Failed to upload file: {str(e)}", 500, ErrorCodes.UPLOAD_ERROR)


@uploads_bp.route('', methods=['POST'])
def upload():
    """Store a resume PDF or the WebP variants of an image"""
    limit, window = current_app.config['UPLOAD_RATE_LIMIT']
    if not check_rate_limit('upload', limit, window).success:
        raise ApiError('Rate limit exceeded. Try again later.', 429, ErrorCodes.RATE_LIMIT_EXCEEDED)

    require_auth()

    file = request.files.get('file')
    folder = request.form.get('folder')
    entity_id = request.form.get('entityId') or None

    if file is None:
        raise ApiError('File is required', 400, 'MISSING_FILE')
    if folder not in ALLOWED_FOLDERS:
        raise ApiError(f"Invalid folder. Must be one of: {', '.join(ALLOWED_FOLDERS)}", 400, 'INVALID_FOLDER')

    data = file.read()
    if len(data) > current_app.config['MAX_UPLOAD_SIZE']:
        raise ApiError('File size exceeds 10MB limit', 400, 'FILE_TOO_LARGE')

    content_type = (file.mimetype or '').lower()

    if folder == 'resume':
        if content_type != PDF_CONTENT_TYPE:
            raise ApiError('Resume must be a PDF file', 400, 'INVALID_FILE_TYPE')
        url = _store(data, RESUME_KEY, PDF_CONTENT_TYPE)
        current_app.logger.info(f"Resume uploaded ({len(data)} bytes)")
        return jsonify({'data': {'urls': {'original': url}, 'key': RESUME_KEY}})

    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ApiError(f"Invalid file type. Allowed: {', '.join(ALLOWED_IMAGE_TYPES)}", 400, 'INVALID_FILE_TYPE')

    entries, primary_key = image_plan(folder, entity_id, new_file_id())

    try:
        rendered = process_image(data, [variant for _, variant, _ in entries])
    except InvalidImageError as e:
        raise ApiError(str(e), 400, 'INVALID_FILE_TYPE')

    urls = {
        name: _store(rendered[variant.prefix], key, WEBP_CONTENT_TYPE)
        for name, variant, key in entries
    }

    current_app.logger.info(f"Image uploaded to {folder}: {primary_key}")
    return jsonify({'data': {'urls': urls, 'key': primary_key}})


@uploads_bp.route('', methods=['DELETE'])
@api_auth_required
def delete_upload():
    parsed = parse_body(UploadDelete, get_json_body(), message='Invalid request body')

    if not any(parsed.key.startswith(f"{folder}/") for folder in ALLOWED_FOLDERS):
        raise ApiError('Invalid key prefix', 400, 'INVALID_KEY')

    try:
        delete_image_variants(parsed.key)
    except StorageError as e:
        raise ApiError(f"Failed to delete file: {str(e)}", 500, ErrorCodes.UPLOAD_ERROR)

    current_app.logger.info(f"Upload deleted: {parsed.key}")
    return jsonify({'data': {'success': True}})
