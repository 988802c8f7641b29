"""
CRUD Module - Shared persistence steps for the admin API
"""

from flask import jsonify
from extensions import db
from .errors import ApiError, ErrorCodes
from .helpers import parse_int_arg, total_pages


def get_or_404(model, item_id, label):
    item = db.session.get(model, item_id)
    if item is None:
        raise ApiError(f"{label} not found", 404, ErrorCodes.NOT_FOUND)
    return item


def apply_changes(item, values):
    for key, value in values.items():
        setattr(item, key, value)
    return item


def ensure_unique_slug(model, slug, label, current_id=None):
    """409 when another row of ``model`` already uses ``slug``"""
    query = model.query.filter_by(slug=slug)
    if current_id is not None:
        query = query.filter(model.id != current_id)
    if db.session.query(query.exists()).scalar():
        raise ApiError(f"A {label} with this slug already exists", 409, ErrorCodes.CONFLICT)


def reorder(model, ordered_ids, label):
    """Set ``display_order`` to each id's position, all or nothing"""
    rows = {row.id: row for row in model.query.filter(model.id.in_(ordered_ids))}
    missing = [item_id for item_id in ordered_ids if item_id not in rows]
    if missing:
        raise ApiError(f"{label} not found: {', '.join(missing)}", 404, ErrorCodes.NOT_FOUND)

    for index, item_id in enumerate(ordered_ids):
        rows[item_id].display_order = index
    db.session.commit()
    return len(ordered_ids)


def pagination_args(size_param, default_size, max_size):
    """``(page, size)`` from the query string, clamped to sane bounds"""
    page = max(1, parse_int_arg('page', 1))
    size = min(max(1, parse_int_arg(size_param, default_size)), max_size)
    return page, size


def paginate(query, page, size):
    """Returns ``(items, total)`` for one page of ``query``"""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * size).limit(size).all()
    return items, total


def page_meta(total, page, size, size_key):
    return {
        'total': total,
        'page': page,
        size_key: size,
        'totalPages': total_pages(total, size),
    }


def no_content():
    return '', 204


def created(payload):
    return jsonify({'data': payload}), 201


__all__ = [
    'get_or_404',
    'apply_changes',
    'ensure_unique_slug',
    'reorder',
    'pagination_args',
    'paginate',
    'page_meta',
    'no_content',
    'created',
]
