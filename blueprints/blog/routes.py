"""
Blog Routes - Blog posts API
"""

from flask import jsonify, request, current_app
from extensions import db
from models import BlogPost, STATUS_DRAFT, STATUS_PUBLISHED, utcnow
from utils.auth import require_auth
from utils.crud import (
    apply_changes, created, ensure_unique_slug, get_or_404, no_content,
    page_meta, paginate, pagination_args
)
from utils.data import blog_post_to_dict, json_list_contains
from utils.decorators import api_auth_required
from utils.errors import ApiError, ErrorCodes
from utils.helpers import calculate_read_time
from utils.storage import delete_folder_quietly
from utils.validation import BlogPostCreate, BlogPostUpdate, changes, get_json_body, parse_body
from . import blog_bp


STATUS_FILTERS = (STATUS_PUBLISHED, STATUS_DRAFT, 'all')

SORT_ORDERS = {
    'newest': BlogPost.published_at.desc(),
    'oldest': BlogPost.published_at.asc(),
    'title': BlogPost.title.asc(),
}


@blog_bp.route('', methods=['GET'])
def list_posts():
    """Posts without their content, filtered by status, tag and search text"""
    status = request.args.get('status') or STATUS_PUBLISHED
    if status not in STATUS_FILTERS:
        raise ApiError(f"Invalid status. Must be one of: {', '.join(STATUS_FILTERS)}",
                       400, ErrorCodes.VALIDATION_ERROR)
    if status != STATUS_PUBLISHED:
        require_auth()

    query = BlogPost.query
    if status != 'all':
        query = query.filter(BlogPost.status == status)

    tag = request.args.get('tag')
    if tag:
        query = query.filter(json_list_contains(BlogPost.tags, tag))

    search = request.args.get('search')
    if search:
        query = query.filter(db.or_(
            BlogPost.title.icontains(search, autoescape=True),
            BlogPost.excerpt.icontains(search, autoescape=True),
            json_list_contains(BlogPost.tags, search),
        ))

    sort = request.args.get('sort', 'newest')
    query = query.order_by(SORT_ORDERS.get(sort, SORT_ORDERS['newest']))

    page, page_size = pagination_args('pageSize', 10, 50)
    posts, total = paginate(query, page, page_size)

    return jsonify({
        'data': [blog_post_to_dict(p, include_content=False) for p in posts],
        'meta': page_meta(total, page, page_size, 'pageSize'),
    })


@blog_bp.route('', methods=['POST'])
@api_auth_required
def create_post():
    parsed = parse_body(BlogPostCreate, get_json_body(), message='Validation failed')
    ensure_unique_slug(BlogPost, parsed.slug, 'post')

    values = parsed.model_dump()
    values['read_time'] = calculate_read_time(parsed.content)
    if parsed.status == STATUS_PUBLISHED and not parsed.published_at:
        values['published_at'] = utcnow()

    post = BlogPost(**values)
    db.session.add(post)
    db.session.commit()

    current_app.logger.info(f"Blog post created: {post.slug} ({post.status})")
    return created(blog_post_to_dict(post))


@blog_bp.route('/<post_id>', methods=['GET'])
def get_post(post_id):
    post = get_or_404(BlogPost, post_id, 'Post')
    if post.status == STATUS_DRAFT:
        require_auth()
    return jsonify({'data': blog_post_to_dict(post)})


@blog_bp.route('/<post_id>', methods=['PUT'])
@api_auth_required
def update_post(post_id):
    post = get_or_404(BlogPost, post_id, 'Post')
    parsed = parse_body(BlogPostUpdate, get_json_body(), message='Validation failed')

    values = changes(parsed)
    if values.get('slug') and values['slug'] != post.slug:
        ensure_unique_slug(BlogPost, values['slug'], 'post', current_id=post.id)

    if values.get('content'):
        values['read_time'] = calculate_read_time(values['content'])

    # First publish stamps the date; unpublishing keeps it
    values.pop('published_at', None)
    if values.get('status') == STATUS_PUBLISHED and post.published_at is None:
        values['published_at'] = utcnow()

    apply_changes(post, values)
    db.session.commit()
    return jsonify({'data': blog_post_to_dict(post)})


@blog_bp.route('/<post_id>', methods=['DELETE'])
@api_auth_required
def delete_post(post_id):
    post = get_or_404(BlogPost, post_id, 'Post')
    slug = post.slug

    delete_folder_quietly(f"blog/{post_id}/")
    db.session.delete(post)
    db.session.commit()

    current_app.logger.info(f"Blog post deleted: {slug}")
    return no_content()
