"""
Projects Routes - Portfolio projects API
"""

from flask import jsonify, request, current_app
from extensions import db
from models import Project, STATUS_DRAFT, STATUS_PUBLISHED
from utils.auth import require_auth
from utils.crud import (
    apply_changes, created, ensure_unique_slug, get_or_404, no_content,
    page_meta, paginate, pagination_args, reorder
)
from utils.data import json_list_contains, project_to_dict
from utils.decorators import api_auth_required
from utils.errors import ApiError, ErrorCodes
from utils.storage import delete_folder_quietly
from utils.validation import ProjectCreate, ProjectUpdate, Reorder, changes, get_json_body, parse_body
from . import projects_bp


STATUS_FILTERS = (STATUS_PUBLISHED, STATUS_DRAFT, 'all')


@projects_bp.route('', methods=['GET'])
def list_projects():
    """Projects in display order; drafts are only listed for a signed-in admin"""
    status = request.args.get('status') or STATUS_PUBLISHED
    if status not in STATUS_FILTERS:
        raise ApiError(f"Invalid status. Must be one of: {', '.join(STATUS_FILTERS)}",
                       400, ErrorCodes.VALIDATION_ERROR)
    if status != STATUS_PUBLISHED:
        require_auth()

    query = Project.query
    if status != 'all':
        query = query.filter(Project.status == status)
    if request.args.get('featured') == 'true':
        query = query.filter(Project.featured.is_(True))

    search = request.args.get('search')
    if search:
        query = query.filter(db.or_(
            Project.title.icontains(search, autoescape=True),
            Project.short_description.icontains(search, autoescape=True),
            json_list_contains(Project.tech_tags, search),
        ))

    page, limit = pagination_args('limit', 20, 100)
    projects, total = paginate(query.order_by(Project.display_order.asc()), page, limit)

    return jsonify({
        'data': [project_to_dict(p) for p in projects],
        'meta': page_meta(total, page, limit, 'limit'),
    })


@projects_bp.route('', methods=['POST'])
@api_auth_required
def create_project():
    parsed = parse_body(ProjectCreate, get_json_body())
    ensure_unique_slug(Project, parsed.slug, 'project')

    values = parsed.model_dump()
    values['thumbnail_image'] = values.get('thumbnail_image') or ''
    project = Project(**values)
    db.session.add(project)
    db.session.commit()

    current_app.logger.info(f"Project created: {project.slug}")
    return created(project_to_dict(project))


@projects_bp.route('/reorder', methods=['PUT'])
@api_auth_required
def reorder_projects():
    parsed = parse_body(Reorder, get_json_body())
    count = reorder(Project, parsed.ordered_ids, 'Project')
    return jsonify({'data': {'success': True, 'count': count}})


@projects_bp.route('/<project_id>', methods=['GET'])
def get_project(project_id):
    project = get_or_404(Project, project_id, 'Project')
    if project.status == STATUS_DRAFT:
        require_auth()
    return jsonify({'data': project_to_dict(project)})


@projects_bp.route('/<project_id>', methods=['PUT'])
@api_auth_required
def update_project(project_id):
    project = get_or_404(Project, project_id, 'Project')
    parsed = parse_body(ProjectUpdate, get_json_body())

    values = changes(parsed)
    if values.get('slug') and values['slug'] != project.slug:
        ensure_unique_slug(Project, values['slug'], 'project', current_id=project.id)

    apply_changes(project, values)
    db.session.commit()
    return jsonify({'data': project_to_dict(project)})


@projects_bp.route('/<project_id>', methods=['DELETE'])
@api_auth_required
def delete_project(project_id):
    project = get_or_404(Project, project_id, 'Project')
    slug = project.slug

    db.session.delete(project)
    db.session.commit()
    delete_folder_quietly(f"projects/{project_id}/")

    current_app.logger.info(f"Project deleted: {slug}")
    return no_content()
