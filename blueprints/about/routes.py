"""
About Routes - Skills, experience, education and certifications API

All four collections share the same shape: a visibility-filtered list in
display order, plus create/update/delete for a signed-in admin.
"""

from flask import jsonify, request, current_app
from extensions import db
from models import Skill, Experience, Education, Certification
from utils.auth import require_auth
from utils.crud import apply_changes, created, get_or_404, no_content, reorder
from utils.data import (
    certification_to_dict, education_to_dict, experience_to_dict, group_skills, skill_to_dict
)
from utils.decorators import api_auth_required
from utils.validation import (
    CertificationCreate, CertificationUpdate, EducationCreate, EducationUpdate,
    ExperienceCreate, ExperienceUpdate, Reorder, SkillCreate, SkillUpdate,
    changes, get_json_body, parse_body
)
from . import about_bp


def visibility_query(model):
    """``visible=true`` (default) lists shown items, ``all`` needs auth, anything else lists hidden ones"""
    visible = request.args.get('visible', 'true')
    query = model.query
    if visible == 'all':
        require_auth()
    elif visible == 'true':
        query = query.filter(model.visible.is_(True))
    else:
        query = query.filter(model.visible.is_(False))
    return query.order_by(model.display_order.asc())


def register_collection(kind, model, label, create_schema, update_schema, serialize, with_list=True):
    """Wire list/create/update/delete endpoints for one about-page collection"""

    def list_items():
        items = visibility_query(model).all()
        return jsonify({'data': [serialize(i) for i in items], 'meta': {'total': len(items)}})

    @api_auth_required
    def create_item():
        parsed = parse_body(create_schema, get_json_body())
        item = model(**parsed.model_dump())
        db.session.add(item)
        db.session.commit()
        current_app.logger.info(f"{label} created: {item.id}")
        return created(serialize(item))

    @api_auth_required
    def update_item(item_id):
        item = get_or_404(model, item_id, label)
        parsed = parse_body(update_schema, get_json_body())
        apply_changes(item, changes(parsed))
        db.session.commit()
        return jsonify({'data': serialize(item)})

    @api_auth_required
    def delete_item(item_id):
        item = get_or_404(model, item_id, label)
        db.session.delete(item)
        db.session.commit()
        current_app.logger.info(f"{label} deleted: {item_id}")
        return no_content()

    if with_list:
        about_bp.add_url_rule(f'/{kind}', f'list_{kind}', list_items, methods=['GET'])
    about_bp.add_url_rule(f'/{kind}', f'create_{kind}', create_item, methods=['POST'])
    about_bp.add_url_rule(f'/{kind}/<item_id>', f'update_{kind}', update_item, methods=['PUT'])
    about_bp.add_url_rule(f'/{kind}/<item_id>', f'delete_{kind}', delete_item, methods=['DELETE'])


@about_bp.route('/skills', methods=['GET'])
def list_skills():
    """Skills, optionally grouped by category in first-seen order"""
    skills = visibility_query(Skill).all()
    if request.args.get('grouped') == 'true':
        data = {
            category: [skill_to_dict(s) for s in items]
            for category, items in group_skills(skills).items()
        }
    else:
        data = [skill_to_dict(s) for s in skills]
    return jsonify({'data': data, 'meta': {'total': len(skills)}})


@about_bp.route('/skills/reorder', methods=['PUT'])
@api_auth_required
def reorder_skills():
    parsed = parse_body(Reorder, get_json_body())
    count = reorder(Skill, parsed.ordered_ids, 'Skill')
    return jsonify({'data': {'success': True, 'count': count}})


register_collection('skills', Skill, 'Skill', SkillCreate, SkillUpdate, skill_to_dict, with_list=False)
register_collection('experience', Experience, 'Experience', ExperienceCreate, ExperienceUpdate,
                    experience_to_dict)
register_collection('education', Education, 'Education', EducationCreate, EducationUpdate,
                    education_to_dict)
register_collection('certifications', Certification, 'Certification', CertificationCreate,
                    CertificationUpdate, certification_to_dict)
