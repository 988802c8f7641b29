"""
Site Routes - Hero section and site settings
"""

from flask import jsonify, current_app
from extensions import db
from models import Hero, SiteSettings
from utils.crud import apply_changes
from utils.data import default_site_settings, hero_to_dict, site_settings_to_dict
from utils.decorators import api_auth_required
from utils.errors import ApiError, ErrorCodes
from utils.validation import HeroUpdate, SiteSettingsUpdate, get_json_body, parse_body
from . import site_bp


SETTINGS_ID = 'default'


@site_bp.route('/hero', methods=['GET'])
def get_hero():
    hero = Hero.query.first()
    if hero is None:
        raise ApiError('Hero not found', 404, ErrorCodes.NOT_FOUND)
    return jsonify({'data': hero_to_dict(hero)})


@site_bp.route('/hero', methods=['PUT'])
@api_auth_required
def update_hero():
    """Update the hero section, creating it on first save"""
    parsed = parse_body(HeroUpdate, get_json_body())
    # Fields left out of the body keep their stored values; the buttons are always replaced
    values = parsed.model_dump(exclude_unset=True)
    values['cta_buttons'] = parsed.model_dump(include={'cta_buttons'})['cta_buttons']

    hero = Hero.query.first()
    if hero is None:
        values['profile_image'] = values.get('profile_image') or ''
        hero = Hero(**values)
        db.session.add(hero)
    else:
        apply_changes(hero, values)
    db.session.commit()

    current_app.logger.info("Hero section updated")
    return jsonify({'data': hero_to_dict(hero)})


@site_bp.route('/settings', methods=['GET'])
def get_settings():
    settings = db.session.get(SiteSettings, SETTINGS_ID)
    if settings is None:
        return jsonify({'data': default_site_settings()})
    return jsonify({'data': site_settings_to_dict(settings)})


@site_bp.route('/settings', methods=['PUT'])
@api_auth_required
def update_settings():
    parsed = parse_body(SiteSettingsUpdate, get_json_body(),
                        message='Validation failed', field_errors_only=True)
    values = parsed.model_dump(exclude_unset=True, exclude={'social_links'})

    social_links = None
    if parsed.social_links is not None:
        links = parsed.social_links.model_dump(by_alias=True)
        social_links = {name: url for name, url in links.items() if url} or None

    settings = db.session.get(SiteSettings, SETTINGS_ID)
    if settings is None:
        settings = SiteSettings(id=SETTINGS_ID)
        db.session.add(settings)
    apply_changes(settings, values)
    settings.social_links = social_links
    db.session.commit()

    current_app.logger.info("Site settings updated")
    return jsonify({'data': site_settings_to_dict(settings)})
