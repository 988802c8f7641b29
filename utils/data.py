"""
Data Module - Public read queries and API serializers

The query helpers back the public pages: they only ever return published or
visible rows, and a database failure is logged and degrades to an empty
result instead of breaking the page. The ``*_to_dict`` serializers build the
camelCase objects returned by the JSON API.
"""

import json
from flask import current_app
from extensions import db
from models import (
    Project, BlogPost, Skill, Experience, Education, Certification,
    Hero, SiteSettings, ContactMessage, STATUS_PUBLISHED
)


def isoformat(value):
    """Naive UTC datetime as an ISO 8601 string with a ``Z`` suffix"""
    if value is None:
        return None
    return value.isoformat(timespec='milliseconds') + 'Z'


def json_list_contains(column, value):
    """SQL filter: the JSON list in ``column`` holds exactly ``value``"""
    return db.cast(column, db.Text).contains(json.dumps(value), autoescape=True)


# Serializers

def project_to_dict(project):
    """Convert project model to dictionary"""
    return {
        'id': project.id,
        'slug': project.slug,
        'title': project.title,
        'shortDescription': project.short_description,
        'description': project.description,
        'problem': project.problem,
        'solution': project.solution,
        'role': project.role,
        'techTags': project.tech_tags or [],
        'images': project.images or [],
        'thumbnailImage': project.thumbnail_image or '',
        'liveUrl': project.live_url,
        'repoUrl': project.repo_url,
        'featured': project.featured,
        'displayOrder': project.display_order,
        'status': project.status,
        'startDate': isoformat(project.start_date),
        'endDate': isoformat(project.end_date),
        'createdAt': isoformat(project.created_at),
        'updatedAt': isoformat(project.updated_at),
    }


def blog_post_to_dict(post, include_content=True):
    """Convert blog post model to dictionary; list views leave out the body"""
    result = {
        'id': post.id,
        'slug': post.slug,
        'title': post.title,
        'excerpt': post.excerpt,
        'featuredImage': post.featured_image,
        'tags': post.tags or [],
        'readTime': post.read_time,
        'status': post.status,
        'publishedAt': isoformat(post.published_at),
        'createdAt': isoformat(post.created_at),
        'updatedAt': isoformat(post.updated_at),
    }
    if include_content:
        result['content'] = post.content
    return result


def skill_to_dict(skill):
    return {
        'id': skill.id,
        'name': skill.name,
        'category': skill.category,
        'icon': skill.icon,
        'proficiencyLevel': skill.proficiency_level,
        'displayOrder': skill.display_order,
        'visible': skill.visible,
        'createdAt': isoformat(skill.created_at),
        'updatedAt': isoformat(skill.updated_at),
    }


def experience_to_dict(experience):
    return {
        'id': experience.id,
        'company': experience.company,
        'role': experience.role,
        'location': experience.location,
        'startDate': isoformat(experience.start_date),
        'endDate': isoformat(experience.end_date),
        'description': experience.description,
        'highlights': experience.highlights or [],
        'logoUrl': experience.logo_url,
        'companyUrl': experience.company_url,
        'displayOrder': experience.display_order,
        'visible': experience.visible,
        'createdAt': isoformat(experience.created_at),
        'updatedAt': isoformat(experience.updated_at),
    }


def education_to_dict(education):
    return {
        'id': education.id,
        'institution': education.institution,
        'degree': education.degree,
        'field': education.field,
        'startDate': isoformat(education.start_date),
        'endDate': isoformat(education.end_date),
        'achievements': education.achievements,
        'logoUrl': education.logo_url,
        'displayOrder': education.display_order,
        'visible': education.visible,
        'createdAt': isoformat(education.created_at),
        'updatedAt': isoformat(education.updated_at),
    }


def certification_to_dict(certification):
    return {
        'id': certification.id,
        'name': certification.name,
        'issuer': certification.issuer,
        'dateEarned': isoformat(certification.date_earned),
        'expirationDate': isoformat(certification.expiration_date),
        'credentialId': certification.credential_id,
        'credentialUrl': certification.credential_url,
        'badgeImage': certification.badge_image,
        'displayOrder': certification.display_order,
        'visible': certification.visible,
        'createdAt': isoformat(certification.created_at),
        'updatedAt': isoformat(certification.updated_at),
    }


def hero_to_dict(hero):
    return {
        'id': hero.id,
        'headline': hero.headline,
        'subheadline': hero.subheadline,
        'bio': hero.bio,
        'profileImage': hero.profile_image or '',
        'resumeUrl': hero.resume_url,
        'ctaButtons': hero.cta_buttons,
        'updatedAt': isoformat(hero.updated_at),
    }


def default_site_settings():
    """Settings returned before an admin has saved any"""
    return {
        'id': 'default',
        'siteName': 'Portfolio',
        'siteDescription': '',
        'socialLinks': None,
        'email': '',
        'googleAnalyticsId': None,
    }


def site_settings_to_dict(settings):
    return {
        'id': settings.id,
        'siteName': settings.site_name,
        'siteDescription': settings.site_description,
        'socialLinks': settings.social_links,
        'email': settings.email,
        'googleAnalyticsId': settings.google_analytics_id,
        'updatedAt': isoformat(settings.updated_at),
    }


def message_to_dict(message):
    """Convert message model to dictionary"""
    return {
        'id': message.id,
        'name': message.name,
        'email': message.email,
        'subject': message.subject or '',
        'message': message.message,
        'read': message.read,
        'archived': message.archived,
        'createdAt': isoformat(message.created_at),
    }


# Public queries

def _published_projects():
    return Project.query.filter_by(status=STATUS_PUBLISHED)


def _published_posts():
    return BlogPost.query.filter_by(status=STATUS_PUBLISHED)


def _visible(model):
    return model.query.filter_by(visible=True).order_by(model.display_order.asc())


def get_hero():
    try:
        return Hero.query.first()
    except Exception as e:
        current_app.logger.error(f"Failed to fetch hero: {str(e)}")
        return None


def get_published_projects():
    """Published projects in display order"""
    try:
        return _published_projects().order_by(Project.display_order.asc()).all()
    except Exception as e:
        current_app.logger.error(f"Failed to fetch published projects: {str(e)}")
        return []


def get_featured_projects(limit=4):
    try:
        return (
            _published_projects()
            .filter_by(featured=True)
            .order_by(Project.display_order.asc())
            .limit(limit)
            .all()
        )
    except Exception as e:
        current_app.logger.error(f"Failed to fetch featured projects: {str(e)}")
        return []


def get_project_by_slug(slug):
    try:
        return _published_projects().filter_by(slug=slug).first()
    except Exception as e:
        current_app.logger.error(f'Failed to fetch project with slug "{slug}": {str(e)}')
        return None


def get_published_project_slugs():
    try:
        return [row.slug for row in db.session.query(Project.slug).filter_by(status=STATUS_PUBLISHED)]
    except Exception as e:
        current_app.logger.error(f"Failed to fetch project slugs: {str(e)}")
        return []


def get_adjacent_projects(display_order):
    """Published projects immediately before and after ``display_order``"""
    try:
        prev_project = (
            _published_projects()
            .filter(Project.display_order < display_order)
            .order_by(Project.display_order.desc())
            .first()
        )
        next_project = (
            _published_projects()
            .filter(Project.display_order > display_order)
            .order_by(Project.display_order.asc())
            .first()
        )
        return prev_project, next_project
    except Exception as e:
        current_app.logger.error(f"Failed to fetch adjacent projects: {str(e)}")
        return None, None


def get_project_with_adjacent(slug):
    """Returns ``(project, prev, next)``; all None when the slug is unknown"""
    project = get_project_by_slug(slug)
    if project is None:
        return None, None, None
    prev_project, next_project = get_adjacent_projects(project.display_order)
    return project, prev_project, next_project


def get_published_posts(limit=None):
    """Published posts, newest first"""
    try:
        query = _published_posts().order_by(BlogPost.published_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()
    except Exception as e:
        current_app.logger.error(f"Failed to fetch published posts: {str(e)}")
        return []


def get_recent_posts(limit=3):
    return get_published_posts(limit)


def get_post_by_slug(slug):
    try:
        return _published_posts().filter_by(slug=slug).first()
    except Exception as e:
        current_app.logger.error(f'Failed to fetch post with slug "{slug}": {str(e)}')
        return None


def get_published_post_slugs():
    try:
        return [row.slug for row in db.session.query(BlogPost.slug).filter_by(status=STATUS_PUBLISHED)]
    except Exception as e:
        current_app.logger.error(f"Failed to fetch post slugs: {str(e)}")
        return []


def get_all_tags():
    """Sorted unique tags across published posts"""
    try:
        tags = set()
        for (post_tags,) in db.session.query(BlogPost.tags).filter_by(status=STATUS_PUBLISHED):
            tags.update(post_tags or [])
        return sorted(tags)
    except Exception as e:
        current_app.logger.error(f"Failed to fetch tags: {str(e)}")
        return []


def get_posts_by_tag(tag):
    try:
        return (
            _published_posts()
            .filter(json_list_contains(BlogPost.tags, tag))
            .order_by(BlogPost.published_at.desc())
            .all()
        )
    except Exception as e:
        current_app.logger.error(f'Failed to fetch posts with tag "{tag}": {str(e)}')
        return []


def get_skills():
    try:
        return _visible(Skill).all()
    except Exception as e:
        current_app.logger.error(f"Failed to fetch skills: {str(e)}")
        return []


def group_skills(skills):
    """``{category: [skills]}`` keeping the order categories first appear in"""
    grouped = {}
    for skill in skills:
        grouped.setdefault(skill.category, []).append(skill)
    return grouped


def get_skills_by_category():
    return group_skills(get_skills())


def get_experiences():
    try:
        return _visible(Experience).all()
    except Exception as e:
        current_app.logger.error(f"Failed to fetch experiences: {str(e)}")
        return []


def get_education():
    try:
        return _visible(Education).all()
    except Exception as e:
        current_app.logger.error(f"Failed to fetch education: {str(e)}")
        return []


def get_certifications():
    try:
        return _visible(Certification).all()
    except Exception as e:
        current_app.logger.error(f"Failed to fetch certifications: {str(e)}")
        return []


def get_about_page_data():
    return {
        'skills': get_skills(),
        'experiences': get_experiences(),
        'education': get_education(),
        'certifications': get_certifications(),
    }


def get_site_settings():
    try:
        return SiteSettings.query.first()
    except Exception as e:
        current_app.logger.error(f"Failed to fetch site settings: {str(e)}")
        return None


def get_unread_messages_count():
    """Unread messages still in the inbox"""
    try:
        return ContactMessage.query.filter_by(read=False, archived=False).count()
    except Exception as e:
        current_app.logger.error(f"Failed to count unread messages: {str(e)}")
        return 0
