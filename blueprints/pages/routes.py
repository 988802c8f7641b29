"""
Pages Routes - Public site pages
"""

from datetime import datetime, timezone
from flask import render_template, redirect, url_for, request, flash, current_app, abort
from utils.data import (
    get_about_page_data, get_all_tags, get_featured_projects, get_hero, get_post_by_slug,
    get_posts_by_tag, get_project_with_adjacent, get_published_post_slugs,
    get_published_posts, get_published_project_slugs, get_published_projects,
    get_recent_posts, get_site_settings, group_skills
)
from utils.errors import ApiError
from blueprints.messages.routes import CONTACT_SUCCESS_MESSAGE, submit_contact
from . import pages_bp


STATIC_PAGES = (
    ('/', 'weekly', '1.0'),
    ('/projects', 'weekly', '0.9'),
    ('/blog', 'weekly', '0.9'),
    ('/about', 'monthly', '0.7'),
    ('/contact', 'yearly', '0.5'),
)


def site_base_url():
    return (current_app.config.get('APP_URL') or request.url_root).rstrip('/')


def _matches_search(project, search):
    search = search.lower()
    return (
        search in project.title.lower()
        or search in project.short_description.lower()
        or any(search in tag.lower() for tag in (project.tech_tags or []))
    )


def _start_timestamp(project):
    return project.start_date.timestamp() if project.start_date else 0


# Projects without a start date sort as the oldest
PROJECT_SORTS = {
    'order': (lambda p: p.display_order, False),
    'newest': (_start_timestamp, True),
    'oldest': (_start_timestamp, False),
    'title': (lambda p: p.title.lower(), False),
}


@pages_bp.route('/')
def index():
    """Home page - hero, featured projects and recent posts"""
    return render_template('home.html',
                           hero=get_hero(),
                           featured_projects=get_featured_projects(limit=4),
                           recent_posts=get_recent_posts(limit=3))


@pages_bp.route('/projects')
def projects():
    """Published projects, optionally filtered by tag or search text and sorted"""
    all_projects = get_published_projects()
    tag = request.args.get('tag')
    search = request.args.get('search', '').strip()
    sort = request.args.get('sort', 'order')
    if sort not in PROJECT_SORTS:
        sort = 'order'

    shown = all_projects
    if tag:
        shown = [p for p in shown if tag in (p.tech_tags or [])]
    if search:
        shown = [p for p in shown if _matches_search(p, search)]

    key, reverse = PROJECT_SORTS[sort]
    shown = sorted(shown, key=key, reverse=reverse)

    all_tags = sorted({t for p in all_projects for t in (p.tech_tags or [])})
    return render_template('projects.html',
                           projects=shown,
                           tags=all_tags,
                           active_tag=tag,
                           search=search,
                           sort=sort)


@pages_bp.route('/projects/<slug>')
def project_detail(slug):
    project, prev_project, next_project = get_project_with_adjacent(slug)
    if project is None:
        abort(404)

    images = sorted(project.images or [], key=lambda image: image.get('order', 0))
    return render_template('project_detail.html',
                           project=project,
                           images=images,
                           prev_project=prev_project,
                           next_project=next_project)


@pages_bp.route('/blog')
def blog():
    tag = request.args.get('tag')
    posts = get_posts_by_tag(tag) if tag else get_published_posts()
    return render_template('blog.html', posts=posts, tags=get_all_tags(), active_tag=tag)


@pages_bp.route('/blog/<slug>')
def blog_post(slug):
    post = get_post_by_slug(slug)
    if post is None:
        abort(404)
    return render_template('blog_post.html', post=post)


@pages_bp.route('/about')
def about():
    data = get_about_page_data()
    return render_template('about.html',
                           skills_by_category=group_skills(data['skills']),
                           experiences=data['experiences'],
                           education=data['education'],
                           certifications=data['certifications'])


@pages_bp.route('/contact', methods=['GET', 'POST'])
def contact():
    """Contact form; submissions go through the same checks as the API"""
    form = {}
    field_errors = {}

    if request.method == 'POST':
        form = {
            'name': request.form.get('name', '').strip(),
            'email': request.form.get('email', '').strip(),
            'subject': request.form.get('subject', '').strip(),
            'message': request.form.get('message', '').strip(),
            'honeypot': request.form.get('honeypot', ''),
        }
        try:
            submit_contact(form)
            flash(CONTACT_SUCCESS_MESSAGE, 'success')
            return redirect(url_for('pages.contact'))
        except ApiError as e:
            if e.status_code == 400 and isinstance(e.details, dict):
                field_errors = e.details
                flash('Please correct the errors below.', 'danger')
            else:
                flash(e.message, 'danger')

    settings = get_site_settings()
    return render_template('contact.html',
                           form=form,
                           field_errors=field_errors,
                           contact_email=settings.email if settings else ''), 400 if field_errors else 200


@pages_bp.route('/sitemap.xml')
def sitemap():
    """Generate dynamic sitemap for SEO"""
    base_url = site_base_url()
    today = datetime.now(timezone.utc).strftime('%Y-%m-%d')

    sitemap_entries = [
        {'loc': f'{base_url}{path}', 'changefreq': changefreq, 'priority': priority, 'lastmod': today}
        for path, changefreq, priority in STATIC_PAGES
    ]
    for slug in get_published_project_slugs():
        sitemap_entries.append({
            'loc': f'{base_url}/projects/{slug}',
            'changefreq': 'monthly',
            'priority': '0.8',
            'lastmod': today
        })
    for slug in get_published_post_slugs():
        sitemap_entries.append({
            'loc': f'{base_url}/blog/{slug}',
            'changefreq': 'monthly',
            'priority': '0.7',
            'lastmod': today
        })

    sitemap_xml = ['<?xml version="1.0" encoding="UTF-8"?>']
    sitemap_xml.append('<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">')

    for entry in sitemap_entries:
        sitemap_xml.append('<url>')
        sitemap_xml.append(f'<loc>{entry["loc"]}</loc>')
        sitemap_xml.append(f'<lastmod>{entry["lastmod"]}</lastmod>')
        sitemap_xml.append(f'<changefreq>{entry["changefreq"]}</changefreq>')
        sitemap_xml.append(f'<priority>{entry["priority"]}</priority>')
        sitemap_xml.append('</url>')

    sitemap_xml.append('</urlset>')

    response = current_app.make_response('\n'.join(sitemap_xml))
    response.headers['Content-Type'] = 'application/xml; charset=utf-8'
    return response


@pages_bp.route('/robots.txt')
def robots():
    """Generate robots.txt for SEO"""
    robots_txt = f"""User-agent: *
Allow: /
Disallow: /admin/
Disallow: /api/

Sitemap: {site_base_url()}/sitemap.xml"""

    response = current_app.make_response(robots_txt)
    response.headers['Content-Type'] = 'text/plain; charset=utf-8'
    return response
