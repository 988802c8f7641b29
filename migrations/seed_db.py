"""
Seed Script: Sample portfolio content
Fills an empty database with example settings, hero, projects, a blog post
and about-page entries. Rows that already exist are left untouched, so the
script can be re-run safely.

Usage:
    python migrations/seed_db.py
"""

import os
import sys
from datetime import datetime

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from extensions import db
from models import (
    Project, BlogPost, Skill, Experience, Education, Certification,
    Hero, SiteSettings, STATUS_PUBLISHED
)
from utils.helpers import calculate_read_time, generate_slug


SAMPLE_PROJECTS = [
    {
        'title': 'E-Commerce Platform',
        'short_description': 'A full-featured online store with payment processing and inventory management.',
        'description': 'Built a modern e-commerce platform from scratch...',
        'tech_tags': ['Flask', 'Python', 'Stripe', 'PostgreSQL', 'Tailwind CSS'],
        'images': [{'url': 'https://via.placeholder.com/800x600', 'alt': 'E-Commerce Dashboard', 'order': 0}],
        'thumbnail_image': 'https://via.placeholder.com/400x300',
        'live_url': 'https://example.com',
        'repo_url': 'https://github.com/johndoe/ecommerce',
        'featured': True,
        'display_order': 0,
    },
    {
        'title': 'Task Management App',
        'short_description': 'A collaborative task management tool with real-time updates.',
        'description': 'Designed and developed a Kanban-style task manager...',
        'tech_tags': ['React', 'Node.js', 'Socket.io', 'MongoDB'],
        'images': [{'url': 'https://via.placeholder.com/800x600', 'alt': 'Task Board', 'order': 0}],
        'thumbnail_image': 'https://via.placeholder.com/400x300',
        'featured': False,
        'display_order': 1,
    },
]

SAMPLE_POST = {
    'title': 'Getting Started with Flask Blueprints',
    'content': '# Getting Started with Flask Blueprints\n\nBlueprints split an application into focused pieces...',
    'excerpt': 'A practical guide to structuring Flask applications with blueprints.',
    'tags': ['Flask', 'Python'],
    'published_at': datetime(2026, 1, 15),
}

SAMPLE_SKILLS = [
    ('Python', 'Languages', 'EXPERT', 0),
    ('TypeScript', 'Languages', 'EXPERT', 1),
    ('SQL', 'Languages', 'ADVANCED', 2),
    ('React', 'Frontend', 'EXPERT', 0),
    ('Tailwind CSS', 'Frontend', 'ADVANCED', 1),
    ('Flask', 'Backend', 'ADVANCED', 0),
    ('PostgreSQL', 'Backend', 'ADVANCED', 1),
    ('AWS', 'DevOps', 'INTERMEDIATE', 0),
]


def seed_site(summary):
    if db.session.get(SiteSettings, 'default') is None:
        db.session.add(SiteSettings(
            id='default',
            site_name='John Doe | Portfolio',
            site_description='Full-stack developer portfolio showcasing projects and skills',
            email='hello@example.com',
            social_links={
                'github': 'https://github.com/johndoe',
                'linkedin': 'https://linkedin.com/in/johndoe',
            },
        ))
        summary['site_settings'] += 1

    if Hero.query.first() is None:
        db.session.add(Hero(
            headline='Full-Stack Developer',
            subheadline='Building modern web applications with Python, React and AWS',
            bio="I'm a passionate developer with experience building production-grade web applications.",
            profile_image='https://via.placeholder.com/400x400',
            cta_buttons=[
                {'label': 'View Projects', 'url': '/projects', 'variant': 'primary'},
                {'label': 'Contact Me', 'url': '/contact', 'variant': 'secondary'},
            ],
        ))
        summary['hero'] += 1


def seed_content(summary):
    for data in SAMPLE_PROJECTS:
        slug = generate_slug(data['title'])
        if Project.query.filter_by(slug=slug).first() is None:
            db.session.add(Project(slug=slug, status=STATUS_PUBLISHED, **data))
            summary['projects'] += 1

    slug = generate_slug(SAMPLE_POST['title'])
    if BlogPost.query.filter_by(slug=slug).first() is None:
        db.session.add(BlogPost(
            slug=slug,
            status=STATUS_PUBLISHED,
            read_time=calculate_read_time(SAMPLE_POST['content']),
            **SAMPLE_POST
        ))
        summary['posts'] += 1


def seed_about(summary):
    for name, category, level, order in SAMPLE_SKILLS:
        if Skill.query.filter_by(name=name, category=category).first() is None:
            db.session.add(Skill(name=name, category=category, proficiency_level=level, display_order=order))
            summary['skills'] += 1

    if Experience.query.filter_by(company='Tech Company Inc.').first() is None:
        db.session.add(Experience(
            company='Tech Company Inc.',
            role='Senior Software Engineer',
            location='Remote',
            start_date=datetime(2023, 1, 1),
            description='Led development of the main product, improving performance and user experience.',
            highlights=[
                'Led migration of a legacy system to a modern stack',
                'Reduced page load times by 60% through image optimization and CDN caching',
                'Implemented a CI/CD pipeline with automated testing',
            ],
            display_order=1,
        ))
        summary['experience'] += 1

    if Education.query.filter_by(institution='State University').first() is None:
        db.session.add(Education(
            institution='State University',
            degree='Bachelor of Science',
            field='Computer Science',
            start_date=datetime(2018, 9, 1),
            end_date=datetime(2022, 5, 1),
            achievements="Dean's List, Senior Capstone Award",
            display_order=1,
        ))
        summary['education'] += 1

    if Certification.query.filter_by(name='AWS Certified Cloud Practitioner').first() is None:
        db.session.add(Certification(
            name='AWS Certified Cloud Practitioner',
            issuer='Amazon Web Services',
            date_earned=datetime(2025, 6, 1),
            credential_url='https://aws.amazon.com/certification/',
            display_order=1,
        ))
        summary['certifications'] += 1


def seed_database():
    """Insert the sample rows that are missing; returns counts of created rows"""
    summary = dict.fromkeys(
        ['site_settings', 'hero', 'projects', 'posts', 'skills', 'experience', 'education', 'certifications'],
        0
    )
    seed_site(summary)
    seed_content(summary)
    seed_about(summary)
    db.session.commit()
    return summary


def main():
    """Main seed function"""
    print("=" * 60)
    print("Seeding database")
    print("=" * 60)

    app = create_app()
    with app.app_context():
        try:
            summary = seed_database()
        except Exception as e:
            db.session.rollback()
            print(f"[FAILED] Seed failed: {str(e)}")
            sys.exit(1)

        for table, created in summary.items():
            print(f"  [OK] {table}: {created} created")

    print("\nSeed complete")


if __name__ == '__main__':
    main()
