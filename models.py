from extensions import db
from datetime import datetime, timezone
from sqlalchemy import JSON
import uuid


def utcnow():
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id():
    return str(uuid.uuid4())


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


STATUS_DRAFT = 'DRAFT'
STATUS_PUBLISHED = 'PUBLISHED'
PROFICIENCY_LEVELS = ('BEGINNER', 'INTERMEDIATE', 'ADVANCED', 'EXPERT')


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    slug = db.Column(db.String(200), unique=True, nullable=False)
    title = db.Column(db.String(200), nullable=False)
    short_description = db.Column(db.String(300), nullable=False)
    description = db.Column(db.Text, nullable=False)
    problem = db.Column(db.Text)
    solution = db.Column(db.Text)
    role = db.Column(db.String(200))
    tech_tags = db.Column(SafeJSON, default=lambda: [])
    images = db.Column(SafeJSON, default=lambda: [])  # [{url, alt, order}]
    thumbnail_image = db.Column(db.String(500), default='')
    live_url = db.Column(db.String(500))
    repo_url = db.Column(db.String(500))
    featured = db.Column(db.Boolean, default=False, nullable=False)
    display_order = db.Column(db.Integer, default=0, nullable=False)
    status = db.Column(db.String(20), default=STATUS_DRAFT, nullable=False)
    start_date = db.Column(db.DateTime)
    end_date = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        db.Index('idx_project_status_order', 'status', 'display_order'),
    )


class BlogPost(db.Model):
    __tablename__ = 'blog_posts'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    slug = db.Column(db.String(200), unique=True, nullable=False)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    excerpt = db.Column(db.String(500), nullable=False)
    featured_image = db.Column(db.String(500))
    tags = db.Column(SafeJSON, default=lambda: [])
    read_time = db.Column(db.Integer, default=1, nullable=False)
    status = db.Column(db.String(20), default=STATUS_DRAFT, nullable=False)
    published_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        db.Index('idx_blog_status_published', 'status', 'published_at'),
    )


class Skill(db.Model):
    __tablename__ = 'skills'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(100), nullable=False)
    category = db.Column(db.String(100), nullable=False)
    icon = db.Column(db.String(100))
    proficiency_level = db.Column(db.String(20))  # BEGINNER, INTERMEDIATE, ADVANCED, EXPERT
    display_order = db.Column(db.Integer, default=0, nullable=False)
    visible = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Experience(db.Model):
    __tablename__ = 'experiences'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    company = db.Column(db.String(200), nullable=False)
    role = db.Column(db.String(200), nullable=False)
    location = db.Column(db.String(200))
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime)  # None means current position
    description = db.Column(db.Text, nullable=False)
    highlights = db.Column(SafeJSON, default=lambda: [])
    logo_url = db.Column(db.String(500))
    company_url = db.Column(db.String(500))
    display_order = db.Column(db.Integer, default=0, nullable=False)
    visible = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Education(db.Model):
    __tablename__ = 'education'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    institution = db.Column(db.String(200), nullable=False)
    degree = db.Column(db.String(200), nullable=False)
    field = db.Column(db.String(200), nullable=False)
    start_date = db.Column(db.DateTime)
    end_date = db.Column(db.DateTime)
    achievements = db.Column(db.Text)
    logo_url = db.Column(db.String(500))
    display_order = db.Column(db.Integer, default=0, nullable=False)
    visible = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Certification(db.Model):
    __tablename__ = 'certifications'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(200), nullable=False)
    issuer = db.Column(db.String(200), nullable=False)
    date_earned = db.Column(db.DateTime, nullable=False)
    expiration_date = db.Column(db.DateTime)
    credential_id = db.Column(db.String(200))
    credential_url = db.Column(db.String(500))
    badge_image = db.Column(db.String(500))
    display_order = db.Column(db.Integer, default=0, nullable=False)
    visible = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Hero(db.Model):
    __tablename__ = 'hero'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    headline = db.Column(db.String(200), nullable=False)
    subheadline = db.Column(db.String(300))
    bio = db.Column(db.Text, nullable=False)
    profile_image = db.Column(db.String(500), default='')
    resume_url = db.Column(db.String(500))
    cta_buttons = db.Column(SafeJSON)  # [{label, url, variant}]
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class SiteSettings(db.Model):
    __tablename__ = 'site_settings'
    id = db.Column(db.String(36), primary_key=True, default='default')
    site_name = db.Column(db.String(200), nullable=False, default='Portfolio')
    site_description = db.Column(db.String(500))
    social_links = db.Column(SafeJSON)  # {github, linkedin, twitter, youtube, website}
    email = db.Column(db.String(254), nullable=False, default='')
    google_analytics_id = db.Column(db.String(50))
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class ContactMessage(db.Model):
    __tablename__ = 'contact_messages'
    id = db.Column(db.String(36), primary_key=True, default=new_id)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(254), nullable=False)
    subject = db.Column(db.String(300), default='')
    message = db.Column(db.Text, nullable=False)
    read = db.Column(db.Boolean, default=False, nullable=False)
    archived = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    __table_args__ = (
        db.Index('idx_message_archived_read', 'archived', 'read'),
    )
