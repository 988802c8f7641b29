"""
Validation Module - Request body schemas

Bodies arrive in camelCase and are validated into snake_case keys that match
the model columns. Update schemas are partial copies of the create schemas:
fields left out of the body stay untouched, explicit nulls are still checked.
"""

from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional
from urllib.parse import urlparse

from flask import request
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    ValidationError,
    create_model,
)
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from .errors import ApiError, ErrorCodes


SLUG_PATTERN = r'^[a-z0-9]+(?:-[a-z0-9]+)*$'


def _check_url(value):
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise PydanticCustomError('url', 'Invalid URL')
    return value


def _check_url_or_empty(value):
    if value == '':
        return value
    return _check_url(value)


def _check_email(value):
    try:
        validate_email(value)
    except PydanticCustomError:
        raise PydanticCustomError('email', 'Invalid email address')
    return value


def _coerce_datetime(value):
    """Accept datetimes, ISO 8601 strings and epoch milliseconds"""
    if isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        value = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


Url = Annotated[str, AfterValidator(_check_url)]
UrlOrEmpty = Annotated[str, AfterValidator(_check_url_or_empty)]
Email = Annotated[str, Field(max_length=254), AfterValidator(_check_email)]
CoercedDateTime = Annotated[datetime, BeforeValidator(_coerce_datetime)]
Slug = Annotated[str, Field(max_length=200, pattern=SLUG_PATTERN)]
Status = Literal['DRAFT', 'PUBLISHED']


class Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )


def partial(schema, name=None):
    """Copy ``schema`` with every field optional and no defaults applied"""
    fields = {}
    for field_name, info in schema.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            # Field constraints and validators are carried in the metadata
            annotation = Annotated[(annotation, *info.metadata)]
        fields[field_name] = (annotation, Field(default=None, alias=info.alias))
    return create_model(name or f"{schema.__name__}Update", __base__=schema, **fields)


# Projects

class ProjectImage(Schema):
    url: Url
    alt: str = Field(max_length=200)
    order: int = Field(ge=0)


class ProjectCreate(Schema):
    title: str = Field(min_length=1, max_length=200)
    slug: Slug
    short_description: str = Field(min_length=1, max_length=300)
    description: str = Field(min_length=1)
    problem: Optional[str] = Field(default=None, max_length=5000)
    solution: Optional[str] = Field(default=None, max_length=5000)
    role: Optional[str] = Field(default=None, max_length=200)
    tech_tags: List[Annotated[str, Field(max_length=50)]] = Field(min_length=1)
    images: List[ProjectImage] = Field(default_factory=list)
    thumbnail_image: Optional[UrlOrEmpty] = None
    live_url: Optional[UrlOrEmpty] = None
    repo_url: Optional[UrlOrEmpty] = None
    featured: bool = False
    display_order: int = 0
    status: Status = 'DRAFT'
    start_date: Optional[CoercedDateTime] = None
    end_date: Optional[CoercedDateTime] = None


ProjectUpdate = partial(ProjectCreate)


class Reorder(Schema):
    ordered_ids: List[Annotated[str, Field(min_length=1)]] = Field(min_length=1)


# Blog

class BlogPostCreate(Schema):
    title: str = Field(min_length=1, max_length=200)
    slug: Slug
    content: str = Field(min_length=1)
    excerpt: str = Field(min_length=1, max_length=500)
    featured_image: Optional[UrlOrEmpty] = None
    tags: List[Annotated[str, Field(max_length=50)]] = Field(default_factory=list)
    status: Status = 'DRAFT'
    published_at: Optional[CoercedDateTime] = None


BlogPostUpdate = partial(BlogPostCreate)


# About page content

class SkillCreate(Schema):
    name: str = Field(min_length=1, max_length=100)
    category: str = Field(min_length=1, max_length=100)
    icon: Optional[str] = Field(default=None, max_length=100)
    proficiency_level: Optional[Literal['BEGINNER', 'INTERMEDIATE', 'ADVANCED', 'EXPERT']] = None
    display_order: int = 0
    visible: bool = True


SkillUpdate = partial(SkillCreate)


class ExperienceCreate(Schema):
    company: str = Field(min_length=1, max_length=200)
    role: str = Field(min_length=1, max_length=200)
    location: Optional[str] = Field(default=None, max_length=200)
    start_date: CoercedDateTime
    end_date: Optional[CoercedDateTime] = None
    description: str = Field(min_length=1)
    highlights: List[Annotated[str, Field(max_length=500)]] = Field(default_factory=list)
    logo_url: Optional[UrlOrEmpty] = None
    company_url: Optional[UrlOrEmpty] = None
    display_order: int = 0
    visible: bool = True


ExperienceUpdate = partial(ExperienceCreate)


class EducationCreate(Schema):
    institution: str = Field(min_length=1, max_length=200)
    degree: str = Field(min_length=1, max_length=200)
    field: str = Field(min_length=1, max_length=200)
    start_date: Optional[CoercedDateTime] = None
    end_date: Optional[CoercedDateTime] = None
    achievements: Optional[str] = Field(default=None, max_length=5000)
    logo_url: Optional[UrlOrEmpty] = None
    display_order: int = 0
    visible: bool = True


EducationUpdate = partial(EducationCreate)


class CertificationCreate(Schema):
    name: str = Field(min_length=1, max_length=200)
    issuer: str = Field(min_length=1, max_length=200)
    date_earned: CoercedDateTime
    expiration_date: Optional[CoercedDateTime] = None
    credential_id: Optional[str] = Field(default=None, max_length=200)
    credential_url: Optional[UrlOrEmpty] = None
    badge_image: Optional[UrlOrEmpty] = None
    display_order: int = 0
    visible: bool = True


CertificationUpdate = partial(CertificationCreate)


# Site content

class CtaButton(Schema):
    label: str = Field(min_length=1, max_length=50)
    url: str = Field(min_length=1)
    variant: Literal['primary', 'secondary']


class HeroUpdate(Schema):
    headline: str = Field(min_length=1, max_length=200)
    subheadline: Optional[str] = Field(default=None, max_length=300)
    bio: str = Field(min_length=1)
    profile_image: Optional[UrlOrEmpty] = None
    resume_url: Optional[UrlOrEmpty] = None
    cta_buttons: Optional[List[CtaButton]] = Field(default=None, max_length=4)


class SocialLinks(Schema):
    github: Optional[UrlOrEmpty] = None
    linkedin: Optional[UrlOrEmpty] = None
    twitter: Optional[UrlOrEmpty] = None
    youtube: Optional[UrlOrEmpty] = None
    website: Optional[UrlOrEmpty] = None


class SiteSettingsUpdate(Schema):
    site_name: str = Field(min_length=1, max_length=200)
    site_description: Optional[str] = Field(default=None, max_length=500)
    social_links: Optional[SocialLinks] = None
    email: Email
    google_analytics_id: Optional[str] = Field(default=None, max_length=50)


# Messages

class ContactMessageCreate(Schema):
    name: str = Field(min_length=1, max_length=200)
    email: Email
    subject: Optional[str] = Field(default=None, max_length=300)
    message: str = Field(min_length=10, max_length=5000)
    honeypot: Optional[str] = Field(default=None, max_length=0)


class MessageUpdate(Schema):
    read: Optional[bool] = None
    archived: Optional[bool] = None


class MessageBulkUpdate(Schema):
    ids: List[str] = Field(min_length=1, max_length=50)
    update: MessageUpdate


class UploadDelete(Schema):
    key: str = Field(min_length=1, max_length=500)


def flatten_errors(exc):
    """Collapse a ValidationError into ``{formErrors, fieldErrors}``"""
    form_errors = []
    field_errors = {}
    for error in exc.errors():
        loc = error.get('loc') or ()
        message = error.get('msg', 'Invalid value')
        if loc:
            field_errors.setdefault(str(loc[0]), []).append(message)
        else:
            form_errors.append(message)
    return {'formErrors': form_errors, 'fieldErrors': field_errors}


def get_json_body():
    """Return the request's JSON object or raise a 400"""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ApiError('Invalid JSON body', 400, ErrorCodes.VALIDATION_ERROR)
    return body


def parse_body(schema, body, message='Validation error', field_errors_only=False):
    """Validate ``body`` against ``schema`` or raise a 400 ApiError"""
    try:
        return schema.model_validate(body)
    except ValidationError as e:
        details = flatten_errors(e)
        if field_errors_only:
            details = details['fieldErrors']
        raise ApiError(message, 400, ErrorCodes.VALIDATION_ERROR, details)


def changes(parsed):
    """Column values explicitly provided in the body"""
    return parsed.model_dump(exclude_unset=True)


__all__ = [
    'ProjectCreate', 'ProjectUpdate', 'Reorder',
    'BlogPostCreate', 'BlogPostUpdate',
    'SkillCreate', 'SkillUpdate',
    'ExperienceCreate', 'ExperienceUpdate',
    'EducationCreate', 'EducationUpdate',
    'CertificationCreate', 'CertificationUpdate',
    'HeroUpdate', 'SiteSettingsUpdate',
    'ContactMessageCreate', 'MessageUpdate', 'MessageBulkUpdate', 'UploadDelete',
    'flatten_errors', 'get_json_body', 'parse_body', 'changes', 'partial',
]
