"""
Messages Routes - Contact submissions and the admin inbox
"""

from flask import jsonify, request, current_app
from extensions import db
from models import ContactMessage
from utils.crud import get_or_404, no_content, page_meta, paginate, pagination_args
from utils.data import message_to_dict
from utils.decorators import api_auth_required
from utils.errors import ApiError, ErrorCodes
from utils.notifications import send_contact_notification
from utils.security import check_rate_limit
from utils.validation import (
    ContactMessageCreate, MessageBulkUpdate, MessageUpdate, get_json_body, parse_body
)
from . import messages_bp


CONTACT_SUCCESS_MESSAGE = 'Your message has been sent successfully.'


def submit_contact(body):
    """Store a contact form submission and notify the site owner.

    A filled-in honeypot field is treated as a bot: the submission is
    dropped but reported as sent. Raises ApiError on rate limiting or
    invalid input.
    """
    if body.get('honeypot'):
        current_app.logger.info("Contact honeypot triggered, submission dropped")
        return None

    limit, window = current_app.config['CONTACT_RATE_LIMIT']
    if not check_rate_limit('contact', limit, window).success:
        raise ApiError('Too many messages sent. Please try again in a few minutes.',
                       429, ErrorCodes.RATE_LIMIT_EXCEEDED)

    parsed = parse_body(ContactMessageCreate, body, message='Validation failed', field_errors_only=True)

    message = ContactMessage(
        name=parsed.name,
        email=parsed.email,
        subject=parsed.subject or '',
        message=parsed.message,
    )
    db.session.add(message)
    db.session.commit()
    current_app.logger.info(f"Contact message received: {message.id}")

    try:
        send_contact_notification(message.name, message.email, message.subject,
                                  message.message, message.id)
    except Exception as e:
        current_app.logger.error(f"Failed to send contact notification email: {str(e)}")

    return message


def message_filters(query):
    """Apply the inbox ``read``/``archived``/``sort`` query parameters"""
    archived = request.args.get('archived', 'false') == 'true'
    query = query.filter(ContactMessage.archived.is_(archived))

    read = request.args.get('read', 'all')
    if read == 'true':
        query = query.filter(ContactMessage.read.is_(True))
    elif read == 'false':
        query = query.filter(ContactMessage.read.is_(False))

    if request.args.get('sort', 'newest') == 'oldest':
        return query.order_by(ContactMessage.created_at.asc())
    return query.order_by(ContactMessage.created_at.desc())


def unread_count():
    return ContactMessage.query.filter_by(read=False, archived=False).count()


def _status_changes(parsed):
    return {k: v for k, v in parsed.model_dump(exclude_unset=True).items() if v is not None}


@messages_bp.route('/contact', methods=['POST'])
def contact():
    submit_contact(get_json_body())
    return jsonify({'data': {'success': True, 'message': CONTACT_SUCCESS_MESSAGE}})


@messages_bp.route('/messages', methods=['GET'])
@api_auth_required
def list_messages():
    page, page_size = pagination_args('pageSize', 20, 50)
    messages, total = paginate(message_filters(ContactMessage.query), page, page_size)

    meta = page_meta(total, page, page_size, 'pageSize')
    meta['unreadCount'] = unread_count()
    return jsonify({'data': [message_to_dict(m) for m in messages], 'meta': meta})


@messages_bp.route('/messages/bulk', methods=['PUT'])
@api_auth_required
def bulk_update_messages():
    parsed = parse_body(MessageBulkUpdate, get_json_body(),
                        message='Validation failed', field_errors_only=True)
    values = _status_changes(parsed.update)

    if values:
        count = (
            ContactMessage.query
            .filter(ContactMessage.id.in_(parsed.ids))
            .update(values, synchronize_session=False)
        )
    else:
        count = ContactMessage.query.filter(ContactMessage.id.in_(parsed.ids)).count()
    db.session.commit()
    return jsonify({'data': {'count': count}})


@messages_bp.route('/messages/<message_id>', methods=['GET'])
@api_auth_required
def get_message(message_id):
    """A single message; viewing it marks it read"""
    message = get_or_404(ContactMessage, message_id, 'Message')
    if not message.read:
        message.read = True
        db.session.commit()
    return jsonify({'data': message_to_dict(message)})


@messages_bp.route('/messages/<message_id>', methods=['PUT'])
@api_auth_required
def update_message(message_id):
    parsed = parse_body(MessageUpdate, get_json_body(),
                        message='Validation failed', field_errors_only=True)
    message = get_or_404(ContactMessage, message_id, 'Message')

    for key, value in _status_changes(parsed).items():
        setattr(message, key, value)
    db.session.commit()
    return jsonify({'data': message_to_dict(message)})


@messages_bp.route('/messages/<message_id>', methods=['DELETE'])
@api_auth_required
def delete_message(message_id):
    message = get_or_404(ContactMessage, message_id, 'Message')
    db.session.delete(message)
    db.session.commit()
    return no_content()
