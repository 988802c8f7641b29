"""
Dashboard Routes - Admin area pages
"""

from flask import render_template, redirect, url_for, request, flash, current_app
from flask_login import current_user
from extensions import db
from models import BlogPost, ContactMessage, Project
from utils.crud import get_or_404, page_meta, paginate, pagination_args
from utils.errors import ApiError
from blueprints.messages.routes import message_filters, unread_count
from . import dashboard_bp


MESSAGE_ACTIONS = {
    'read': {'read': True},
    'unread': {'read': False},
    'archive': {'archived': True},
    'unarchive': {'archived': False},
}


@dashboard_bp.route('')
@dashboard_bp.route('/')
def index():
    """Overview: content counts and recent edits"""
    stats = {
        'projects': Project.query.count(),
        'posts': BlogPost.query.count(),
        'unread_messages': ContactMessage.query.filter_by(read=False).count(),
    }
    recent_projects = Project.query.order_by(Project.updated_at.desc()).limit(5).all()
    recent_posts = BlogPost.query.order_by(BlogPost.updated_at.desc()).limit(5).all()

    return render_template('admin/index.html',
                           stats=stats,
                           recent_projects=recent_projects,
                           recent_posts=recent_posts,
                           admin_email=current_user.email)


@dashboard_bp.route('/messages')
def messages():
    """Inbox with the same filters as the messages API"""
    page, page_size = pagination_args('pageSize', 20, 50)
    items, total = paginate(message_filters(ContactMessage.query), page, page_size)

    meta = page_meta(total, page, page_size, 'pageSize')
    meta['unreadCount'] = unread_count()
    return render_template('admin/messages.html',
                           messages=items,
                           meta=meta,
                           filters={
                               'read': request.args.get('read', 'all'),
                               'archived': request.args.get('archived', 'false'),
                               'sort': request.args.get('sort', 'newest'),
                           })


@dashboard_bp.route('/messages/<message_id>/<action>', methods=['POST'])
def message_action(message_id, action):
    """Mark, archive or delete a message from the inbox page"""
    try:
        message = get_or_404(ContactMessage, message_id, 'Message')
    except ApiError as e:
        flash(e.message, 'danger')
        return redirect(url_for('dashboard.messages'))

    if action == 'delete':
        db.session.delete(message)
        flash('Message deleted.', 'success')
    elif action in MESSAGE_ACTIONS:
        for key, value in MESSAGE_ACTIONS[action].items():
            setattr(message, key, value)
        flash('Message updated.', 'success')
    else:
        flash('Unknown action.', 'danger')
        return redirect(url_for('dashboard.messages'))

    db.session.commit()
    current_app.logger.info(f"Admin message action {action} on {message_id}")
    return redirect(url_for('dashboard.messages', **request.args))
