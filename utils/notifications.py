"""
Notifications Module - Contact form notifications by email and Telegram

Email goes through SES when SES_FROM_EMAIL and CONTACT_EMAIL are configured
and through the admin SMTP account otherwise. Telegram is sent in addition
whenever a bot token and chat id are set. Delivery never raises into the
request that triggered it.
"""

import html
import smtplib
import threading
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import boto3
import requests
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app


def get_admin_notifications_config():
    """Load admin notification settings from the app config"""
    cfg = current_app.config
    return {
        'ses': {
            'region': cfg.get('APP_AWS_REGION') or cfg.get('S3_REGION'),
            'from_email': cfg.get('SES_FROM_EMAIL'),
            'to_email': cfg.get('CONTACT_EMAIL'),
        },
        'telegram': {
            'bot_token': cfg.get('ADMIN_TELEGRAM_BOT_TOKEN'),
            'chat_id': cfg.get('ADMIN_TELEGRAM_CHAT_ID'),
        },
        'smtp': {
            'host': cfg.get('ADMIN_SMTP_HOST'),
            'port': cfg.get('ADMIN_SMTP_PORT') or '587',
            'email': cfg.get('ADMIN_SMTP_EMAIL'),
            'password': cfg.get('ADMIN_SMTP_PASSWORD'),
            'recipient': cfg.get('CONTACT_EMAIL') or cfg.get('ADMIN_SMTP_EMAIL'),
        },
    }


def build_contact_email(name, email, subject, message, message_id):
    """Return ``(subject, text_body, html_body)`` for a new contact message"""
    title = f"New contact message: {subject}" if subject else f"New contact message from {name}"
    admin_link = f"{current_app.config.get('APP_URL', '').rstrip('/')}/admin/messages"

    text_body = (
        f"Name: {name}\n"
        f"Email: {email}\n"
        f"Subject: {subject or '(none)'}\n\n"
        f"{message}\n\n"
        f"Message ID: {message_id}\n"
        f"View in admin: {admin_link}\n"
    )
    html_body = (
        f"<h3>New contact message</h3>"
        f"<p><strong>Name:</strong> {html.escape(name)}<br>"
        f"<strong>Email:</strong> {html.escape(email)}<br>"
        f"<strong>Subject:</strong> {html.escape(subject or '(none)')}</p>"
        f"<p style=\"white-space: pre-wrap\">{html.escape(message)}</p>"
        f"<p><a href=\"{html.escape(admin_link)}\">View in admin</a> (ID {html.escape(message_id)})</p>"
    )
    return title, text_body, html_body


def send_ses_email(ses_cfg, reply_to, subject, text_body, html_body):
    cfg = current_app.config
    client = boto3.client(
        'ses',
        region_name=ses_cfg['region'],
        aws_access_key_id=cfg.get('APP_AWS_ACCESS_KEY_ID'),
        aws_secret_access_key=cfg.get('APP_AWS_SECRET_ACCESS_KEY'),
    )
    try:
        client.send_email(
            Source=ses_cfg['from_email'],
            Destination={'ToAddresses': [ses_cfg['to_email']]},
            ReplyToAddresses=[reply_to],
            Message={
                'Subject': {'Data': subject, 'Charset': 'UTF-8'},
                'Body': {
                    'Text': {'Data': text_body, 'Charset': 'UTF-8'},
                    'Html': {'Data': html_body, 'Charset': 'UTF-8'},
                },
            },
        )
        current_app.logger.info("✓ Contact notification sent via SES")
        return True
    except (BotoCoreError, ClientError) as e:
        current_app.logger.error(f"✗ SES send error: {str(e)}")
        return False


def send_smtp_email(smtp_cfg, reply_to, subject, text_body, html_body):
    if not all([smtp_cfg.get('host'), smtp_cfg.get('email'), smtp_cfg.get('password')]):
        current_app.logger.debug("Admin SMTP credentials not configured")
        return False

    msg = MIMEMultipart('alternative')
    msg['Subject'] = subject
    msg['From'] = smtp_cfg['email']
    msg['To'] = smtp_cfg['recipient']
    msg['Reply-To'] = reply_to
    msg.attach(MIMEText(text_body, 'plain'))
    msg.attach(MIMEText(html_body, 'html'))

    try:
        with smtplib.SMTP(smtp_cfg['host'], int(smtp_cfg['port'])) as server:
            server.starttls()
            server.login(smtp_cfg['email'], smtp_cfg['password'])
            server.send_message(msg)
        current_app.logger.info("✓ Contact notification sent via SMTP")
        return True
    except (smtplib.SMTPException, OSError) as e:
        current_app.logger.error(f"✗ Admin SMTP send error: {str(e)}")
        return False


def send_telegram_message(telegram_cfg, text):
    if not (telegram_cfg.get('bot_token') and telegram_cfg.get('chat_id')):
        current_app.logger.debug("Admin Telegram credentials not configured")
        return False

    url = f"https://api.telegram.org/bot{telegram_cfg['bot_token']}/sendMessage"
    payload = {'chat_id': telegram_cfg['chat_id'], 'text': text, 'parse_mode': 'HTML'}
    try:
        response = requests.post(url, json=payload, timeout=10)
        if response.status_code == 200:
            current_app.logger.info("✓ Contact notification sent via Telegram")
            return True
        current_app.logger.error(f"✗ Telegram API error: {response.status_code}")
    except requests.RequestException as e:
        current_app.logger.error(f"✗ Telegram send error: {str(e)}")
    return False


def deliver_contact_notification(name, email, subject, message, message_id):
    """Send the notification synchronously; returns the channels that succeeded"""
    config = get_admin_notifications_config()
    title, text_body, html_body = build_contact_email(name, email, subject, message, message_id)
    delivered = []

    ses_cfg = config['ses']
    if ses_cfg['from_email'] and ses_cfg['to_email']:
        if send_ses_email(ses_cfg, email, title, text_body, html_body):
            delivered.append('ses')
    elif send_smtp_email(config['smtp'], email, title, text_body, html_body):
        delivered.append('smtp')

    telegram_text = (
        f"📬 <b>{html.escape(title)}</b>\n\n"
        f"<b>From:</b> {html.escape(name)} ({html.escape(email)})\n\n"
        f"{html.escape(message)}"
    )
    if send_telegram_message(config['telegram'], telegram_text):
        delivered.append('telegram')

    if not delivered:
        current_app.logger.warning(f"No notification channel delivered message {message_id}")
    return delivered


def send_contact_notification(name, email, subject, message, message_id):
    """Fire-and-forget notification for a newly saved contact message"""
    app = current_app._get_current_object()

    def _send():
        with app.app_context():
            try:
                deliver_contact_notification(name, email, subject, message, message_id)
            except Exception as e:
                app.logger.error(f"Failed to send contact notification: {str(e)}")

    thread = threading.Thread(target=_send)
    thread.daemon = True
    thread.start()
    return thread


__all__ = [
    'get_admin_notifications_config',
    'build_contact_email',
    'deliver_contact_notification',
    'send_contact_notification',
]
