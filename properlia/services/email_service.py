"""
Transactional email through the Resend HTTP API.

Every sender raises ExternalServiceError when the API key is missing or the
API call fails. Callers decide whether that is fatal: the contact endpoints
report it, property creation only logs it.
"""
import logging

import requests
from flask import current_app, render_template
from markupsafe import Markup, escape

from properlia.models.general_info import GeneralInfo
from properlia.utils.errors import ExternalServiceError
from properlia.utils.helpers import number_with_delimiter, truncate

logger = logging.getLogger(__name__)

DEFAULT_CONTACT_SUBJECT = 'New Contact Form Submission'


def _multiline(text):
    """Escape text and keep its line breaks"""
    return Markup('<br>').join(escape(text or '').split('\n'))


def send_mail(to, subject, html, reply_to=None):
    api_key = current_app.config.get('RESEND_API_KEY')
    if not api_key:
        raise ExternalServiceError('RESEND_API_KEY is not configured')

    payload = {
        'from': current_app.config.get('RESEND_FROM_EMAIL'),
        'to': [to] if isinstance(to, str) else list(to),
        'subject': subject,
        'html': html,
    }
    if reply_to:
        payload['reply_to'] = reply_to

    url = f"{current_app.config.get('RESEND_API_URL').rstrip('/')}/emails"
    try:
        response = requests.post(
            url,
            json=payload,
            headers={'Authorization': f'Bearer {api_key}'},
            timeout=current_app.config.get('RESEND_TIMEOUT', 10)
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Resend API error: {e}")
        raise ExternalServiceError(f'Failed to send email: {e}')

    data = response.json() if response.content else {}
    logger.info(f"Email sent successfully: {data.get('id')}")
    return data


def send_contact_form(name, email, message, subject=None):
    html = render_template(
        'emails/contact_form.html',
        name=name,
        email=email,
        message=_multiline(message)
    )
    return send_mail(GeneralInfo.instance().email_to, subject or DEFAULT_CONTACT_SUBJECT, html, reply_to=email)


def send_property_inquiry(prop, name, email, message, phone=None):
    html = render_template(
        'emails/property_inquiry.html',
        property_id=prop.id,
        property_title=prop.title,
        name=name,
        email=email,
        phone=phone,
        message=_multiline(message)
    )
    return send_mail(GeneralInfo.instance().email_to, f'Property Inquiry: {prop.title}', html, reply_to=email)


def send_welcome_email(user):
    html = render_template(
        'emails/welcome.html',
        name=user.name or user.email,
        frontend_url=current_app.config.get('FRONTEND_URL')
    )
    return send_mail(user.email, 'Welcome to Properlia!', html)


def property_confirmation_subject(prop):
    type_name = prop.property_type.es_name if prop.property_type else 'Propiedad'
    listing_name = prop.listing_type.es_name if prop.listing_type else ''
    return f'Confirmación {type_name} en {listing_name}, {prop.address}, {prop.city or ""}'.rstrip(', ')


def send_property_confirmation(prop):
    frontend_url = current_app.config.get('FRONTEND_URL').rstrip('/')
    created_at = prop.created_at.strftime('%d/%m/%Y %H:%M') if prop.created_at else ''
    html = render_template(
        'emails/property_confirmation.html',
        prop=prop,
        short_title=truncate(prop.title, 20),
        formatted_price=f'${number_with_delimiter(prop.price)}',
        formatted_date=created_at,
        property_url=f'{frontend_url}/properties/{prop.id}'
    )
    return send_mail(GeneralInfo.instance().email_to, property_confirmation_subject(prop), html)


def notify_property_created(prop):
    """
    Post-commit hook for property creation. The property is already saved;
    nothing raised here may reach the caller.
    """
    try:
        send_property_confirmation(prop)
    except Exception as e:
        logger.error(f"Failed to send property confirmation for {prop.id}: {e}")
        return False
    return True
