from flask import Blueprint, request, jsonify, current_app, g
from properlia.services import catalog, email_service
from properlia.utils.auth import require_auth
from properlia.utils.errors import BadRequest, ExternalServiceError
from properlia.utils.helpers import valid_email

bp = Blueprint('emails', __name__)


def _email_params(required_fields):
    """Top-level fields of the body; BadRequest when any is blank or the email is malformed"""
    data = request.get_json(silent=True) if request.is_json else request.form.to_dict()
    data = data if isinstance(data, dict) else {}

    missing = [field for field in required_fields if not str(data.get(field) or '').strip()]
    if missing:
        raise BadRequest(f"Missing required fields: {', '.join(missing)}")

    if data.get('email') and not valid_email(data['email']):
        raise BadRequest('Invalid email format')
    return data


def _sent(message, result):
    return jsonify({'message': message, 'id': result.get('id')}), 200


def _failed(error, e):
    current_app.logger.error(f"{error}: {e.message}")
    return jsonify({'error': error, 'details': e.message}), 422


@bp.route('/contact', methods=['POST'])
def send_contact_form():
    """
    Send the public contact form to the site inbox
    ---
    tags:
      - Emails
    requestBody:
      required: true
      content:
        application/json:
          schema:
            type: object
            required:
              - name
              - email
              - message
            properties:
              name:
                type: string
              email:
                type: string
                format: email
              message:
                type: string
              subject:
                type: string
    responses:
      200:
        description: Contact form sent successfully
      400:
        description: Missing fields or invalid email
      422:
        description: Email provider failed
    """
    data = _email_params(('name', 'email', 'message'))
    try:
        result = email_service.send_contact_form(
            data['name'], data['email'], data['message'], subject=data.get('subject')
        )
    except ExternalServiceError as e:
        return _failed('Failed to send email', e)
    return _sent('Contact form sent successfully', result)


@bp.route('/property-inquiry', methods=['POST'])
def send_property_inquiry():
    """
    Send an inquiry about one property to the site inbox
    ---
    tags:
      - Emails
    requestBody:
      required: true
      content:
        application/json:
          schema:
            type: object
            required:
              - property_id
              - name
              - email
              - message
            properties:
              property_id:
                type: string
              name:
                type: string
              email:
                type: string
                format: email
              phone:
                type: string
              message:
                type: string
    responses:
      200:
        description: Property inquiry sent successfully
      400:
        description: Missing fields or invalid email
      404:
        description: Property not found
      422:
        description: Email provider failed
    """
    data = _email_params(('property_id', 'name', 'email', 'message'))
    prop = catalog.get_property(data['property_id'])
    try:
        result = email_service.send_property_inquiry(
            prop, data['name'], data['email'], data['message'], phone=data.get('phone')
        )
    except ExternalServiceError as e:
        return _failed('Failed to send inquiry', e)
    return _sent('Property inquiry sent successfully', result)


@bp.route('/welcome', methods=['POST'])
@require_auth
def send_welcome():
    """
    Send the welcome email to the signed-in user
    ---
    tags:
      - Emails
    security:
      - Bearer: []
    responses:
      200:
        description: Welcome email sent successfully
      401:
        description: Unauthorized
      422:
        description: Email provider failed
    """
    try:
        result = email_service.send_welcome_email(g.current_user)
    except ExternalServiceError as e:
        return _failed('Failed to send welcome email', e)
    return _sent('Welcome email sent successfully', result)
