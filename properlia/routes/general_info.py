from flask import Blueprint, jsonify, current_app
from properlia.models.general_info import GeneralInfo
from properlia.utils.auth import require_auth
from properlia.utils.params import require_params

bp = Blueprint('general_info', __name__)


@bp.route('', methods=['GET'])
@require_auth
def get_general_info():
    """
    Get the site contact details (created with defaults on first read)
    ---
    tags:
      - General Info
    security:
      - Bearer: []
    responses:
      200:
        description: Contact details
        content:
          application/json:
            schema:
              type: object
              properties:
                phone:
                  type: string
                whatsapp:
                  type: string
                email_to:
                  type: string
      401:
        description: Unauthorized
    """
    return jsonify(GeneralInfo.instance().to_dict()), 200


@bp.route('', methods=['PUT'])
@require_auth
def update_general_info():
    """
    Update the site contact details
    ---
    tags:
      - General Info
    security:
      - Bearer: []
    requestBody:
      required: true
      content:
        application/json:
          schema:
            type: object
            properties:
              general_info:
                type: object
                properties:
                  phone:
                    type: string
                  whatsapp:
                    type: string
                  email_to:
                    type: string
                    format: email
    responses:
      200:
        description: Updated contact details
      400:
        description: general_info parameter missing
      401:
        description: Unauthorized
      422:
        description: Validation errors
    """
    info = GeneralInfo.update_instance(require_params('general_info'))
    current_app.logger.info("General info updated")
    return jsonify(info.to_dict()), 200
