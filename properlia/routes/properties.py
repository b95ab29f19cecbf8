from flask import Blueprint, request, jsonify, current_app
from properlia.services import catalog
from properlia.services.attachments import delete_attachment
from properlia.services.email_service import notify_property_created
from properlia.utils.auth import require_role
from properlia.utils.pagination import page_params
from properlia.utils.params import require_params, uploaded

bp = Blueprint('properties', __name__)

FILTER_PARAMS = ('featured', 'status_id', 'status', 'property_type_id', 'listing_type_id')


def _property_params():
    data = require_params('property')
    return data, uploaded('property', 'images'), uploaded('property', 'videos')


@bp.route('', methods=['GET'])
def get_properties():
    """
    List properties, newest first
    ---
    tags:
      - Properties
    parameters:
      - in: query
        name: page
        schema:
          type: integer
          default: 1
        description: Page number
      - in: query
        name: items
        schema:
          type: integer
          default: 20
        description: Items per page (max 100)
      - in: query
        name: featured
        schema:
          type: string
        description: Only featured (true) or non-featured (false) properties
      - in: query
        name: status_id
        schema:
          type: string
        description: Filter by status id (takes precedence over status)
      - in: query
        name: status
        schema:
          type: string
        description: Filter by status name, case-insensitive
      - in: query
        name: property_type_id
        schema:
          type: string
        description: Filter by property type id
      - in: query
        name: listing_type_id
        schema:
          type: string
        description: Filter by listing type id
    responses:
      200:
        description: One page of properties
        content:
          application/json:
            schema:
              type: object
              properties:
                data:
                  type: array
                  items:
                    type: object
                metadata:
                  type: object
                  properties:
                    count:
                      type: integer
                    page:
                      type: integer
                    pages:
                      type: integer
                    next:
                      type: integer
                      nullable: true
                    prev:
                      type: integer
                      nullable: true
    """
    page, items = page_params()
    filters = {key: request.args.get(key) for key in FILTER_PARAMS}

    properties, metadata = catalog.list_properties(filters, page, items)
    return jsonify({
        'data': [prop.to_dict() for prop in properties],
        'metadata': metadata
    }), 200


@bp.route('/<property_id>', methods=['GET'])
def get_property(property_id):
    """
    Get property by ID
    ---
    tags:
      - Properties
    parameters:
      - in: path
        name: property_id
        required: true
        schema:
          type: string
        description: Property ID
    responses:
      200:
        description: Property details with nested lookups and media URLs
      404:
        description: Property not found
    """
    prop = catalog.get_property(property_id)
    return jsonify(prop.to_dict()), 200


@bp.route('', methods=['POST'])
@require_role('admin')
def create_property():
    """
    Create a new property
    ---
    tags:
      - Properties
    security:
      - Bearer: []
    requestBody:
      required: true
      content:
        application/json:
          schema:
            type: object
            required:
              - property
            properties:
              property:
                type: object
                required:
                  - title
                  - price
                  - address
                  - property_type_id
                  - status_id
                  - listing_type_id
                properties:
                  featured:
                    type: boolean
                  title:
                    type: string
                  description:
                    type: string
                  land_area:
                    type: number
                  built_area:
                    type: number
                  rooms:
                    type: integer
                  bathrooms:
                    type: integer
                  half_bathrooms:
                    type: integer
                  parking_spaces:
                    type: integer
                  price:
                    type: number
                  address:
                    type: string
                  city:
                    type: string
                  state:
                    type: string
                  zip_code:
                    type: string
                  neighborhood:
                    type: string
                  coordinates:
                    type: string
                  property_type_id:
                    type: string
                  status_id:
                    type: string
                  listing_type_id:
                    type: string
        multipart/form-data:
          schema:
            type: object
            description: Same fields as property[<field>] parts, plus property[images][] and property[videos][] files
    responses:
      201:
        description: Property created successfully
      400:
        description: property parameter missing
      401:
        description: Unauthorized
      422:
        description: Validation errors
    """
    data, images, videos = _property_params()
    prop = catalog.create_property(data, images, videos)
    current_app.logger.info(f"Property {prop.id} created by {request.remote_addr}")

    # Committed already; a failed email must not change the response
    notify_property_created(prop)

    return jsonify(prop.to_dict()), 201


@bp.route('/<property_id>', methods=['PUT', 'PATCH'])
@require_role('admin')
def update_property(property_id):
    """
    Update property. Only supplied fields change; uploaded media is appended.
    ---
    tags:
      - Properties
    parameters:
      - in: path
        name: property_id
        required: true
        schema:
          type: string
        description: Property ID
    security:
      - Bearer: []
    requestBody:
      required: true
      content:
        application/json:
          schema:
            type: object
            properties:
              property:
                type: object
        multipart/form-data:
          schema:
            type: object
    responses:
      200:
        description: Property updated successfully
      400:
        description: property parameter missing
      401:
        description: Unauthorized
      404:
        description: Property not found
      422:
        description: Validation errors
    """
    data, images, videos = _property_params()
    prop = catalog.update_property(property_id, data, images, videos)
    return jsonify(prop.to_dict()), 200


@bp.route('/<property_id>/attachments/<attachment_id>', methods=['DELETE'])
@require_role('admin')
def delete_property_attachment(property_id, attachment_id):
    """
    Delete one image or video of a property
    ---
    tags:
      - Properties
    parameters:
      - in: path
        name: property_id
        required: true
        schema:
          type: string
      - in: path
        name: attachment_id
        required: true
        schema:
          type: string
    security:
      - Bearer: []
    responses:
      200:
        description: Attachment deleted successfully
      401:
        description: Unauthorized
      404:
        description: Property or attachment not found
    """
    prop = catalog.get_property(property_id)
    delete_attachment(prop, attachment_id)
    current_app.logger.info(f"Attachment {attachment_id} removed from property {prop.id}")
    return jsonify({'message': 'Attachment deleted successfully'}), 200
