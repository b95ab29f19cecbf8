"""
CRUD blueprint shared by the lookup resources (property types, statuses,
listing types). Reads are public; writes need an admin token.
"""
from flask import Blueprint, jsonify, current_app
from properlia.services import reference as reference_service
from properlia.utils.auth import require_role
from properlia.utils.pagination import page_params
from properlia.utils.params import require_params


def reference_blueprint(name, model, root):
    bp = Blueprint(name, __name__)

    @bp.route('', methods=['GET'])
    def list_records():
        """
        List lookup records, oldest first
        ---
        parameters:
          - in: query
            name: page
            schema:
              type: integer
              default: 1
          - in: query
            name: items
            schema:
              type: integer
              default: 20
        responses:
          200:
            description: '{data, metadata}'
        """
        page, items = page_params()
        records, metadata = reference_service.list_references(model, page, items)
        return jsonify({
            'data': [record.to_dict() for record in records],
            'metadata': metadata
        }), 200

    @bp.route('/<record_id>', methods=['GET'])
    def get_record(record_id):
        """
        Get lookup record by ID
        ---
        parameters:
          - in: path
            name: record_id
            required: true
            schema:
              type: string
        responses:
          200:
            description: Record
          404:
            description: Not found
        """
        record = reference_service.get_reference(model, record_id)
        return jsonify(record.to_dict()), 200

    @bp.route('', methods=['POST'])
    @require_role('admin')
    def create_record():
        """
        Create lookup record
        ---
        security:
          - Bearer: []
        requestBody:
          required: true
          content:
            application/json:
              schema:
                type: object
                description: '{"<resource>": {"name": ..., "es_name": ...}}'
        responses:
          201:
            description: Created
          400:
            description: Root parameter missing
          422:
            description: Validation errors
        """
        record = reference_service.create_reference(model, require_params(root))
        current_app.logger.info(f"{model.label} created: {record.id}")
        return jsonify(record.to_dict()), 201

    @bp.route('/<record_id>', methods=['PUT', 'PATCH'])
    @require_role('admin')
    def update_record(record_id):
        """
        Update lookup record
        ---
        parameters:
          - in: path
            name: record_id
            required: true
            schema:
              type: string
        security:
          - Bearer: []
        responses:
          200:
            description: Updated
          404:
            description: Not found
          422:
            description: Validation errors
        """
        record = reference_service.update_reference(model, record_id, require_params(root))
        return jsonify(record.to_dict()), 200

    @bp.route('/<record_id>', methods=['DELETE'])
    @require_role('admin')
    def delete_record(record_id):
        """
        Delete lookup record unless properties still use it
        ---
        parameters:
          - in: path
            name: record_id
            required: true
            schema:
              type: string
        security:
          - Bearer: []
        responses:
          200:
            description: Deleted
          404:
            description: Not found
          422:
            description: Still assigned to properties; body carries properties_count
        """
        reference_service.delete_reference(model, record_id)
        return jsonify({'message': f'{model.label} deleted successfully'}), 200

    return bp
