"""
Purchase request routes
"""

from flask import jsonify, request
from flask_login import current_user

from teamstock.data.users.permissions import APPROVE_PURCHASES, DELETE_ALL, WRITE_ALL, WRITE_INVENTORY
from teamstock.utils.logging_sanitizer import sanitize_dict
from . import actor, api, context, deny, json_body, logger, merge_update, permission_required

# Changed only through approve / reject / move-to-pending
LIFECYCLE_FIELDS = ('status', 'approved_by', 'approved_date', 'moved_to_pending')


def _require_approver(request_id):
    team = context().repositories.purchase_requests.get(request_id).team
    if not current_user.can_approve_purchase(team):
        deny('purchase approval')


@api.route('/purchase-requests', methods=['GET'])
def list_purchase_requests():
    repository = context().repositories.purchase_requests
    requests = repository.list()
    status = request.args.get('status')
    team = request.args.get('team')
    if status:
        requests = [pr for pr in requests if pr.status == status]
    if team:
        requests = [pr for pr in requests if pr.team == team]
    return jsonify([pr.to_dict() for pr in requests])


@api.route('/purchase-requests', methods=['POST'])
def submit_purchase_request():
    data = json_body()
    logger.debug(f"Submit purchase request: {sanitize_dict(data)}")
    purchase_request = context().purchase_requests.submit(data, actor())
    return jsonify(purchase_request.to_dict()), 201


@api.route('/purchase-requests/<request_id>', methods=['GET'])
def get_purchase_request(request_id):
    return jsonify(context().repositories.purchase_requests.get(request_id).to_dict())


@api.route('/purchase-requests/<request_id>', methods=['PUT', 'PATCH'])
def update_purchase_request(request_id):
    purchase_request = merge_update(
        context().repositories.purchase_requests, request_id, json_body(), protected=LIFECYCLE_FIELDS
    )
    return jsonify(purchase_request.to_dict())


@api.route('/purchase-requests/<request_id>', methods=['DELETE'])
@permission_required(DELETE_ALL, WRITE_ALL)
def delete_purchase_request(request_id):
    return jsonify(context().purchase_requests.delete(request_id).to_dict())


@api.route('/purchase-requests/<request_id>/approve', methods=['POST'])
def approve_purchase_request(request_id):
    _require_approver(request_id)
    data = json_body()
    purchase_request = context().purchase_requests.approve(
        request_id, data.get('approved_by') or actor(), data.get('notes')
    )
    return jsonify(purchase_request.to_dict())


@api.route('/purchase-requests/<request_id>/reject', methods=['POST'])
def reject_purchase_request(request_id):
    _require_approver(request_id)
    data = json_body()
    purchase_request = context().purchase_requests.reject(request_id, data.get('reason'), actor())
    return jsonify(purchase_request.to_dict())


@api.route('/purchase-requests/<request_id>/move-to-pending', methods=['POST'])
@permission_required(WRITE_ALL, WRITE_INVENTORY, APPROVE_PURCHASES)
def move_purchase_request_to_pending(request_id):
    pending = context().pending_inventory.move_to_pending(request_id, actor())
    return jsonify(pending.to_dict()), 201
