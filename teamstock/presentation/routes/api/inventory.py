"""
Inventory and pending inventory routes
"""

from flask import jsonify

from teamstock.data.records.inventory_item import InventoryItem
from teamstock.data.users.permissions import DELETE_ALL, WRITE_ALL, WRITE_INVENTORY, WRITE_TEAM
from teamstock.utils.logging_sanitizer import sanitize_dict
from . import actor, api, arg_flag, context, json_body, logger, merge_update, permission_required


@api.route('/inventory', methods=['GET'])
def list_inventory():
    repository = context().repositories.inventory
    items = repository.low_stock() if arg_flag('low_stock') else repository.list()
    return jsonify([item.to_dict() for item in items])


@api.route('/inventory', methods=['POST'])
@permission_required(WRITE_ALL, WRITE_TEAM, WRITE_INVENTORY)
def create_inventory_item():
    data = json_body()
    logger.debug(f"Create inventory item: {sanitize_dict(data)}")
    item = InventoryItem.from_dict(dict(data, id=None))
    for field in ('name', 'category', 'vendor'):
        if not getattr(item, field):
            raise ValueError(f"{field} is required")
    item = context().repositories.inventory.add(item, actor())
    return jsonify(item.to_dict()), 201


@api.route('/inventory/<item_id>', methods=['GET'])
def get_inventory_item(item_id):
    return jsonify(context().repositories.inventory.get(item_id).to_dict())


@api.route('/inventory/<item_id>', methods=['PUT', 'PATCH'])
@permission_required(WRITE_ALL, WRITE_TEAM, WRITE_INVENTORY)
def update_inventory_item(item_id):
    item = merge_update(context().repositories.inventory, item_id, json_body())
    return jsonify(item.to_dict())


@api.route('/inventory/<item_id>', methods=['DELETE'])
@permission_required(DELETE_ALL, WRITE_ALL, WRITE_INVENTORY)
def delete_inventory_item(item_id):
    item = context().repositories.inventory.delete(item_id)
    return jsonify(item.to_dict())


@api.route('/pending-inventory', methods=['GET'])
def list_pending_inventory():
    return jsonify([item.to_dict() for item in context().pending_inventory.list_pending()])


@api.route('/pending-inventory/<pending_id>', methods=['GET'])
def get_pending_item(pending_id):
    return jsonify(context().repositories.pending_inventory.get(pending_id).to_dict())


@api.route('/pending-inventory/<pending_id>', methods=['PATCH', 'PUT'])
@permission_required(WRITE_ALL, WRITE_INVENTORY)
def edit_pending_item(pending_id):
    item = context().pending_inventory.edit_pending(pending_id, json_body(), actor())
    return jsonify(item.to_dict())


@api.route('/pending-inventory/<pending_id>/confirm', methods=['POST'])
@permission_required(WRITE_ALL, WRITE_INVENTORY)
def confirm_pending_receipt(pending_id):
    data = json_body()
    item = context().pending_inventory.confirm_receipt(
        pending_id,
        actual_quantity=data.get('actual_quantity'),
        quality_notes=data.get('quality_notes'),
        condition=data.get('condition') or 'good',
        actor=actor(),
    )
    return jsonify(item.to_dict())


@api.route('/pending-inventory/<pending_id>', methods=['DELETE'])
@permission_required(DELETE_ALL, WRITE_ALL, WRITE_INVENTORY)
def delete_pending_item(pending_id):
    item = context().repositories.pending_inventory.delete(pending_id)
    return jsonify(item.to_dict())
