"""
Bill of materials routes
"""

from flask import jsonify, request

from teamstock.data.users.permissions import DELETE_ALL, EDIT_BOM, WRITE_ALL
from . import actor, api, context, json_body, merge_update, permission_required


@api.route('/bom', methods=['GET'])
def list_boms():
    repository = context().repositories.bom
    team = request.args.get('team')
    boms = repository.list_by_team(team) if team else repository.list()
    return jsonify([bom.to_dict() for bom in boms])


@api.route('/bom', methods=['POST'])
@permission_required(EDIT_BOM, WRITE_ALL)
def create_bom():
    bom = context().bom.create_bom(json_body(), actor())
    return jsonify(bom.to_dict()), 201


@api.route('/bom/<bom_id>', methods=['GET'])
def get_bom(bom_id):
    return jsonify(context().repositories.bom.get(bom_id).to_dict())


@api.route('/bom/<bom_id>/summary', methods=['GET'])
def get_bom_summary(bom_id):
    ctx = context()
    return jsonify(ctx.bom.summarize(ctx.repositories.bom.get(bom_id)))


@api.route('/bom/<bom_id>', methods=['PUT', 'PATCH'])
@permission_required(EDIT_BOM, WRITE_ALL)
def update_bom(bom_id):
    data = json_body()
    if 'status' in data:
        context().bom.set_status(bom_id, data['status'], actor())
    bom = merge_update(context().repositories.bom, bom_id, data, protected=('status', 'total_cost'))
    return jsonify(bom.to_dict())


@api.route('/bom/<bom_id>', methods=['DELETE'])
@permission_required(DELETE_ALL, WRITE_ALL)
def delete_bom(bom_id):
    return jsonify(context().repositories.bom.delete(bom_id).to_dict())


@api.route('/bom/<bom_id>/sync', methods=['POST'])
@permission_required(EDIT_BOM, WRITE_ALL)
def sync_bom(bom_id):
    bom = context().bom.sync_with_inventory(bom_id, actor())
    return jsonify(bom.to_dict())


@api.route('/bom/<bom_id>/items', methods=['POST'])
@permission_required(EDIT_BOM, WRITE_ALL)
def add_bom_item(bom_id):
    item = context().bom.add_item(bom_id, json_body(), actor())
    return jsonify(item.to_dict()), 201


@api.route('/bom/<bom_id>/items/<item_id>', methods=['DELETE'])
@permission_required(EDIT_BOM, WRITE_ALL)
def remove_bom_item(bom_id, item_id):
    bom = context().bom.remove_item(bom_id, item_id, actor())
    return jsonify(bom.to_dict())
