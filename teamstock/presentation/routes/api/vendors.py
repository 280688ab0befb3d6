"""
Vendor routes
"""

from flask import jsonify

from teamstock.data.records.vendor import Vendor
from teamstock.data.users.permissions import DELETE_ALL, WRITE_ALL
from teamstock.utils.logging_sanitizer import sanitize_dict
from . import actor, api, arg_flag, context, json_body, logger, merge_update, permission_required


@api.route('/vendors', methods=['GET'])
def list_vendors():
    repository = context().repositories.vendors
    vendors = repository.list_active() if arg_flag('active') else repository.list()
    return jsonify([vendor.to_dict() for vendor in vendors])


@api.route('/vendors', methods=['POST'])
def create_vendor():
    data = json_body()
    logger.debug(f"Create vendor: {sanitize_dict(data)}")
    vendor = Vendor.from_dict(dict(data, id=None))
    if not vendor.name:
        raise ValueError("Vendor name is required")
    vendor = context().repositories.vendors.add(vendor, actor())
    return jsonify(vendor.to_dict()), 201


@api.route('/vendors/<vendor_id>', methods=['GET'])
def get_vendor(vendor_id):
    return jsonify(context().repositories.vendors.get(vendor_id).to_dict())


@api.route('/vendors/<vendor_id>', methods=['PUT', 'PATCH'])
def update_vendor(vendor_id):
    vendor = merge_update(context().repositories.vendors, vendor_id, json_body())
    return jsonify(vendor.to_dict())


@api.route('/vendors/<vendor_id>', methods=['DELETE'])
@permission_required(DELETE_ALL, WRITE_ALL)
def delete_vendor(vendor_id):
    return jsonify(context().repositories.vendors.delete(vendor_id).to_dict())


@api.route('/vendors/<vendor_id>/toggle-active', methods=['POST'])
def toggle_vendor_active(vendor_id):
    vendor = context().repositories.vendors.toggle_active(vendor_id, actor())
    return jsonify(vendor.to_dict())
