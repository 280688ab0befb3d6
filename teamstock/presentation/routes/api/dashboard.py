"""
Dashboard and system settings routes
"""

from flask import jsonify

from teamstock.data.users.permissions import ADMIN_ALL, ADMIN_TEAM
from . import api, context, json_body, logger, permission_required


@api.route('/dashboard', methods=['GET'])
def dashboard_summary():
    return jsonify(context().dashboard.summary())


@api.route('/settings', methods=['GET'])
def get_settings():
    return jsonify(context().config.to_dict())


@api.route('/settings/<kind>', methods=['POST'])
@permission_required(ADMIN_ALL, ADMIN_TEAM)
def add_setting_option(kind):
    ctx = context()
    ctx.reconfigure(ctx.config.with_option(kind, json_body().get('value')))
    logger.info(f"Added option to {kind}")
    return jsonify(ctx.config.to_dict())


@api.route('/settings/<kind>/<value>', methods=['DELETE'])
@permission_required(ADMIN_ALL, ADMIN_TEAM)
def remove_setting_option(kind, value):
    ctx = context()
    ctx.reconfigure(ctx.config.without_option(kind, value))
    logger.info(f"Removed '{value}' from {kind}")
    return jsonify(ctx.config.to_dict())
