"""
Notification routes
"""

from flask import jsonify

from teamstock.data.records.notification import Notification
from teamstock.data.users.permissions import DELETE_ALL, WRITE_ALL
from . import actor, api, arg_flag, context, json_body, permission_required


@api.route('/notifications', methods=['GET'])
def list_notifications():
    repository = context().repositories.notifications
    notifications = repository.unread() if arg_flag('unread') else repository.list()
    return jsonify({
        'notifications': [n.to_dict() for n in notifications],
        'unread_count': repository.unread_count(),
    })


@api.route('/notifications', methods=['POST'])
def create_notification():
    data = json_body()
    notification = Notification.from_dict(dict(data, id=None, read=False, created_at=None))
    if not notification.title:
        raise ValueError("Notification title is required")
    notification = context().repositories.notifications.add(notification, actor())
    return jsonify(notification.to_dict()), 201


@api.route('/notifications/<notification_id>/read', methods=['POST'])
def mark_notification_read(notification_id):
    notification = context().repositories.notifications.mark_read(notification_id)
    return jsonify(notification.to_dict())


@api.route('/notifications/read-all', methods=['POST'])
def mark_all_notifications_read():
    changed = context().repositories.notifications.mark_all_read()
    return jsonify({'marked_read': changed})


@api.route('/notifications/<notification_id>', methods=['DELETE'])
@permission_required(DELETE_ALL, WRITE_ALL)
def delete_notification(notification_id):
    return jsonify(context().repositories.notifications.delete(notification_id).to_dict())


@api.route('/notifications/stock-alerts', methods=['POST'])
def scan_stock_alerts():
    alerts = context().stock_alerts.scan(actor())
    return jsonify([alert.to_dict() for alert in alerts]), 201
