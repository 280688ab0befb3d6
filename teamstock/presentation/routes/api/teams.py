"""
Team member, task and schedule routes
"""

from flask import jsonify, request

from teamstock.buisness.validation.normalizers import coerce_date
from teamstock.data.users.permissions import MANAGE_TEAM, WRITE_ALL
from . import api, context, json_body, permission_required


@api.route('/team-members', methods=['GET'])
def list_team_members():
    return jsonify([member.to_dict() for member in context().scheduler.members()])


@api.route('/team-members', methods=['POST'])
@permission_required(MANAGE_TEAM, WRITE_ALL)
def add_team_member():
    member = context().scheduler.add_member(dict(json_body(), id=None))
    return jsonify(member.to_dict()), 201


@api.route('/team-members/workload', methods=['GET'])
def team_workloads():
    return jsonify(context().scheduler.workloads())


@api.route('/team-members/<member_id>/workload', methods=['GET'])
def member_workload(member_id):
    workload = context().scheduler.get_member_workload(member_id)
    return jsonify({'member_id': member_id, 'workload': workload})


@api.route('/tasks', methods=['GET'])
def list_tasks():
    scheduler = context().scheduler
    quadrant = request.args.get('quadrant')
    tasks = scheduler.get_tasks_by_quadrant(quadrant) if quadrant else scheduler.tasks()
    status = request.args.get('status')
    if status:
        tasks = [task for task in tasks if task.status == status]
    assignee = request.args.get('assignee_id')
    if assignee:
        tasks = [task for task in tasks if task.assignee_id == assignee]
    return jsonify([task.to_dict() for task in tasks])


@api.route('/tasks', methods=['POST'])
def add_task():
    task = context().scheduler.add_task(dict(json_body(), id=None))
    return jsonify(task.to_dict()), 201


@api.route('/tasks/<task_id>', methods=['GET'])
def get_task(task_id):
    return jsonify(context().scheduler.get_task(task_id).to_dict())


@api.route('/tasks/<task_id>/assign', methods=['POST'])
def assign_task(task_id):
    member_id = json_body().get('member_id')
    if not member_id:
        raise ValueError("member_id is required")
    task = context().scheduler.assign_task(task_id, member_id)
    return jsonify(task.to_dict())


@api.route('/tasks/<task_id>/status', methods=['POST'])
def update_task_status(task_id):
    data = json_body()
    task = context().scheduler.update_task_status(task_id, data.get('status'), data.get('note'))
    return jsonify(task.to_dict())


@api.route('/schedule', methods=['GET'])
def weekly_schedule():
    day = coerce_date(request.args.get('date'))
    return jsonify(context().scheduler.get_weekly_schedule(day).to_dict())
