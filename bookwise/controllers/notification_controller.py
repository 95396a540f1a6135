from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import jwt_required

from bookwise.models.user import Role
from bookwise.tasks.due_reminders import run_due_reminder_job
from bookwise.utils.decorators import role_required

notif_bp = Blueprint("notifications", __name__)


@notif_bp.post("/run-reminders")
@jwt_required()
@role_required(Role.ADMIN)
def run_reminders():
    counts = run_due_reminder_job(current_app._get_current_object())
    return jsonify({"success": True, "data": counts})
