"""
Report Data Routes
Complaint counts for the dashboards
"""

from flask import Blueprint, jsonify, g
from jambangan.models.complaint import Complaint, WAITING_STATUS
from jambangan.utils.decorators import user_required, admin_required

reports_bp = Blueprint('reports', __name__)


def _report_counts(user_id=None):
    """Total complaints and those that left the waiting status"""
    query = Complaint.query
    if user_id is not None:
        query = query.filter(Complaint.user_id == user_id)

    return {
        'totalReports': query.count(),
        'respondedReports': query.filter(Complaint.status != WAITING_STATUS).count(),
    }


@reports_bp.route('', methods=['GET'])
@admin_required()
def get_report_data():
    """Counts across all complaints"""
    return jsonify(_report_counts()), 200


@reports_bp.route('/<int:user_id>', methods=['GET'])
@user_required()
def get_user_report_data(user_id):
    """Counts for the caller's own complaints; the path id is not trusted"""
    return jsonify(_report_counts(g.user_id)), 200
