# File: backend/sgc_attendance/api/reports.py
"""Monthly Reports API - Admin Only."""
from flask import Blueprint, request, current_app, send_file
from flask_jwt_extended import jwt_required
from sgc_attendance.services.report_service import ReportService
from sgc_attendance.utils.decorators import admin_required
from sgc_attendance.utils.helpers import success_response, error_response
from sgc_attendance.utils.validators import Validator, ValidationError
import io

reports_bp = Blueprint('reports', __name__)

def _requested_month():
    month = request.args.get('month')
    return Validator.parse_month(month) if month else None

@reports_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return success_response(message='Reports service is running')

@reports_bp.route('/months', methods=['GET'])
@jwt_required()
@admin_required
def get_months():
    """Months with attendance, oldest first."""
    try:
        months = ReportService.available_months()
        return success_response(data={
            'months': months,
            'latest': months[-1] if months else None
        })

    except Exception as e:
        current_app.logger.error(f"Error fetching months: {str(e)}")
        return error_response(f"Error fetching months: {str(e)}", 500)

@reports_bp.route('/monthly', methods=['GET'])
@jwt_required()
@admin_required
def monthly_report():
    """Per-member figures for ``month`` (latest by default), filtered by ``q``."""
    try:
        report = ReportService.monthly_report(_requested_month(), request.args.get('q', '').strip())
        return success_response(data=report)

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error generating report: {str(e)}")
        return error_response(f"Error generating report: {str(e)}", 500)

@reports_bp.route('/monthly/export', methods=['GET'])
@jwt_required()
@admin_required
def export_monthly_report():
    """Download the monthly report as CSV."""
    try:
        report = ReportService.monthly_report(_requested_month(), request.args.get('q', '').strip())
        frame = ReportService.report_dataframe(report)

        output = io.BytesIO(frame.to_csv(index=False).encode('utf-8'))
        return send_file(
            output,
            as_attachment=True,
            download_name=f"attendance_report_{report['month']}.csv",
            mimetype='text/csv'
        )

    except ValidationError as e:
        return error_response(str(e), 400)
    except Exception as e:
        current_app.logger.error(f"Error exporting report: {str(e)}")
        return error_response(f"Error exporting report: {str(e)}", 500)
