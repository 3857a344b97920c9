# File: backend/sgc_attendance/__init__.py
"""SGC Attendance System - Application Factory."""
import logging
import os
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from sqlalchemy import event

# Initialize extensions
db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"]
)

LOGIN_PAGE = '/admin/login'

def create_app(config_name: str = None) -> Flask:
    """Application factory pattern."""
    app = Flask(__name__)

    # Load configuration
    from config import get_config
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    # Configure CORS
    CORS(app, origins=app.config.get('CORS_ORIGINS', ["*"]))

    # Hosted auth client and token blocklist
    from sgc_attendance.services.hosted_auth import hosted_auth
    from sgc_attendance.services.token_blocklist import token_blocklist
    hosted_auth.init_app(app)
    token_blocklist.init_app(app)

    # Setup logging
    setup_logging(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Setup database
    setup_database(app)

    # Add CLI commands
    register_commands(app)

    # Add health check
    @app.route('/health')
    def health_check():
        return jsonify({
            'status': 'healthy',
            'service': 'SGC Attendance System',
            'version': '1.0.0'
        })

    return app

def register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    from sgc_attendance.api.auth import auth_bp
    from sgc_attendance.api.dashboard import dashboard_bp
    from sgc_attendance.api.members import members_bp
    from sgc_attendance.api.attendance import attendance_bp
    from sgc_attendance.api.reports import reports_bp
    from sgc_attendance.api.feedback import feedback_bp, public_feedback_bp
    from sgc_attendance.api.member_portal import member_portal_bp

    # Auth
    app.register_blueprint(auth_bp, url_prefix='/api/auth')

    # Admin console
    app.register_blueprint(dashboard_bp, url_prefix='/api/admin/dashboard')
    app.register_blueprint(members_bp, url_prefix='/api/admin/members')
    app.register_blueprint(attendance_bp, url_prefix='/api/admin/attendance')
    app.register_blueprint(reports_bp, url_prefix='/api/admin/reports')
    app.register_blueprint(feedback_bp, url_prefix='/api/admin/feedback')

    # Public
    app.register_blueprint(public_feedback_bp, url_prefix='/api/feedback')
    app.register_blueprint(member_portal_bp, url_prefix='/api/member')

def register_error_handlers(app: Flask) -> None:
    """Register error handlers."""
    from sgc_attendance.utils.helpers import handle_error, error_response
    from sgc_attendance.services.token_blocklist import token_blocklist
    from werkzeug.exceptions import HTTPException
    from sgc_attendance.services.hosted_auth import AuthServiceError
    from sgc_attendance.utils.validators import ValidationError

    @app.errorhandler(400)
    def bad_request(error):
        return handle_error(error, 400)

    @app.errorhandler(401)
    def unauthorized(error):
        return handle_error(error, 401)

    @app.errorhandler(403)
    def forbidden(error):
        return handle_error(error, 403)

    @app.errorhandler(404)
    def not_found(error):
        return handle_error(error, 404)

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return handle_error(error, 500)

    @app.errorhandler(HTTPException)
    def handle_exception(e):
        return handle_error(e, e.code)

    @app.errorhandler(ValidationError)
    def validation_error(e):
        return error_response(str(e), 400)

    @app.errorhandler(AuthServiceError)
    def auth_service_error(e):
        app.logger.error(f"Auth service error: {e}")
        return error_response("Authentication service unavailable", 502)

    # JWT error handlers: every session failure sends the client back to login
    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload):
        return token_blocklist.is_revoked(jwt_payload['jti'])

    @jwt.revoked_token_loader
    def revoked_token_callback(jwt_header, jwt_payload):
        return error_response('Session has ended', 401, redirect=LOGIN_PAGE)

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return error_response('Token has expired', 401, redirect=LOGIN_PAGE)

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return error_response('Invalid token', 401, redirect=LOGIN_PAGE)

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return error_response('Authorization token required', 401, redirect=LOGIN_PAGE)

def setup_logging(app: Flask) -> None:
    """Setup application logging."""
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    if not app.debug and not app.testing:
        log_file = app.config.get('LOG_FILE', 'logs/app.log')
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.info('SGC Attendance System startup')

def setup_database(app: Flask) -> None:
    """Setup database connections."""
    with app.app_context():
        # Import all models so metadata knows every table
        from sgc_attendance.models import (
            Member, MemberRole, AcademicYear,
            AttendanceRecord,
            Feedback, FeedbackStatus
        )

        if db.engine.dialect.name == 'sqlite':
            # ON DELETE CASCADE needs foreign keys switched on per connection
            @event.listens_for(db.engine, 'connect')
            def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute('PRAGMA foreign_keys=ON')
                cursor.close()

def register_commands(app: Flask) -> None:
    """Register CLI commands."""
    import click

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables')
    def init_db(drop):
        """Initialize the database."""
        if drop:
            db.drop_all()
            click.echo('Dropped all tables.')

        db.create_all()
        click.echo('Created all tables.')

    @app.cli.command('seed-db')
    def seed_db():
        """Seed database with a sample roster and attendance."""
        from sgc_attendance.services.seed_service import SeedService

        try:
            SeedService.seed_all()
            click.echo('Database seeded successfully!')
        except Exception as e:
            db.session.rollback()
            click.echo(f'Error seeding database: {str(e)}')

    @app.cli.command('create-member')
    def create_member():
        """Create a roster entry (use an admin role to allow dashboard login)."""
        from sgc_attendance.services.member_service import MemberService

        data = {
            'name': click.prompt('Name'),
            'email': click.prompt('Email'),
            'mobile': click.prompt('Mobile'),
            'department': click.prompt('Department'),
            'role': click.prompt('Role', default='Administrator'),
            'academic_year': click.prompt('Academic year (I-IV)', default='IV'),
        }

        member, error = MemberService.create_member(data)
        if error:
            click.echo(f'Error creating member: {error}')
        else:
            click.echo(f'Member created: {member["email"]} ({member["role"]})')
