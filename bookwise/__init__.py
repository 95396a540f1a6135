from flask import Flask, jsonify

from bookwise.config import Config
from bookwise.errors import LibraryError
from bookwise.extensions import db, migrate, jwt, mail


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # modeller metadata'ya kayıtlı olmalı (create_all / migrate için)
    from bookwise.models import book, borrow_record, notification_log, user  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    from bookwise.controllers.auth_controller import auth_bp
    from bookwise.controllers.book_controller import book_bp
    from bookwise.controllers.borrow_controller import borrow_bp
    from bookwise.controllers.notification_controller import notif_bp
    from bookwise.controllers.verification_controller import verification_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(book_bp, url_prefix="/books")
    app.register_blueprint(borrow_bp, url_prefix="/borrow")
    app.register_blueprint(verification_bp, url_prefix="/verification")
    app.register_blueprint(notif_bp, url_prefix="/notifications")

    @app.errorhandler(LibraryError)
    def handle_library_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(500)
    def handle_internal_error(e):
        app.logger.error(f"[app] unhandled error: {getattr(e, 'original_exception', e)}")
        return jsonify({"success": False, "error": "Internal", "message": "Internal server error"}), 500

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    from bookwise.commands import register_commands
    register_commands(app)

    from bookwise.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
