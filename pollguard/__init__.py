import time

from dotenv import load_dotenv
from flask import Flask
from flasgger import Swagger
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .errors import register_error_handlers
from .extensions import db, migrate, jwt, ma
from .middleware.gatekeeper import init_gatekeeper
from .middleware.request_id import init_request_id
from .swagger_config import swagger_template
from .utils.csrf import init_csrf
from .utils.rate_limit import init_rate_limiter

load_dotenv()


def create_app(config_class=Config, rate_limit_storage=None, clock=time.time) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)
    Swagger(app, template=swagger_template(app))

    # Trust X-Forwarded-For only for the configured number of proxies
    if app.config.get("PROXY_FIX_X_FOR"):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=app.config["PROXY_FIX_X_FOR"])

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)

    # Request integrity: CSRF tokens + rate limiting, enforced by the gatekeeper
    init_csrf(app, clock=clock)
    init_rate_limiter(app, storage=rate_limit_storage)

    # Middleware + errors
    init_request_id(app)
    init_gatekeeper(app)
    register_error_handlers(app)

    from . import models  # noqa: F401
    from .commands import register_commands
    register_commands(app)

    # Blueprint imports
    from .api.auth.routes import auth_bp
    from .api.csrf.routes import csrf_bp
    from .api.poll.routes import polls_bp
    from .api.voting.routes import voting_bp
    from .api.admin.routes import admin_bp

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(csrf_bp, url_prefix="/api")
    app.register_blueprint(polls_bp, url_prefix="/api/polls")
    app.register_blueprint(voting_bp, url_prefix="/api/polls")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")

    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    return app
