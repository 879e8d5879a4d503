import logging
from flask import Flask, request
from config import Config
from errors import register_error_handlers
from routes.transactions import transactions_bp
from routes.reports import reports_bp

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    level = app.config.get("LOG_LEVEL") or "INFO"
    app.logger.setLevel(level.upper() if isinstance(level, str) else level)
    logging.getLogger("db").setLevel(app.logger.level)

    config_class.init_db(app)

    app.register_blueprint(transactions_bp)
    app.register_blueprint(reports_bp)
    register_error_handlers(app)

    @app.after_request
    def log_and_allow_client(response):
        client_url = app.config.get("CLIENT_URL")
        if client_url:
            response.headers["Access-Control-Allow-Origin"] = client_url
            response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        app.logger.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    @app.route('/')
    def health():
        return "FinEase API is running"

    return app

app = create_app()

if __name__ == "__main__":
    logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
    app.run(port=5000)
