from flask import Flask, jsonify
from flask_cors import CORS


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object("taskmanager.config.Config")
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False

    # Only the configured frontends may call the API from a browser
    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    from taskmanager.utils.store import init_app as init_store, get_store

    store = init_store(app)
    app.logger.info("Serving %s tasks from %s", store.count(), store.path)

    from taskmanager.routes.docs_routes import docs_bp
    from taskmanager.routes.task_routes import tasks_bp

    app.register_blueprint(tasks_bp, url_prefix="/api/tasks")
    app.register_blueprint(docs_bp)

    @app.get("/api/health")
    def health():
        return jsonify(status="ok", service="Task Manager API", tasks=get_store().count()), 200

    @app.errorhandler(404)
    def not_found(_):
        return jsonify(error="Not Found"), 404

    @app.errorhandler(405)
    def method_not_allowed(_):
        return jsonify(error="Method Not Allowed"), 405

    @app.errorhandler(500)
    def server_error(_):
        return jsonify(error="Internal Server Error"), 500

    return app


def run(host=None, port=None, debug=None):
    app = create_app()
    app.run(
        host=host or app.config["HOST"],
        port=port or app.config["PORT"],
        debug=app.config["DEBUG"] if debug is None else debug,
    )


if __name__ == "__main__":
    # Direct run support: python -m taskmanager.app
    run()
