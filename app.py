import os

from taskmanager.app import create_app


# Expose a module-level `app` for WSGI servers (gunicorn expects `app:app`).
app = create_app()


if __name__ == "__main__":
    # Local development only: run the built-in server.
    app.run(
        host=app.config["HOST"],
        port=int(os.environ.get("PORT", app.config["PORT"])),
        debug=app.config["DEBUG"],
    )
