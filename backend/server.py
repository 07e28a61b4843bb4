# backend/server.py
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from app import config
from app.errors import DatabaseError
from utils.db_helper import register_user

SNIPPETS = [
    "The quick brown fox jumps over the lazy dog.",
    "To be or not to be, that is the question.",
    "A journey of a thousand miles begins with a single step.",
]


def create_app(db_path=None):
    app = Flask(__name__)
    app.config["DB_PATH"] = db_path or config.DB_PATH

    CORS(app)

    @app.route("/api/register", methods=["POST"])
    def register():
        data = request.get_json(silent=True) or {}
        username = data.get("username")
        password = data.get("password")
        try:
            register_user(username, password, db_path=app.config["DB_PATH"])
        except DatabaseError as e:
            app.logger.error("Registration failed: %s", e)
            return jsonify({"success": False, "error": "could not register user"}), 500
        app.logger.info("Registered user %s", username)
        return "User registered", 201

    @app.route("/api/snippets", methods=["GET"])
    def snippets():
        return jsonify(SNIPPETS)

    return app


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    app = create_app()
    logging.info("Server is running on http://localhost:%d", config.PORT)
    app.run(host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
