# main.py
import hmac
import logging

from flask import Blueprint, Flask, current_app, jsonify, render_template, request

import config
from db import get_database
from debugger import SqlDebugger
from errors import DatabaseUnavailable
from history_store import HistoryStore
from query_executor import QueryExecutor

LOG = logging.getLogger(__name__)

bp = Blueprint("sql_debugger", __name__)


def create_app(database=None) -> Flask:
    """Build the app around `database` (defaults to the configured backend)."""
    app = Flask(__name__)
    database = database or get_database()

    store = HistoryStore(database, config.HISTORY_TABLE)
    store.create_table()
    app.extensions["sql_debugger"] = SqlDebugger(QueryExecutor(database), store)
    app.register_blueprint(bp)
    return app


def _debugger() -> SqlDebugger:
    return current_app.extensions["sql_debugger"]


def _presented_token() -> str:
    auth = request.headers.get("Authorization", "")
    if auth.lower().startswith("bearer "):
        return auth[7:].strip()
    return request.headers.get("X-Admin-Token", "")


@bp.before_app_request
def require_admin():
    # no token configured: the host platform is responsible for auth
    if not config.ADMIN_TOKEN:
        return None
    if hmac.compare_digest(_presented_token().encode(), config.ADMIN_TOKEN.encode()):
        return None
    LOG.warning("rejected request to %s without a valid admin token", request.path)
    return jsonify({"error": "You do not have permission to access this page."}), 403


@bp.app_errorhandler(DatabaseUnavailable)
def database_unavailable(e):
    return jsonify({"error": "database unavailable: " + str(e)}), 503


@bp.route("/", methods=["GET", "POST"])
def home():
    if request.method == "POST":
        result = _debugger().submit(
            request.form.get("query", ""),
            clear_history=bool(request.form.get("clear_history")),
        )
    else:
        result = None
    history = result.history if result is not None else _debugger().history()
    return render_template(
        "home.html",
        result=result,
        history=history,
        max_rows=config.MAX_ROWS_RETURN,
    )


@bp.route("/query", methods=["POST"])
def run_query():
    body = request.get_json(force=True, silent=True)
    if body is None:
        body = {}
    if not isinstance(body, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400
    sql = body.get("sql")
    if sql is not None and not isinstance(sql, str):
        return jsonify({"error": "sql must be a string"}), 400
    clear = bool(body.get("clear_history", False))
    if not sql and not clear:
        return jsonify({"error": "sql required"}), 400
    result = _debugger().submit(sql, clear_history=clear)
    return jsonify(result.to_dict())


@bp.route("/history", methods=["GET"])
def history():
    return jsonify([h.to_dict() for h in _debugger().history()])


@bp.route("/history/clear", methods=["POST"])
def clear_history():
    _debugger().clear_history()
    return jsonify([h.to_dict() for h in _debugger().history()])


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s  %(name)-20s  %(levelname)-7s  %(message)s",
    )
    app = create_app()
    LOG.info("Registered routes:")
    for r in sorted([rule.rule for rule in app.url_map.iter_rules()]):
        LOG.info("  %s", r)
    app.run(host=config.HOST, port=config.PORT)
