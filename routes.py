from flask import jsonify, redirect, url_for

from controllers.entry_controller import EntryController


def init_routes(app, entry_controller=None):
    """Initialize all Flask routes using MVC pattern"""

    entry_controller = entry_controller or EntryController()

    @app.route("/", methods=["GET"])
    def index():
        """Redirect to entries view"""
        return redirect(url_for("entries"))

    @app.route("/entries", methods=["GET"])
    def entries():
        """Display entries one page at a time, keeping the rest of the query string in pager links"""
        return entry_controller.entries()

    @app.route("/api/entries", methods=["GET"])
    def api_entries():
        return jsonify(entry_controller.api_entries())
