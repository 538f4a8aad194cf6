import logging
import os

from flask import Flask, abort, render_template_string, request, session, url_for
from markupsafe import Markup

from formbuilder.csrf import CsrfGuard, MappingSessionStore
from formbuilder.exceptions import (
    CsrfValidationFailed,
    FormBuilderException,
    InvalidFieldSelection,
    TableNotFound,
)
from formbuilder.executor import Executor
from formbuilder.form import FormModel, FormOptions, HtmxConfig
from formbuilder.renderer import FormRenderer
from formbuilder.submission import SubmissionHandler

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "SECRET_KEY": "dev",
    "DATA_DIR": "data",
    "RENDER_LABELS": True,
    "CSRF_ENABLED": True,
    "HTMX": False,
    "WRAPPER_CLASS": "mb-3",
    "SUBMIT_TEXT": "Submit",
}

LAYOUT_HTML = """
<!doctype html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css" rel="stylesheet">
    {% if htmx %}<script src="https://unpkg.com/htmx.org@1.9.12"></script>{% endif %}
    <title>{{ title }}</title>
</head>
<body class="p-4">
<div class="container">
    <a href="{{ url_for('index') }}" class="btn btn-secondary mb-3">Back</a>
    {{ body }}
</div>
</body>
</html>
"""

INDEX_HTML = """
<h1>Tables</h1>
<div class="list-group">
{% for t in tables %}
    <a class="list-group-item" href="{{ url_for('insert_row', table=t) }}">{{ t }}</a>
{% else %}
    <div class="list-group-item text-muted">No tables yet.</div>
{% endfor %}
</div>
"""

RESULT_HTML = """
<div class="alert {{ 'alert-success' if ok else 'alert-danger' }}">{{ message }}</div>
"""


def _names(arg):
    value = request.args.get(arg, "")
    return {n.strip() for n in value.split(",") if n.strip()}


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env("FORMBUILDER")
    if test_config:
        app.config.from_mapping(test_config)
    if not app.config.get("TESTING") and app.config["SECRET_KEY"] == DEFAULT_CONFIG["SECRET_KEY"]:
        logger.warning("Using the built-in SECRET_KEY; set FORMBUILDER_SECRET_KEY before deploying")

    exe = Executor(base_dir=app.config["DATA_DIR"])
    renderer = FormRenderer()

    def page(title, body, status=200):
        html = render_template_string(LAYOUT_HTML, title=title, body=Markup(body), htmx=app.config["HTMX"])
        return html, status

    def build_model(table):
        # the action keeps only/omit so the POST rebuilds the same field set
        selection = {arg: request.args[arg] for arg in ("only", "omit") if arg in request.args}
        options = FormOptions(render_labels=app.config["RENDER_LABELS"])
        htmx = None
        if app.config["HTMX"]:
            htmx = HtmxConfig(target="#form-result", render_target="form-result")
        model = FormModel.from_backend(
            exe,
            table,
            options,
            action=url_for("insert_row", table=table, **selection),
            method="POST",
            csrf_enabled=app.config["CSRF_ENABLED"],
            htmx=htmx,
            wrapper_class=app.config["WRAPPER_CLASS"],
            submit_text=app.config["SUBMIT_TEXT"],
        )
        only = _names("only")
        if only:
            model = model.restrict_to(only)
        return model.omit(_names("omit"))

    @app.route("/", methods=["GET"])
    def index():
        body = render_template_string(INDEX_HTML, tables=exe.list_tables())
        return page("formbuilder", body)

    @app.route("/table/<table>/insert", methods=["GET", "POST"])
    def insert_row(table):
        try:
            model = build_model(table)
        except TableNotFound:
            abort(404)
        except InvalidFieldSelection as e:
            return page("Invalid field selection", render_template_string(RESULT_HTML, ok=False, message=str(e)), 400)
        except FormBuilderException:
            logger.exception("Could not build form for %s", table)
            return page("Error", render_template_string(RESULT_HTML, ok=False, message="The form could not be built."), 500)

        store = MappingSessionStore(session)
        status = 200
        result_html = ""
        if request.method == "POST":
            handler = SubmissionHandler(model, exe.execute_insert, csrf_store=store)
            result = handler.handle(request.form.to_dict())
            if not result.ok:
                status = 422 if isinstance(result.error, CsrfValidationFailed) else 500
            result_html = render_template_string(RESULT_HTML, ok=result.ok, message=result.message)
            if request.headers.get("HX-Request"):
                return result_html, status

        token = CsrfGuard(store).token() if model.csrf_enabled else None
        form_html = renderer.render(model, render_labels=app.config["RENDER_LABELS"], csrf_token=token)
        form_html = result_html + form_html
        return page(model.title or table, form_html, status)

    return app


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("FORMBUILDER_LOG_LEVEL", "INFO"))
    create_app().run(port=5000)
