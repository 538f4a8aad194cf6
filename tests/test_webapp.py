import html
import logging
import re

import pytest

from formbuilder.executor import Executor
from webapp.app import create_app


@pytest.fixture
def app(executor, tmp_path):
    return create_app({"TESTING": True, "SECRET_KEY": "test", "DATA_DIR": str(tmp_path)})


@pytest.fixture
def client(app):
    return app.test_client()


def person(**overrides):
    data = {"first_name": "Ada", "user_password": "x", "role": "admin", "active": "1", "tags": "a,b"}
    data.update(overrides)
    return data


def test_index_lists_tables(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b'href="/table/people/insert"' in response.data


def test_insert_form_renders_with_csrf_token(client):
    response = client.get("/table/people/insert")
    assert response.status_code == 200
    assert b'name="csrf_token"' in response.data
    assert b'<form action="/table/people/insert" method="POST">' in response.data
    assert b'name="id"' not in response.data
    with client.session_transaction() as sess:
        assert sess["csrf_token"]


def test_field_selection_query_args(client):
    html = client.get("/table/people/insert?only=first_name,email&omit=email").data
    assert b'name="first_name"' in html
    assert b'name="email"' not in html
    assert b'name="bio"' not in html
    assert client.get("/table/people/insert?only=bogus").status_code == 400


def test_unknown_table_is_404(client):
    assert client.get("/table/ghosts/insert").status_code == 404


def test_submission_persists_row(client, tmp_path):
    with client.session_transaction() as sess:
        sess["csrf_token"] = "tok"
    response = client.post("/table/people/insert", data=person(csrf_token="tok"))
    assert response.status_code == 200
    assert b"Record saved." in response.data
    rows = Executor(base_dir=str(tmp_path)).rows("people")
    assert rows[0]["first_name"] == "Ada"
    assert rows[0]["tags"] == '["a", "b"]'


def test_submission_with_bad_token_is_rejected(client, tmp_path):
    with client.session_transaction() as sess:
        sess["csrf_token"] = "tok"
    response = client.post("/table/people/insert", data=person(csrf_token="nope"))
    assert response.status_code == 422
    assert Executor(base_dir=str(tmp_path)).rows("people") == []


def test_persistence_failure_shows_generic_message(client):
    with client.session_transaction() as sess:
        sess["csrf_token"] = "tok"
    response = client.post("/table/people/insert", data=person(csrf_token="tok", role="owner"))
    assert response.status_code == 500
    assert b"could not be saved" in response.data
    assert b"owner" not in response.data


def test_htmx_mode_returns_fragment(executor, tmp_path):
    app = create_app({"TESTING": True, "SECRET_KEY": "t", "DATA_DIR": str(tmp_path), "HTMX": True, "CSRF_ENABLED": False})
    client = app.test_client()
    html = client.get("/table/people/insert").data
    assert b'hx-post="/table/people/insert"' in html
    assert b'<div id="form-result"></div>' in html
    response = client.post("/table/people/insert", data=person(), headers={"HX-Request": "true"})
    assert response.status_code == 200
    assert response.data.strip().startswith(b'<div class="alert alert-success">')


def test_field_selection_survives_the_post(client, monkeypatch):
    inserted = []
    execute_insert = Executor.execute_insert

    def recording_insert(self, table, columns, values):
        inserted.append(list(columns))
        return execute_insert(self, table, columns, values)

    monkeypatch.setattr(Executor, "execute_insert", recording_insert)
    page = client.get("/table/people/insert?only=first_name,user_password,role,active").data.decode()
    action = html.unescape(re.search(r'<form action="([^"]+)"', page).group(1))
    assert "only=" in action
    with client.session_transaction() as sess:
        sess["csrf_token"] = "tok"
    response = client.post(action, data=person(csrf_token="tok"))
    assert response.status_code == 200
    assert inserted == [["first_name", "user_password", "role", "active"]]
    assert b'name="bio"' not in response.data


def test_default_secret_key_is_flagged(tmp_path, monkeypatch, caplog):
    monkeypatch.delenv("FORMBUILDER_SECRET_KEY", raising=False)
    with caplog.at_level(logging.WARNING, logger="webapp.app"):
        create_app({"DATA_DIR": str(tmp_path)})
    assert "FORMBUILDER_SECRET_KEY" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.WARNING, logger="webapp.app"):
        create_app({"DATA_DIR": str(tmp_path), "SECRET_KEY": "s3cret"})
        create_app({"TESTING": True, "DATA_DIR": str(tmp_path)})
    assert "SECRET_KEY" not in caplog.text
