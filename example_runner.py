"""Small example: create a table in the local store, render its insert form and submit it."""
import logging

from formbuilder.csrf import CsrfGuard, MappingSessionStore
from formbuilder.executor import Executor
from formbuilder.form import FormModel
from formbuilder.renderer import FormRenderer
from formbuilder.submission import SubmissionHandler

RESUME_PROJECTS = """
CREATE TABLE resume_projects (
    id INT NOT NULL AUTO_INCREMENT,
    title VARCHAR(120) NOT NULL,
    description TEXT,
    tech_stack JSON,
    status ENUM('draft','published','archived') NOT NULL DEFAULT 'draft',
    featured ENUM('yes','no') DEFAULT 'no',
    PRIMARY KEY (id)
);
"""


def bootstrap(base_dir: str = "data"):
    exe = Executor(base_dir=base_dir)
    if "resume_projects" not in exe.list_tables():
        exe.execute(RESUME_PROJECTS)
    session = MappingSessionStore({})
    model = FormModel.from_backend(exe, "resume_projects", action="/", method="POST", csrf_enabled=True)
    print(FormRenderer().render(model, csrf_token=CsrfGuard(session).token()))

    result = SubmissionHandler(model, exe.execute_insert, csrf_store=session).handle({
        "csrf_token": session.get("csrf_token"),
        "title": "Form builder",
        "description": "Generates insert forms from table schemas",
        "tech_stack": "python, flask, jinja2",
        "status": "published",
        "featured": "yes",
    })
    print(result.message)
    for row in exe.rows("resume_projects"):
        print(row)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    bootstrap()
