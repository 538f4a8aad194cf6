import pytest

from formbuilder.columns import ColumnMetadata, KeyRole
from formbuilder.executor import Executor

PEOPLE_DDL = """
CREATE TABLE people (
    id INT NOT NULL AUTO_INCREMENT,
    first_name VARCHAR(64) NOT NULL,
    email VARCHAR(255) UNIQUE,
    bio TEXT,
    user_password VARCHAR(255) NOT NULL,
    tags JSON,
    role ENUM('admin','editor','viewer') NOT NULL DEFAULT 'viewer',
    newsletter ENUM('yes','no') DEFAULT 'no',
    active TINYINT(1) NOT NULL DEFAULT 1,
    PRIMARY KEY (id)
);
"""


@pytest.fixture
def people_columns():
    return [
        ColumnMetadata("id", "int(11)", nullable=False, key_role=KeyRole.PRIMARY, extra="auto_increment"),
        ColumnMetadata("first_name", "varchar(64)", nullable=False),
        ColumnMetadata("email", "varchar(255)", nullable=True, key_role=KeyRole.UNIQUE),
        ColumnMetadata("bio", "text"),
        ColumnMetadata("user_password", "varchar(255)", nullable=False),
        ColumnMetadata("tags", "json"),
        ColumnMetadata("role", "enum('admin','editor','viewer')", nullable=False, default_value="viewer"),
        ColumnMetadata("newsletter", "enum('yes','no')", default_value="no"),
        ColumnMetadata("active", "tinyint(1)", nullable=False, default_value="1"),
    ]


@pytest.fixture
def executor(tmp_path):
    exe = Executor(base_dir=str(tmp_path))
    exe.execute(PEOPLE_DDL)
    return exe
