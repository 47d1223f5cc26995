import os
import sqlite3
import tempfile

import pytest
from fastapi.testclient import TestClient

from entity_shapes.api import schemas as schemas_api
from entity_shapes.core.graph_builder import build_schema_graph
from entity_shapes.main import app


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clean_registry():
    schemas_api._graph_registry.clear()
    yield
    schemas_api._graph_registry.clear()


@pytest.fixture
def user_schema_defs():
    return [
        {
            "name": "User",
            "columns": {
                "id": {"scalar_type": "int", "is_generated": True},
                "name": {"scalar_type": "varchar"},
                "email": {"scalar_type": "varchar", "is_nullable": True},
            },
        },
    ]


@pytest.fixture
def blog_schema_defs():
    """Post embeds Meta (which embeds Stats) and relates to User through its id."""
    return [
        {
            "name": "User",
            "columns": {
                "id": {"scalar_type": "int", "is_generated": True},
                "name": {"scalar_type": "varchar"},
                "email": {"scalar_type": "varchar", "is_nullable": True},
            },
        },
        {
            "name": "Stats",
            "columns": {
                "views": {"scalar_type": "int", "has_default": True},
                "computed_rank": {"scalar_type": "float", "is_generated": True},
            },
        },
        {
            "name": "Meta",
            "columns": {
                "slug": {"scalar_type": "varchar"},
                "summary": {"scalar_type": "text", "is_nullable": True},
            },
            "embeds": {"stats": {"target_schema": "Stats"}},
        },
        {
            "name": "Post",
            "columns": {
                "id": {"scalar_type": "uuid", "is_generated": True},
                "title": {"scalar_type": "varchar"},
                "created_at": {"scalar_type": "timestamp", "has_default": True},
            },
            "embeds": {
                "meta": {"target_schema": "Meta"},
                "cover": {"target_schema": "Stats", "is_nullable": True},
            },
            "relations": {
                "author": {"target_schema": "User", "referenced_columns": ["id"]},
            },
        },
    ]


@pytest.fixture
def user_graph(user_schema_defs):
    return build_schema_graph(user_schema_defs)


@pytest.fixture
def blog_graph(blog_schema_defs):
    return build_schema_graph(blog_schema_defs)


@pytest.fixture
def temp_sqlite_db():
    fd, path = tempfile.mkstemp(suffix=".db")
    try:
        conn = sqlite3.connect(path)
        cur = conn.cursor()
        cur.execute(
            "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, email TEXT UNIQUE, "
            "created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP);"
        )
        cur.execute(
            "CREATE TABLE posts (id INTEGER PRIMARY KEY, title TEXT NOT NULL, "
            "author_id INTEGER NOT NULL REFERENCES users(id), "
            "editor_id INTEGER REFERENCES users(id));"
        )
        cur.execute("INSERT INTO users (name, email) VALUES ('Test User', 'test@example.com');")
        conn.commit()
        conn.close()
        yield path
    finally:
        os.close(fd)
        os.remove(path)
