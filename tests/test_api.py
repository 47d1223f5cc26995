import threading

from fastapi import HTTPException

from entity_shapes.api import schemas as schemas_api
from entity_shapes.core.graph_builder import build_schema_graph
from entity_shapes import __version__


def _register(client, name, defs):
    return client.post("/api/schemas", json={"name": name, "schemas": defs})


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__, "graphs": 0}


def test_register_and_list_graphs(client, blog_schema_defs):
    response = _register(client, "blog", blog_schema_defs)
    assert response.status_code == 201
    assert response.json() == {"name": "blog", "schemas": ["Meta", "Post", "Stats", "User"]}

    listed = client.get("/api/schemas").json()["graphs"]
    assert [g["name"] for g in listed] == ["blog"]
    assert client.get("/api/health").json()["graphs"] == 1

    graph = client.get("/api/schemas/blog").json()
    assert graph["schemas"]["Post"]["relations"]["author"]["referenced_columns"] == ["id"]


def test_duplicate_graph_name_conflicts(client, user_schema_defs):
    assert _register(client, "users", user_schema_defs).status_code == 201
    assert _register(client, "users", user_schema_defs).status_code == 409


def test_integrity_errors_are_reported(client):
    response = _register(client, "bad", [{"name": "A", "embeds": {"a": {"target_schema": "A"}}}])
    assert response.status_code == 400
    assert response.json()["detail"]["problems"] == ["embed cycle: A -> A"]


def test_malformed_definitions_are_rejected(client):
    response = _register(client, "bad", [{"name": "A", "columns": {"id": {"is_generated": True}}}])
    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "Malformed schema definition"


def test_project_insert(client, user_schema_defs):
    _register(client, "users", user_schema_defs)
    response = client.post("/api/project", json={"graph": "users", "schema_name": "User", "mode": "insert"})
    assert response.status_code == 200
    fields = response.json()["fields"]
    assert {name: spec["presence"] for name, spec in fields.items()} == {
        "id": "optional", "name": "required", "email": "optional",
    }


def test_project_flat(client, blog_schema_defs):
    _register(client, "blog", blog_schema_defs)
    response = client.post("/api/project", json={"graph": "blog", "schema_name": "Post", "mode": "all", "flat": True})
    body = response.json()
    assert body["meta.stats.views"]["presence"] == "required"
    assert body["meta"]["value_type"]["model"] is None
    assert "author" not in body


def test_project_errors(client, user_schema_defs):
    assert client.post("/api/project", json={"graph": "nope", "schema_name": "User"}).status_code == 404
    _register(client, "users", user_schema_defs)
    assert client.post("/api/project", json={"graph": "users", "schema_name": "Ghost"}).status_code == 404
    merge_mode = client.post("/api/project", json={"graph": "users", "schema_name": "User", "mode": "merge"})
    assert merge_mode.status_code == 400


def test_merge_endpoint(client, user_schema_defs):
    _register(client, "users", user_schema_defs)
    virtuals = client.post(
        "/api/project", json={"graph": "users", "schema_name": "User", "mode": "virtuals"}
    ).json()

    response = client.post("/api/merge", json={"operands": [{"value": {"name": "Ann"}}, {"model": virtuals}]})
    assert response.status_code == 200
    fields = response.json()["fields"]
    assert fields["name"]["presence"] == "required"
    assert fields["id"]["presence"] == "optional"
    assert fields["id"]["value_type"]["scalar_type"] == "int"


def test_merge_conflict(client):
    scalar = {"presence": "required", "value_type": {"kind": "scalar", "scalar_type": "int"}}
    text = {"presence": "required", "value_type": {"kind": "scalar", "scalar_type": "text"}}
    response = client.post("/api/merge", json={"operands": [
        {"model": {"fields": {"x": scalar}}},
        {"model": {"fields": {"x": text}}},
    ]})
    assert response.status_code == 409
    assert response.json()["detail"]["path"] == "x"


def test_reflect_and_delete(client, temp_sqlite_db):
    response = client.post("/api/reflect", json={
        "db_type": "sqlite", "graph_name": "local", "file_path": temp_sqlite_db,
    })
    assert response.status_code == 201
    assert response.json()["schemas"] == ["posts", "users"]

    projected = client.post("/api/project", json={"graph": "local", "schema_name": "users", "mode": "virtuals"})
    assert list(projected.json()["fields"]) == ["id"]

    assert client.delete("/api/schemas/local").status_code == 200
    assert client.delete("/api/schemas/local").status_code == 404


def test_concurrent_registration_keeps_a_single_graph(user_schema_defs):
    graph = build_schema_graph(user_schema_defs)
    barrier = threading.Barrier(8)
    outcomes = []

    def register():
        barrier.wait()
        try:
            schemas_api.register_graph("users", graph)
            outcomes.append(201)
        except HTTPException as e:
            outcomes.append(e.status_code)

    threads = [threading.Thread(target=register) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == [201] + [409] * 7
    assert schemas_api.list_graphs() == ["users"]
