"""Tests for the sequential CRUD exercise script, against an in-memory fake server."""

import json
import uuid

import httpx

from scripts.exercise_crud import main, parse_args, run


class FakeUsersServer:
    """Just enough of the /users contract to drive the script."""

    def __init__(self):
        self.users = {}
        self.calls = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.method, request.url.path))
        parts = request.url.path.strip("/").split("/")
        if parts[0] != "users":
            return httpx.Response(404, json={"message": "Not Found"})

        if len(parts) == 1:
            if request.method == "GET":
                return httpx.Response(200, json=list(self.users.values()))
            if request.method == "POST":
                user = dict(json.loads(request.content), id=str(uuid.uuid4()))
                self.users[user["id"]] = user
                return httpx.Response(201, json=user)

        user_id = parts[1]
        if user_id not in self.users:
            return httpx.Response(404, json={"message": "User not found"})
        if request.method == "GET":
            return httpx.Response(200, json=self.users[user_id])
        if request.method == "PUT":
            self.users[user_id].update(json.loads(request.content))
            return httpx.Response(200, json=self.users[user_id])
        if request.method == "DELETE":
            del self.users[user_id]
            return httpx.Response(204)
        return httpx.Response(405, json={"message": "Method Not Allowed"})


def _client(server):
    return httpx.Client(transport=httpx.MockTransport(server), base_url="http://test")


def test_run_walks_every_endpoint_in_order(capsys):
    server = FakeUsersServer()

    with _client(server) as client:
        assert run(client, {"name": "Charlie", "age": 30, "email": "charlie@example.com"}) is True

    methods = [method for method, _ in server.calls]
    assert methods == ["POST", "GET", "GET", "PUT", "DELETE", "GET", "GET"]
    assert server.users == {}

    out = capsys.readouterr().out
    assert "--- Create User ---" in out
    assert "--- Delete User ---" in out
    assert "Status: 204" in out
    assert "Charlie Updated" in out


def test_run_stops_when_create_fails(capsys):
    def reject(request):
        return httpx.Response(400, json={"message": "Name, age, and email are required."})

    with _client(reject) as client:
        assert run(client, {"name": "Charlie"}) is False

    assert "Create failed" in capsys.readouterr().err


def test_run_reports_unexpected_status():
    server = FakeUsersServer()

    def no_deletes(request):
        if request.method == "DELETE":
            return httpx.Response(500, json={"message": "boom"})
        return server(request)

    with _client(no_deletes) as client:
        assert run(client, {"name": "Charlie", "age": 30, "email": "charlie@example.com"}) is False


def test_parse_args_defaults():
    args = parse_args([])

    assert args.base_url == "http://localhost:3000"
    assert args.name == "Charlie"
    assert args.age == 30
    assert args.email == "charlie@example.com"


def test_main_unreachable_server(capsys):
    # Port 9 (discard) on localhost is essentially never listening
    assert main(["--base-url", "http://127.0.0.1:9"]) == 1
    assert "could not reach" in capsys.readouterr().err
