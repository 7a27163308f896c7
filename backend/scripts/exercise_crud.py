"""Walk a running UserHub server through create → list → get → update → delete.

Usage:
    python scripts/exercise_crud.py
    python scripts/exercise_crud.py --base-url http://localhost:8080
"""
import argparse
import json
import sys
from typing import Any, Dict, List, Optional

import httpx

DEFAULT_BASE_URL = "http://localhost:3000"
USERS_PATH = "/users"

SAMPLE_USER = {"name": "Charlie", "age": 30, "email": "charlie@example.com"}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Exercise the UserHub /users endpoints in order")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Server root URL")
    parser.add_argument("--name", default=SAMPLE_USER["name"], help="Name of the user to create")
    parser.add_argument("--age", type=float, default=SAMPLE_USER["age"], help="Age of the user to create")
    parser.add_argument("--email", default=SAMPLE_USER["email"], help="Email of the user to create")
    return parser.parse_args(argv)


def create_user(client: httpx.Client, payload: Dict[str, Any]) -> httpx.Response:
    return client.post(USERS_PATH, json=payload)


def get_all_users(client: httpx.Client) -> httpx.Response:
    return client.get(USERS_PATH)


def get_user_by_id(client: httpx.Client, user_id: str) -> httpx.Response:
    return client.get(f"{USERS_PATH}/{user_id}")


def update_user(client: httpx.Client, user_id: str, fields: Dict[str, Any]) -> httpx.Response:
    return client.put(f"{USERS_PATH}/{user_id}", json=fields)


def delete_user(client: httpx.Client, user_id: str) -> httpx.Response:
    return client.delete(f"{USERS_PATH}/{user_id}")


def _show(title: str, response: httpx.Response) -> None:
    print(f"--- {title} ---")
    if response.content:
        print(f"{response.status_code} {json.dumps(response.json(), indent=2)}")
    else:
        print(f"Status: {response.status_code}")


def run(client: httpx.Client, payload: Dict[str, Any]) -> bool:
    """Run every step once, printing each response. True when all statuses were as expected."""
    ok = True

    created = create_user(client, payload)
    _show("Create User", created)
    if created.status_code != 201:
        print("Create failed; stopping.", file=sys.stderr)
        return False
    user_id = created.json()["id"]

    listed = get_all_users(client)
    _show("Get All Users", listed)
    ok &= listed.status_code == 200 and any(u["id"] == user_id for u in listed.json())

    fetched = get_user_by_id(client, user_id)
    _show("Get User By ID", fetched)
    ok &= fetched.status_code == 200

    updated = update_user(client, user_id, {"name": f"{payload['name']} Updated"})
    _show("Update User", updated)
    ok &= updated.status_code == 200

    deleted = delete_user(client, user_id)
    _show("Delete User", deleted)
    ok &= deleted.status_code == 204

    gone = get_user_by_id(client, user_id)
    _show("Get User After Delete", gone)
    ok &= gone.status_code == 404

    remaining = get_all_users(client)
    _show("Get All Users After Delete", remaining)
    ok &= remaining.status_code == 200 and all(u["id"] != user_id for u in remaining.json())

    return bool(ok)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    payload = {"name": args.name, "age": args.age, "email": args.email}

    try:
        with httpx.Client(base_url=args.base_url, timeout=10.0) as client:
            succeeded = run(client, payload)
    except httpx.HTTPError as exc:
        print(f"Error: could not reach {args.base_url}: {exc}", file=sys.stderr)
        return 1

    return 0 if succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
