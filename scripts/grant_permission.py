#!/usr/bin/env python3
"""Add or remove a permission for a user through the HTTP API.

Usage:
  export API_URL=http://localhost:8000 KEYCLOAK_URL=http://localhost:8080
  export KEYCLOAK_REALM=grantkeeper KEYCLOAK_CLIENT_ID=grantkeeper-api KEYCLOAK_CLIENT_SECRET=grantkeeper-api-secret
  export ADMIN_USER=admin ADMIN_PASSWORD=admin
  python scripts/grant_permission.py add jdoe scan [--project-key my-project] [--organization my-org]
"""
from __future__ import annotations

import argparse
import os
import sys

import httpx


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def main() -> int:
    parser = argparse.ArgumentParser(description="Add or remove a user permission")
    parser.add_argument("operation", choices=["add", "remove"])
    parser.add_argument("login", help="Login of the user")
    parser.add_argument("permission", help="Permission key, e.g. admin, scan, codeviewer")
    parser.add_argument("--project-id", default=None, help="Project uuid")
    parser.add_argument("--project-key", default=None, help="Project key")
    parser.add_argument("--organization", default=None, help="Organization key")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    keycloak_url = os.environ.get("KEYCLOAK_URL", "http://localhost:8080")
    realm = os.environ.get("KEYCLOAK_REALM", "grantkeeper")
    client_id = os.environ.get("KEYCLOAK_CLIENT_ID", "grantkeeper-api")
    client_secret = os.environ.get("KEYCLOAK_CLIENT_SECRET", "grantkeeper-api-secret")
    user = os.environ.get("ADMIN_USER", "admin")
    password = os.environ.get("ADMIN_PASSWORD", "admin")

    token = get_token(keycloak_url, realm, client_id, client_secret, user, password)
    headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    body = {"login": args.login, "permission": args.permission}
    if args.project_id:
        body["project_id"] = args.project_id
    if args.project_key:
        body["project_key"] = args.project_key
    if args.organization:
        body["organization"] = args.organization

    r = httpx.post(
        f"{api_url}/api/permissions/{args.operation}_user",
        json=body,
        headers=headers,
        timeout=30.0,
    )
    if r.status_code != 204:
        print(f"{r.status_code}: {r.text}", file=sys.stderr)
        return 1
    print(f"{args.operation}: '{args.permission}' for '{args.login}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
