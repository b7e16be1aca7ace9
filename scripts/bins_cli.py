#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from typing import Any
from urllib import error, request


def _http_json(method: str, url: str, payload: Any | None, timeout: float) -> tuple[int, Any]:
    data = None
    headers = {"Content-Type": "application/json"}
    if payload is not None:
        data = json.dumps(payload).encode("utf-8")
    req = request.Request(url=url, method=method, data=data, headers=headers)
    try:
        with request.urlopen(req, timeout=timeout) as resp:
            body = resp.read().decode("utf-8")
            return resp.status, json.loads(body) if body else None
    except error.HTTPError as exc:
        body = exc.read().decode("utf-8", errors="ignore")
        try:
            return exc.code, json.loads(body) if body else None
        except json.JSONDecodeError:
            return exc.code, {"success": False, "message": body or str(exc.reason)}


def print_bins(bins: list[dict[str, Any]]) -> None:
    if not bins:
        print("  (none)")
        return
    for row in bins:
        flag = "COLLECT" if row.get("needsCollection") else "ok"
        print(
            f"  [{row.get('id')}] {row.get('location')} | "
            f"fill={row.get('fillLevel')}% | {flag} | {row.get('lastUpdated')}"
        )


def print_route(plan: dict[str, Any]) -> None:
    print(f"  {plan.get('binsToCollect', 0)} stops")
    for idx, stop in enumerate(plan.get("route", []), start=1):
        print(f"  {idx}. [{stop.get('id')}] {stop.get('location')} ({stop.get('fillLevel')}%)")


def build_request(args: argparse.Namespace) -> tuple[str, str, Any | None]:
    if args.command == "list":
        return "GET", "/bins", None
    if args.command == "get":
        return "GET", f"/bins/{args.id}", None
    if args.command == "add":
        return "POST", "/bins", [{"location": item} for item in args.locations]
    if args.command == "update":
        changes: dict[str, Any] = {}
        if args.location is not None:
            changes["location"] = args.location
        if args.fill_level is not None:
            changes["fillLevel"] = args.fill_level
        if args.needs_collection is not None:
            changes["needsCollection"] = args.needs_collection
        return "PUT", f"/bins/{args.id}", changes
    if args.command == "delete":
        return "DELETE", f"/bins/{args.id}", None
    if args.command == "collect":
        return "POST", "/bins/collect-sensor-data", None
    if args.command == "route":
        return "GET", "/optimize-route", None
    if args.command == "stats":
        return "GET", "/dashboard/stats", None
    if args.command == "health":
        return "GET", "/health", None
    raise ValueError(f"Unknown command `{args.command}`")


def run(args: argparse.Namespace) -> int:
    method, path, payload = build_request(args)
    try:
        status, body = _http_json(method, f"{args.api_base}{path}", payload, args.timeout)
    except error.URLError as exc:
        print(f"Request error: {exc.reason}", file=sys.stderr)
        return 2

    if args.raw or not isinstance(body, dict) or "success" not in body:
        print(json.dumps(body, indent=2))
        return 0 if status < 400 else 1

    prefix = "[ok]" if body["success"] else "[error]"
    print(f"{prefix} HTTP {status}: {body.get('message')}")
    data = body.get("data")
    if args.command == "route" and isinstance(data, dict):
        print_route(data)
    elif isinstance(data, list):
        print_bins(data)
    elif isinstance(data, dict) and "id" in data:
        print_bins([data])
    elif data is not None:
        print(json.dumps(data, indent=2))
    return 0 if body["success"] else 1


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Command line client for the waste bin API.")
    parser.add_argument("--api-base", default="http://localhost:8080", help="API base URL")
    parser.add_argument("--timeout", type=float, default=2.0, help="HTTP timeout seconds")
    parser.add_argument("--raw", action="store_true", help="Print the raw JSON response")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List all bins")
    sub.add_parser("collect", help="Simulate a sensor reading for every bin")
    sub.add_parser("route", help="Show the optimized collection route")
    sub.add_parser("stats", help="Show dashboard statistics")
    sub.add_parser("health", help="Check the API health")

    get_cmd = sub.add_parser("get", help="Show one bin")
    get_cmd.add_argument("id", type=int)

    add_cmd = sub.add_parser("add", help="Add bins at the given locations")
    add_cmd.add_argument("locations", nargs="+")

    update_cmd = sub.add_parser("update", help="Update fields of a bin")
    update_cmd.add_argument("id", type=int)
    update_cmd.add_argument("--location")
    update_cmd.add_argument("--fill-level", type=int)
    update_cmd.add_argument(
        "--needs-collection",
        action=argparse.BooleanOptionalAction,
        default=None,
    )

    delete_cmd = sub.add_parser("delete", help="Delete a bin")
    delete_cmd.add_argument("id", type=int)

    return parser.parse_args(argv)


def main() -> None:
    args = parse_args()
    raise SystemExit(run(args))


if __name__ == "__main__":
    main()
