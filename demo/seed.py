#!/usr/bin/env python3
"""
Demo seed script — populates a running server with sample users.

!! NOT FOR PRODUCTION !!
This script creates users with known passwords through the public API.
It is intended ONLY for local demos and frontend development.

Usage:
    # With the API server running on localhost:3000:
    python demo/seed.py

    # Remove every user first, then re-seed:
    python demo/seed.py --reset

    # Custom server URL:
    python demo/seed.py --base-url http://localhost:9000

Users after seeding:
    ┌──────────────────────────────┬────────────────┬──────────┐
    │ Email                        │ Password       │ Active   │
    ├──────────────────────────────┼────────────────┼──────────┤
    │ alice.chen@example.com       │ AliceDemo123!  │ yes      │
    │ bob.martinez@example.com     │ BobDemo123!    │ yes      │
    │ carol.nguyen@example.com     │ CarolDemo123!  │ yes      │
    │ dave.johnson@example.com     │ DaveDemo123!   │ no       │
    └──────────────────────────────┴────────────────┴──────────┘
"""

import argparse
import asyncio

import httpx

BASE_URL = "http://localhost:3000"

# ---------------------------------------------------------------------------
# Demo users
# ---------------------------------------------------------------------------

USERS = [
    {
        "email": "alice.chen@example.com",
        "password": "AliceDemo123!",
        "firstName": "Alice",
        "lastName": "Chen",
        "active": True,
    },
    {
        "email": "bob.martinez@example.com",
        "password": "BobDemo123!",
        "firstName": "Bob",
        "lastName": "Martinez",
        "active": True,
    },
    {
        "email": "carol.nguyen@example.com",
        "password": "CarolDemo123!",
        "firstName": "Carol",
        "lastName": "Nguyen",
        "active": True,
    },
    {
        "email": "dave.johnson@example.com",
        "password": "DaveDemo123!",
        "firstName": "Dave",
        "lastName": "Johnson",
        "active": False,
    },
]


def log(msg: str) -> None:
    print(f"  {msg}")


async def create_user(client: httpx.AsyncClient, user: dict) -> dict | None:
    """Create one user; returns None if the email is already taken."""
    payload = {key: value for key, value in user.items() if key != "active"}
    resp = await client.post("/users", json=payload)
    if resp.status_code == 400 and "already registered" in resp.json().get("message", ""):
        log(f"{user['email']} already exists, skipping")
        return None
    resp.raise_for_status()
    return resp.json()


async def deactivate(client: httpx.AsyncClient, user_id: str) -> None:
    resp = await client.patch(f"/users/{user_id}", json={"isActive": False})
    resp.raise_for_status()


async def remove_all(client: httpx.AsyncClient) -> int:
    """Delete every user on the server. Returns how many were removed."""
    resp = await client.get("/users")
    resp.raise_for_status()
    users = resp.json()
    for user in users:
        (await client.delete(f"/users/{user['id']}")).raise_for_status()
    return len(users)


async def seed(base_url: str, reset: bool = False) -> None:
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        if reset:
            print("\nRemoving existing users...")
            log(f"{await remove_all(client)} removed")

        print("\nCreating users...")
        for user in USERS:
            created = await create_user(client, user)
            if created is None:
                continue
            if not user["active"]:
                await deactivate(client, created["id"])
            log(f"{created['firstName']} {created['lastName']} <{created['email']}> id={created['id']}")

    # --- Summary ---
    print("\n========================================")
    print("  SEED COMPLETE — Demo Credentials")
    print("========================================")
    print(f"\n  {'Email':<30s} {'Password':<16s} {'Active'}")
    print(f"  {'─' * 30} {'─' * 16} {'─' * 6}")
    for u in USERS:
        print(f"  {u['email']:<30s} {u['password']:<16s} {'yes' if u['active'] else 'no'}")
    print()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Demo seed script — NOT FOR PRODUCTION",
        epilog="Creates sample users through the running API.",
    )
    parser.add_argument(
        "--base-url", default=BASE_URL,
        help=f"Base URL of the running API (default: {BASE_URL})",
    )
    parser.add_argument(
        "--reset", action="store_true",
        help="Delete every existing user before seeding",
    )
    args = parser.parse_args()

    await seed(args.base_url, reset=args.reset)


if __name__ == "__main__":
    asyncio.run(main())
