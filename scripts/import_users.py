"""
Async script to load the user directory from a JSON export.

The account system owns users; this service only needs their ids for join
checks and their public fields for the joined-events listing. Run it
whenever the export changes; existing ids are skipped.

Usage:
    python scripts/import_users.py path/to/users.json

JSON shape:
    [{"id": "U1", "username": "ana", "email": "ana@example.com", "role": "user"}, ...]
"""
import asyncio
import json
import sys
from pathlib import Path

from community_events.core import AsyncDBPool
from community_events.main_config import database_config
from community_events.repository import UserRepository


def load_json_data(file_path: Path) -> list[dict]:
    """Load data from JSON file."""
    with open(file_path, encoding="utf-8") as f:
        return json.load(f)


async def import_users(json_file: Path) -> int:
    """Insert users that are not in the directory yet."""
    print(f"Loading users from {json_file}...")
    users_data = load_json_data(json_file)

    imported_count = 0
    async with AsyncDBPool.get_session() as session:
        repo = UserRepository(session)

        for user_data in users_data:
            if await repo.exists(user_data["id"]):
                print(f"  Skipping {user_data['id']} (already exists)")
                continue
            email = user_data.get("email")
            if email and await repo.find_by_email(email):
                print(f"  Skipping {user_data['id']} (email {email} already used)")
                continue

            await repo.create(
                id=user_data["id"],
                username=user_data["username"],
                email=email,
                role=user_data.get("role", "user"),
            )
            imported_count += 1

        await session.commit()

    print(f"✓ Imported {imported_count} users")
    return imported_count


async def main(argv: list[str]) -> int:
    if len(argv) != 2:
        print(__doc__)
        return 2

    users_file = Path(argv[1])
    if not users_file.exists():
        print(f"Error: Users file not found at {users_file}")
        return 1

    await AsyncDBPool.init(database_config)
    try:
        await AsyncDBPool.create_all()
        await import_users(users_file)
    finally:
        await AsyncDBPool.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv)))
