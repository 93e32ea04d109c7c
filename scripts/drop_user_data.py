"""Drop all vision boards and monthly updates for a specific user."""
import asyncio
import sys

from motor.motor_asyncio import AsyncIOMotorClient


async def drop_user_data(mongodb_url: str, user_id: str, db_name: str = "visionboard"):
    """Delete every board and monthly update owned by the user."""
    client = AsyncIOMotorClient(mongodb_url)
    db = client[db_name]

    for collection_name in ("vision_boards", "monthly_updates"):
        result = await db[collection_name].delete_many({"user_id": user_id})
        print(f"Deleted {result.deleted_count} documents from {collection_name}")

    client.close()
    print("Done!")


if __name__ == "__main__":
    if len(sys.argv) not in (3, 4):
        print("Usage: python drop_user_data.py <mongodb_url> <user_id> [db_name]")
        sys.exit(1)

    asyncio.run(drop_user_data(*sys.argv[1:]))
