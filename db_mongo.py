from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
import os
from dotenv import load_dotenv

load_dotenv()

# MongoDB connection string
MONGO_DETAILS = os.getenv("MONGO_URI", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("MONGO_DATABASE", "ai_counsellor")

# Create async client
client = AsyncIOMotorClient(MONGO_DETAILS)
db = client[DATABASE_NAME]

# Collections
users_collection = db["users"]


def get_users() -> AsyncIOMotorCollection:
    return users_collection


async def ensure_indexes() -> None:
    await users_collection.create_index("email", unique=True)
