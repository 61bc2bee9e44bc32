from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.server_api import ServerApi

from ..config import settings

# Create a new client; motor connects lazily on the first operation
client = AsyncIOMotorClient(settings.MONGODB_URL, server_api=ServerApi("1"))

database = client.get_database(settings.DATABASE_NAME)
