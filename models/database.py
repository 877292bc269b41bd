"""MongoDB connection lifecycle."""

from typing import Optional
from urllib.parse import urlparse
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)

DEFAULT_DATABASE_NAME = "exercise_tracker"


def database_name_from_url(url: str) -> str:
    """Database name is the path of the connection URL, e.g. ``.../exercise_tracker``."""
    name = urlparse(url).path.lstrip("/")
    return name or DEFAULT_DATABASE_NAME


class Database:
    """Owns the motor client; acquired at startup and released at shutdown."""
    
    def __init__(self, url: Optional[str] = None):
        self.url = url or settings.mongodb_url
        self.client: Optional[AsyncIOMotorClient] = None
    
    async def connect(self) -> "Database":
        """Create the client and make sure the collections carry their indexes."""
        self.client = AsyncIOMotorClient(self.url)
        logger.info(f"Connected to MongoDB database '{database_name_from_url(self.url)}'")
        await self.init_indexes()
        return self
    
    async def init_indexes(self):
        """Create indexes for the users and exercises collections."""
        database = self.get_database()
        
        # Users collection
        await database.users.create_index([("username", ASCENDING)], unique=True)
        
        # Exercises collection
        await database.exercises.create_index([("user_id", ASCENDING), ("date", ASCENDING)])
        
        logger.info("MongoDB initialized: users and exercises collections indexed")
    
    async def close(self):
        """Close the client if it was opened."""
        if self.client:
            self.client.close()
            self.client = None
            logger.info("Disconnected from MongoDB")
    
    def get_database(self) -> AsyncIOMotorDatabase:
        """Get database instance."""
        if self.client is None:
            raise RuntimeError("Database is not connected")
        return self.client[database_name_from_url(self.url)]
    
    @property
    def users(self):
        """Users collection."""
        return self.get_database().users
    
    @property
    def exercises(self):
        """Exercises collection."""
        return self.get_database().exercises
