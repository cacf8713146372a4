"""Database module for Mothrbox.

This module provides the User Directory: the MongoDB collection holding user
records, keyed by a store-assigned ObjectId with a unique index on email.

ARCHITECTURE:
- The pymongo client owns connection pooling; one client per process
- UserDirectory wraps a single collection and converts documents to User
- Every pymongo failure surfaces as DatabaseError; a duplicate email on
  insert surfaces as UserAlreadyExists

Startup (fatal on failure, see main.run):
    >>> client = create_client(settings)
    >>> directory = init_db(client, settings)
"""

import logging

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..config import Settings
from ..exceptions import DatabaseError, UserAlreadyExists
from ..utils import uid
from .models import User

logger = logging.getLogger(__name__)


class UserDirectory:
    """User record operations over one MongoDB collection."""

    def __init__(self, collection: Collection):
        self._collection = collection

    def ensure_indexes(self) -> None:
        """Create the unique email index (idempotent)."""
        try:
            self._collection.create_index([("email", ASCENDING)], unique=True, name="email_unique")
        except PyMongoError as e:
            logger.error(f"Failed to create users indexes: {e}")
            raise DatabaseError({"operation": "ensure_indexes"}) from e

    def find_by_email(self, email: str) -> User | None:
        """Get a user by email, or None if no such user exists."""
        try:
            doc = self._collection.find_one({"email": email})
        except PyMongoError as e:
            logger.error(f"Database error looking up user by email: {e}")
            raise DatabaseError({"operation": "find_by_email"}) from e

        return User.from_document(doc) if doc else None

    def find_by_id(self, user_id: str) -> User | None:
        """
        Get a user by id, or None if no such user exists.

        Raises:
            ValueError: If user_id is not a valid ObjectId string
        """
        oid = uid.to_object_id(user_id)
        try:
            doc = self._collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Database error fetching user: {e}")
            raise DatabaseError({"operation": "find_by_id"}) from e

        return User.from_document(doc) if doc else None

    def insert(self, user: User) -> User:
        """
        Insert a new user record.

        Returns:
            Copy of the user with the store-assigned id set

        Raises:
            UserAlreadyExists: If the email is already taken
            DatabaseError: On any other store failure
        """
        try:
            result = self._collection.insert_one(user.to_document())
        except DuplicateKeyError as e:
            logger.warning("Duplicate email on insert")
            raise UserAlreadyExists() from e
        except PyMongoError as e:
            logger.error(f"Database error inserting user: {e}")
            raise DatabaseError({"operation": "insert"}) from e

        return user.model_copy(update={"id": uid.to_string(result.inserted_id)})


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================


def create_client(settings: Settings) -> MongoClient:
    """Create a MongoDB client. Connection is lazy; see init_db."""
    return MongoClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True,
    )


def init_db(client: MongoClient, settings: Settings) -> UserDirectory:
    """
    Verify connectivity and prepare the users collection.

    Raises:
        DatabaseError: If the server cannot be reached or indexes cannot be created
    """
    logger.info(f"Connecting to MongoDB at {settings.redacted_mongodb_uri()}...")
    database = client[settings.database_name]
    try:
        database.command("ping")
    except PyMongoError as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        raise DatabaseError({"operation": "ping"}) from e

    directory = UserDirectory(database[settings.users_collection])
    directory.ensure_indexes()
    logger.info(f"Successfully connected to MongoDB database: {settings.database_name}")
    return directory
