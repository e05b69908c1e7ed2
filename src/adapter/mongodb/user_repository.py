"""MongoDB implementation of UserRepository."""

import re
import uuid
from dataclasses import replace
from logging import getLogger
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import PersistenceError
from domain.model.user import UserRecord

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        try:
            self.collection.create_index([('username', 1)], name='idx_users_username')
            return True
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> UserRecord:
        """Convert MongoDB document to UserRecord domain model."""
        return UserRecord.from_dict({**doc, 'id': str(doc['_id'])})

    def _to_document(self, user: UserRecord) -> dict:
        doc = user.to_document()
        doc['_id'] = doc.pop('id')
        return doc

    def find_all(self) -> list[UserRecord]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find({})]
        except PyMongoError as e:
            logger.error("Failed to list users", extra={"error": str(e)})
            raise PersistenceError("Failed to list users") from e

    def find_by_id(self, user_id: str) -> UserRecord | None:
        """Find a user by ID. Return UserRecord or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise PersistenceError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def find_by_username(self, username: str) -> UserRecord | None:
        try:
            doc = self.collection.find_one({'username': username})
        except PyMongoError as e:
            logger.error("Failed to get user by username", extra={"username": username, "error": str(e)})
            raise PersistenceError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def find_by_username_like(self, username: str) -> list[UserRecord]:
        """Case-insensitive substring match; the input is matched literally."""
        query = {'username': {'$regex': re.escape(username), '$options': 'i'}}
        try:
            return [self._to_domain(doc) for doc in self.collection.find(query)]
        except PyMongoError as e:
            logger.error("Failed to search users", extra={"username": username, "error": str(e)})
            raise PersistenceError("Failed to search users") from e

    def save(self, user: UserRecord) -> UserRecord:
        """Insert or replace by ID. A missing ID gets a fresh one."""
        if not user.id:
            user = replace(user, id=uuid.uuid4().hex)
        doc = self._to_document(user)
        try:
            self.collection.replace_one({'_id': doc['_id']}, doc, upsert=True)
        except PyMongoError as e:
            logger.error("Failed to save user", extra={"userId": user.id, "error": str(e)})
            raise PersistenceError("Failed to save user") from e

        logger.info("User saved", extra={"userId": user.id, "username": user.username})
        return self._to_domain(doc)
