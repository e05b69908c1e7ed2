"""MongoDB index management, run once at app startup."""


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Returns False if any failed."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
