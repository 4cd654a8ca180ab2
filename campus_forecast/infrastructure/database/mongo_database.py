"""
MongoDB Database - Infrastructure Layer

Thin async facade over the synchronous pymongo driver. It owns the client,
names the collections the service uses and creates their indexes.

Predictions are single documents with their series embedded, so every
write below touches exactly one document and is atomic on the server.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import pymongo.errors
import structlog
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

logger = structlog.get_logger(__name__)

PREDICTIONS_COLLECTION = "predictions"
COLLEGES_COLLECTION = "colleges"
YEAR_STATS_COLLECTION = "college_year_stats"
MONTH_EXPENSES_COLLECTION = "college_month_expenses"

IndexKeys = Union[str, Sequence[Tuple[str, int]]]

# collection -> (keys, index name, extra create_index options)
INDEX_SPECS: Dict[str, List[Tuple[IndexKeys, str, Dict[str, Any]]]] = {
    PREDICTIONS_COLLECTION: [
        ("id", "prediction_id_idx", {"unique": True}),
        (
            [("owner_id", ASCENDING), ("created_at", DESCENDING)],
            "owner_created_at_idx",
            {"background": True},
        ),
    ],
    YEAR_STATS_COLLECTION: [
        (
            [("college_id", ASCENDING), ("year", ASCENDING)],
            "college_year_idx",
            {"background": True},
        ),
    ],
    MONTH_EXPENSES_COLLECTION: [
        (
            [("college_id", ASCENDING), ("year", ASCENDING), ("month", ASCENDING)],
            "college_year_month_idx",
            {"background": True},
        ),
    ],
}


class DocumentNotFoundError(Exception):
    """No document matched the query of a replace or delete."""

    def __init__(self, collection_name: str, query: Dict[str, Any]):
        self.collection_name = collection_name
        self.query = query
        super().__init__(f"Document not found in {collection_name}")


class DatabaseWriteError(Exception):
    """The server did not acknowledge a write."""


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
        """
        self.client: MongoClient = MongoClient(mongo_uri)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    async def find_one(
        self, collection_name: str, query: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        return self.get_collection(collection_name).find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_direction: int = ASCENDING,
        skip: int = 0,
        limit: Optional[int] = 100,
    ) -> List[Dict[str, Any]]:
        """
        Find the documents matching ``query``.

        Args:
            collection_name: Name of the collection
            query: Query to match documents
            sort_by: Field to sort by
            sort_direction: ``ASCENDING`` or ``DESCENDING``
            skip: Number of documents to skip
            limit: Maximum number of documents to return; ``None`` reads all
                of them (statistics are aggregated, never paginated)
        """
        cursor = self.get_collection(collection_name).find(query)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_direction)
        cursor = cursor.skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)
        return list(cursor)

    async def insert_one(
        self, collection_name: str, document: Dict[str, Any]
    ) -> Dict[str, Any]:
        result = self.get_collection(collection_name).insert_one(document)
        if not result.acknowledged:
            raise DatabaseWriteError(f"Insert into {collection_name} not acknowledged")
        return document

    async def replace_one(
        self, collection_name: str, query: Dict[str, Any], document: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Swap the matched document for ``document`` in one operation.

        Raises:
            DocumentNotFoundError: If nothing matches ``query``
            DatabaseWriteError: If the replace is not acknowledged
        """
        result = self.get_collection(collection_name).replace_one(query, document)
        if result.matched_count == 0:
            raise DocumentNotFoundError(collection_name, query)
        if not result.acknowledged:
            raise DatabaseWriteError(f"Replace in {collection_name} not acknowledged")
        return document

    async def delete_one(self, collection_name: str, query: Dict[str, Any]) -> None:
        """
        Delete the matched document.

        Raises:
            DocumentNotFoundError: If nothing matches ``query``
            DatabaseWriteError: If the delete is not acknowledged
        """
        result = self.get_collection(collection_name).delete_one(query)
        if result.deleted_count == 0:
            raise DocumentNotFoundError(collection_name, query)
        if not result.acknowledged:
            raise DatabaseWriteError(f"Delete in {collection_name} not acknowledged")

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self) -> None:
        """
        Create the indexes listed in ``INDEX_SPECS``. Called on startup.

        A failing collection is logged and skipped so the API still starts
        with a read-only or restricted database user.
        """
        for collection_name, specs in INDEX_SPECS.items():
            collection = self.get_collection(collection_name)
            try:
                for keys, name, options in specs:
                    collection.create_index(keys, name=name, **options)
            except pymongo.errors.OperationFailure as e:
                logger.warning(
                    "mongo.create_indexes.failed",
                    collection=collection_name,
                    error=str(e),
                )
