"""
Base Repository Pattern

Base class for company-scoped MongoDB repositories.
Every record belongs to exactly one company, so reads are filtered
by company_id unless a caller explicitly asks otherwise.
"""
import logging
from typing import Optional, List, Dict, Any, TypeVar, Generic
from bson.objectid import ObjectId
from pymongo.collection import Collection

from app.infra.mongodb.connection import get_collection

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Dict[str, Any])


class BaseRepository(Generic[T]):
    """
    Base repository with read helpers.

    Subclasses should set collection_name class attribute.
    """

    collection_name: str = None  # Override in subclass

    def __init__(self):
        if not self.collection_name:
            raise ValueError(f"collection_name must be set in {self.__class__.__name__}")

    @property
    def collection(self) -> Collection:
        """Get the MongoDB collection."""
        return get_collection(self.collection_name)

    @staticmethod
    def scoped(company_id: str, query: Dict[str, Any] = None) -> Dict[str, Any]:
        """Restrict a query to a single company."""
        return {**(query or {}), "company_id": company_id}

    @staticmethod
    def _stringify_id(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if doc and isinstance(doc.get("_id"), ObjectId):
            doc["_id"] = str(doc["_id"])
        return doc

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Find a single document matching query.

        Args:
            query: MongoDB query dict

        Returns:
            Document or None
        """
        return self._stringify_id(self.collection.find_one(query))

    def count(self, query: Dict[str, Any] = None) -> int:
        """
        Count documents matching query.

        Args:
            query: MongoDB query dict

        Returns:
            Document count
        """
        return self.collection.count_documents(query or {})

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Run aggregation pipeline.

        Args:
            pipeline: MongoDB aggregation pipeline

        Returns:
            List of results
        """
        return [self._stringify_id(doc) for doc in self.collection.aggregate(pipeline)]
