"""Data access for Answer Records in MongoDB."""
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from .errors import PersistenceError
from .schemas import AnswerRecord


RECORD_FIELDS = (
    "title",
    "fileName",
    "filePath",
    "question",
    "uploadDate",
    "gsPaper",
    "source",
    "mimeType",
)


def parse_object_id(value: str) -> Optional[ObjectId]:
    """Convert a path identifier to an ObjectId, or None if malformed."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class AnswerRepository:
    """List, create, read and delete answers in a single collection."""

    def __init__(self, collection_name: str = "answers"):
        self.collection_name = collection_name

    def _collection(self, db: AsyncIOMotorDatabase):
        return db[self.collection_name]

    async def list_answers(self, db: AsyncIOMotorDatabase) -> List[AnswerRecord]:
        """All answers, uploadDate descending.

        uploadDate is a free-form string, so this is lexicographic order and
        only matches chronological order for ISO-8601 dates.
        """
        try:
            cursor = self._collection(db).find().sort("uploadDate", DESCENDING)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise PersistenceError("Error fetching answers", str(e)) from e
        return [AnswerRecord.from_document(doc) for doc in documents]

    async def create_answer(self, db: AsyncIOMotorDatabase, fields: dict) -> AnswerRecord:
        """Insert a new answer and return it with its assigned identifier."""
        document = {name: fields.get(name) for name in RECORD_FIELDS}
        try:
            result = await self._collection(db).insert_one(document)
        except PyMongoError as e:
            raise PersistenceError("Error uploading answer", str(e)) from e
        document["_id"] = result.inserted_id
        return AnswerRecord.from_document(document)

    async def get_answer(self, db: AsyncIOMotorDatabase, answer_id: str) -> Optional[AnswerRecord]:
        """Find one answer by identifier; malformed identifiers find nothing."""
        object_id = parse_object_id(answer_id)
        if object_id is None:
            return None
        try:
            document = await self._collection(db).find_one({"_id": object_id})
        except PyMongoError as e:
            raise PersistenceError("Error deleting answer", str(e)) from e
        if document is None:
            return None
        return AnswerRecord.from_document(document)

    async def delete_answer(self, db: AsyncIOMotorDatabase, answer_id: str) -> bool:
        """Delete one answer. Returns False if nothing was removed."""
        object_id = parse_object_id(answer_id)
        if object_id is None:
            return False
        try:
            result = await self._collection(db).delete_one({"_id": object_id})
        except PyMongoError as e:
            raise PersistenceError("Error deleting answer", str(e)) from e
        return result.deleted_count > 0
