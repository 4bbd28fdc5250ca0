"""Tests for the MongoDB storage service with mocked collections."""
import pytest
from unittest.mock import AsyncMock, MagicMock

from pymongo.errors import PyMongoError

from intake.models.document import Document, Section
from intake.services.mongodb_storage import MongoDBStorage, MongoStorageError, build_query
from intake.services.storage_service import DocumentFilters, DocumentNotFoundError


@pytest.fixture
def mongo_storage():
    """MongoDBStorage with mocked collections instead of a live client."""
    storage = MongoDBStorage.__new__(MongoDBStorage)
    storage.client = MagicMock()
    storage.db = MagicMock()
    storage.documents = MagicMock()
    storage.sections = MagicMock()
    return storage


class TestBuildQuery:

    def test_empty_filters(self):
        assert build_query(DocumentFilters()) == {}

    def test_all_filters(self):
        query = build_query(DocumentFilters(
            business_domain="finance",
            complexity_level="expert",
            processing_status="completed",
            tags=["JMS3", "ai4coaches"],
        ))

        assert query == {
            "business_domain": "finance",
            "complexity_level": "expert",
            "processing_status": "completed",
            "$or": [
                {"business_tags": {"$in": ["JMS3", "ai4coaches"]}},
                {"context_tags": {"$in": ["JMS3", "ai4coaches"]}},
                {"content_tags": {"$in": ["JMS3", "ai4coaches"]}},
            ],
        }


class TestMongoInsert:

    @pytest.mark.asyncio
    async def test_insert_document(self, mongo_storage):
        mongo_storage.documents.insert_one = AsyncMock()
        document = Document(filename="plan.md", business_tags=["JMS3"])

        stored = await mongo_storage.insert(document)

        saved = mongo_storage.documents.insert_one.call_args[0][0]
        assert stored.id == saved["_id"]
        assert "id" not in saved
        assert saved["filename"] == "plan.md"
        assert "inserted_at" in saved

    @pytest.mark.asyncio
    async def test_insert_error_is_wrapped(self, mongo_storage):
        mongo_storage.documents.insert_one = AsyncMock(side_effect=PyMongoError("connection refused"))

        with pytest.raises(MongoStorageError):
            await mongo_storage.insert(Document(filename="plan.md"))

    @pytest.mark.asyncio
    async def test_insert_many_sections(self, mongo_storage):
        mongo_storage.sections.insert_many = AsyncMock()
        sections = [Section(document_id="d1", title=f"S{i}", order_index=i) for i in range(2)]

        stored = await mongo_storage.insert_many(sections)

        saved = mongo_storage.sections.insert_many.call_args[0][0]
        assert [s.id for s in stored] == [d["_id"] for d in saved]

    @pytest.mark.asyncio
    async def test_insert_many_empty(self, mongo_storage):
        mongo_storage.sections.insert_many = AsyncMock()

        assert await mongo_storage.insert_many([]) == []
        mongo_storage.sections.insert_many.assert_not_called()


class TestMongoQueries:

    @pytest.mark.asyncio
    async def test_get_document_converts_id(self, mongo_storage):
        mongo_storage.documents.find_one = AsyncMock(return_value={
            "_id": "abc123",
            "filename": "plan.md",
            "business_domain": "finance",
            "inserted_at": "2024-01-01",
        })

        document = await mongo_storage.get_document("abc123")

        assert document.id == "abc123"
        assert document.business_domain == "finance"

    @pytest.mark.asyncio
    async def test_get_document_missing(self, mongo_storage):
        mongo_storage.documents.find_one = AsyncMock(return_value=None)

        with pytest.raises(DocumentNotFoundError):
            await mongo_storage.get_document("missing")

    @pytest.mark.asyncio
    async def test_get_sections(self, mongo_storage):
        cursor = MagicMock()
        cursor.sort.return_value = cursor
        cursor.to_list = AsyncMock(return_value=[
            {"_id": "s1", "document_id": "d1", "title": "Intro", "content": "text", "order_index": 0},
        ])
        mongo_storage.sections.find.return_value = cursor

        sections = await mongo_storage.get_sections("d1")

        mongo_storage.sections.find.assert_called_once_with({"document_id": "d1"})
        assert sections[0].id == "s1"
        assert sections[0].title == "Intro"

    @pytest.mark.asyncio
    async def test_health_check_reports_failure(self, mongo_storage):
        mongo_storage.db.command = AsyncMock(side_effect=PyMongoError("timeout"))

        health = await mongo_storage.health_check()

        assert health["status"] == "unhealthy"


class TestMongoClear:

    @pytest.mark.asyncio
    async def test_clear_deletes_sections_before_documents(self, mongo_storage):
        calls = []

        async def delete_sections(query):
            calls.append(("sections", query))
            return MagicMock(deleted_count=5)

        async def delete_documents(query):
            calls.append(("documents", query))
            return MagicMock(deleted_count=2)

        mongo_storage.sections.delete_many = AsyncMock(side_effect=delete_sections)
        mongo_storage.documents.delete_many = AsyncMock(side_effect=delete_documents)

        deleted = await mongo_storage.clear()

        assert calls == [("sections", {}), ("documents", {})]
        assert deleted == {"sections": 5, "documents": 2}

    @pytest.mark.asyncio
    async def test_clear_error_is_wrapped(self, mongo_storage):
        mongo_storage.sections.delete_many = AsyncMock(side_effect=PyMongoError("not primary"))
        mongo_storage.documents.delete_many = AsyncMock()

        with pytest.raises(MongoStorageError):
            await mongo_storage.clear()

        mongo_storage.documents.delete_many.assert_not_called()
