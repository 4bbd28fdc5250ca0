"""Tests for the in-memory storage service."""
import pytest
import pytest_asyncio
from datetime import datetime, timedelta

from intake.models.document import Document, Section
from intake.services.storage_service import DocumentFilters, DocumentNotFoundError, InMemoryStorage


def make_document(filename, minutes_ago=0, **fields):
    return Document(filename=filename, created_at=datetime.now() - timedelta(minutes=minutes_ago), **fields)


@pytest_asyncio.fixture
async def populated(storage):
    await storage.insert(make_document("old.md", minutes_ago=10, business_domain="finance",
                                       complexity_level="advanced", business_tags=["JMS3"]))
    await storage.insert(make_document("new.md", minutes_ago=1, business_domain="sales",
                                       complexity_level="basic", business_tags=["ai4coaches", "JMS3"]))
    await storage.insert(make_document("mid.md", minutes_ago=5, business_domain="finance",
                                       complexity_level="basic", business_tags=["bizCore360"]))
    return storage


class TestInsert:

    @pytest.mark.asyncio
    async def test_insert_assigns_identifier(self, storage):
        stored = await storage.insert(make_document("a.md"))

        assert stored.id
        assert storage.documents[stored.id].filename == "a.md"

    @pytest.mark.asyncio
    async def test_insert_does_not_modify_input(self, storage):
        document = make_document("a.md")
        await storage.insert(document)

        assert document.id is None

    @pytest.mark.asyncio
    async def test_insert_many_assigns_distinct_identifiers(self, storage):
        sections = [Section(document_id="d1", title=f"S{i}", order_index=i) for i in range(3)]

        stored = await storage.insert_many(sections)

        assert len({s.id for s in stored}) == 3
        assert len(storage.sections) == 3


class TestQueries:

    @pytest.mark.asyncio
    async def test_list_newest_first(self, populated):
        documents = await populated.get_documents()

        assert [d.filename for d in documents] == ["new.md", "mid.md", "old.md"]

    @pytest.mark.asyncio
    async def test_filter_by_domain_and_complexity(self, populated):
        documents = await populated.get_documents(
            DocumentFilters(business_domain="finance", complexity_level="basic")
        )

        assert [d.filename for d in documents] == ["mid.md"]

    @pytest.mark.asyncio
    async def test_filter_limit(self, populated):
        documents = await populated.get_documents(DocumentFilters(limit=2))

        assert len(documents) == 2

    @pytest.mark.asyncio
    async def test_search_by_tags_matches_any(self, populated):
        documents = await populated.search_by_tags(["JMS3"])

        assert {d.filename for d in documents} == {"old.md", "new.md"}

    @pytest.mark.asyncio
    async def test_get_document_missing(self, storage):
        with pytest.raises(DocumentNotFoundError):
            await storage.get_document("missing")

    @pytest.mark.asyncio
    async def test_sections_ordered_by_index(self, storage):
        await storage.insert_many([
            Section(document_id="d1", title="Third", order_index=2),
            Section(document_id="d1", title="First", order_index=0),
            Section(document_id="d2", title="Other", order_index=0),
            Section(document_id="d1", title="Second", order_index=1),
        ])

        sections = await storage.get_sections("d1")

        assert [s.title for s in sections] == ["First", "Second", "Third"]

    @pytest.mark.asyncio
    async def test_search_content_is_case_insensitive(self, storage):
        await storage.insert_many([
            Section(document_id="d1", title="A", content="Revenue grew this quarter", order_index=0),
            Section(document_id="d1", title="B", content="Hiring plan", order_index=1),
        ])

        results = await storage.search_content("revenue")

        assert [s.title for s in results] == ["A"]

    @pytest.mark.asyncio
    async def test_health_check_counts(self, populated):
        health = await populated.health_check()

        assert health["status"] == "healthy"
        assert health["documents"] == 3


class TestTagSearch:

    @pytest.mark.asyncio
    async def test_context_and_content_tags_are_searchable(self, storage):
        await storage.insert(make_document(
            "pipeline.md",
            business_tags=["JMS3"],
            context_tags=["sales", "coaching"],
            content_tags=["sales", "team-dynamics", "coaching"],
        ))

        by_context = await storage.search_by_tags(["coaching"])
        by_content = await storage.search_by_tags(["team-dynamics"])

        assert [d.filename for d in by_context] == ["pipeline.md"]
        assert [d.filename for d in by_content] == ["pipeline.md"]

    @pytest.mark.asyncio
    async def test_unmatched_tag_finds_nothing(self, populated):
        assert await populated.search_by_tags(["negotiation"]) == []

    @pytest.mark.asyncio
    async def test_tag_filter_combines_with_domain(self, populated):
        documents = await populated.get_documents(DocumentFilters(tags=["JMS3"], business_domain="finance"))

        assert [d.filename for d in documents] == ["old.md"]


class TestClear:

    @pytest.mark.asyncio
    async def test_clear_removes_everything(self, populated):
        await populated.insert_many([Section(document_id="d1", title="A", order_index=0)])

        deleted = await populated.clear()

        assert deleted == {"sections": 1, "documents": 3}
        assert await populated.get_documents() == []
        assert await populated.get_sections("d1") == []

    @pytest.mark.asyncio
    async def test_clear_empty_store(self, storage):
        assert await storage.clear() == {"sections": 0, "documents": 0}
