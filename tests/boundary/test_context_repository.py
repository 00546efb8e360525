"""Tests for the in-memory context repository."""

from context_rag.boundary.context_repository import ContextRepository, InMemoryContextRepository
from context_rag.models import ContextRecord


class TestInMemoryContextRepository:
    """Test get/set/list/delete."""

    def test_seeded_records_are_available(self) -> None:
        """Should register records passed at construction."""
        repo = InMemoryContextRepository([ContextRecord(id=1, name="Default")])

        assert repo.get(1).name == "Default"
        assert repo.get(2) is None

    def test_set_overwrites_and_list_is_sorted(self) -> None:
        """Should replace records by ID and list them in ID order."""
        repo = InMemoryContextRepository()
        repo.set(ContextRecord(id=3, name="Three"))
        repo.set(ContextRecord(id=1, name="One"))
        repo.set(ContextRecord(id=3, name="Three (renamed)"))

        assert [(r.id, r.name) for r in repo.list()] == [(1, "One"), (3, "Three (renamed)")]

    def test_delete(self) -> None:
        """Should report whether a record was removed."""
        repo = InMemoryContextRepository([ContextRecord(id=1, name="Default")])

        assert repo.delete(1) is True
        assert repo.delete(1) is False
        assert repo.get(1) is None

    def test_satisfies_protocol(self) -> None:
        """Should be usable wherever a ContextRepository is expected."""
        assert isinstance(InMemoryContextRepository(), ContextRepository)


class TestContextRecord:
    """Test source URL resolution."""

    def test_source_url_prefers_share_point(self) -> None:
        """Should cite the document library URL when set."""
        record = ContextRecord(id=4, name="Ops", share_point_url="https://example.com/lib")

        assert record.source_url() == "https://example.com/lib"

    def test_source_url_fallback(self) -> None:
        """Should cite the upload location when no library is set."""
        assert ContextRecord(id=4, name="Ops").source_url() == "uploaded-files-4"
