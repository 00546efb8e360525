"""Tests for the search, document and health endpoints."""

import pytest
from fastapi.testclient import TestClient

from context_rag.api.deps import get_orchestrator
from context_rag.core.rag_query.synthesizer import AnswerSynthesizer
from context_rag.main import create_app

MANUAL = "Manufacturer - Acme Corp. Model - X200. Horsepower rating is 50 hp."


@pytest.fixture
def client(orchestrator) -> TestClient:
    """Provide a client whose endpoints share the test orchestrator."""
    app = create_app()
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    return TestClient(app)


def ingest(client: TestClient, context_id: int, filename: str, content: str):
    return client.post(
        f"/api/v1/contexts/{context_id}/documents",
        json={"filename": filename, "content": content},
    )


class TestHealth:
    """Test GET /health."""

    def test_health_check(self, client: TestClient) -> None:
        """Should report healthy."""
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestDocuments:
    """Test document ingestion, counting and clearing."""

    def test_ingest_document(self, client: TestClient) -> None:
        """Should index the document and report counts."""
        response = ingest(client, 1, "manual.txt", MANUAL)

        assert response.status_code == 201
        assert response.json() == {
            "context_id": 1,
            "filename": "manual.txt",
            "chunk_count": 1,
            "document_count": 1,
        }

    def test_ingest_unknown_context(self, client: TestClient) -> None:
        """Should return 404 for an unregistered context."""
        response = ingest(client, 99, "manual.txt", MANUAL)

        assert response.status_code == 404
        assert response.json()["detail"] == "Invalid context"

    def test_ingest_requires_filename(self, client: TestClient) -> None:
        """Should reject an empty filename."""
        response = ingest(client, 1, "", MANUAL)

        assert response.status_code == 422

    def test_count_and_clear(self, client: TestClient) -> None:
        """Should count distinct documents and clear them."""
        ingest(client, 1, "manual.txt", MANUAL)
        ingest(client, 1, "notes.txt", "General operating notes for the plant.")

        count = client.get("/api/v1/contexts/1/documents/count")
        assert count.json() == {"context_id": 1, "document_count": 2}

        cleared = client.delete("/api/v1/contexts/1/documents")
        assert cleared.status_code == 204

        count = client.get("/api/v1/contexts/1/documents/count")
        assert count.json()["document_count"] == 0

    def test_count_unknown_context(self, client: TestClient) -> None:
        """Should return 404 for an unregistered context."""
        assert client.get("/api/v1/contexts/99/documents/count").status_code == 404


class TestSearch:
    """Test POST /contexts/{id}/search."""

    def test_quick_match_answer(self, client: TestClient) -> None:
        """Should answer by quick match and cite the manual."""
        ingest(client, 1, "manual.txt", MANUAL)

        response = client.post("/api/v1/contexts/1/search", json={"query": "Who is the manufacturer?"})

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "quick_match"
        assert "Acme Corp" in body["response"]
        assert body["sources"][0]["title"] == "manual.txt"
        assert body["retryable"] is False

    def test_empty_context(self, client: TestClient) -> None:
        """Should report the empty context as a normal response."""
        response = client.post("/api/v1/contexts/2/search", json={"query": "anything"})

        assert response.status_code == 200
        assert response.json()["status"] == "empty_context"

    def test_unknown_context(self, client: TestClient) -> None:
        """Should map an unknown context to 404."""
        response = client.post("/api/v1/contexts/99/search", json={"query": "anything"})

        assert response.status_code == 404
        assert response.json()["detail"] == "Invalid context"

    def test_blank_query(self, client: TestClient) -> None:
        """Should map a blank query to 400."""
        response = client.post("/api/v1/contexts/1/search", json={"query": "  "})

        assert response.status_code == 400


class TestSuggestions:
    """Test POST /contexts/{id}/suggestions."""

    def test_returns_suggestions(self, client: TestClient, orchestrator, make_generation_backend) -> None:
        """Should return the generated follow-up questions."""
        orchestrator.synthesizer = AnswerSynthesizer(
            backend=make_generation_backend(response='["What is the model?", "How much horsepower?"]')
        )

        response = client.post(
            "/api/v1/contexts/1/suggestions",
            json={"query": "Who is the manufacturer?", "answer": "The manufacturer is Acme Corp."},
        )

        assert response.status_code == 200
        assert response.json() == {"suggestions": ["What is the model?", "How much horsepower?"]}

    def test_unknown_context(self, client: TestClient) -> None:
        """Should return 404 for an unregistered context."""
        response = client.post("/api/v1/contexts/99/suggestions", json={"query": "q", "answer": "a"})

        assert response.status_code == 404
