"""
API Tests for the query and knowledge cache endpoints

Uses FastAPI's TestClient with the pipeline dependency overridden.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from faqbot.ai_core.composition import NO_ANSWER_MESSAGE
from faqbot.ai_core.matching import MatchClassifier
from faqbot.main import app
from faqbot.models.knowledge import KnowledgePage
from faqbot.services.audit_log import AuditLogger
from faqbot.services.knowledge_store import KnowledgeStore
from faqbot.services.query_pipeline import QueryPipeline, get_query_pipeline


RECORDS = [
    {"question": "Q1", "answer": "A1", "image_url": "img1"},
    {"question": "Q2", "answer": "A2", "image_url": "img2", "pdf_url": "pdf2"},
]


def build_pipeline(reply, records=RECORDS, log_side_effect=None):
    async def fetch_page(start_cursor):
        return KnowledgePage(records=records, has_more=False)

    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content=reply))

    notion_client = MagicMock()
    notion_client.logging_enabled = True
    notion_client.create_log_entry = AsyncMock(side_effect=log_side_effect)

    return QueryPipeline(
        store=KnowledgeStore(fetch_page, ttl_seconds=600, clock=lambda: 0.0),
        classifier=MatchClassifier(llm=llm),
        audit_logger=AuditLogger(notion_client),
    )


@pytest.fixture
def use_pipeline():
    """Override the pipeline dependency for one test."""

    def _use(pipeline):
        app.dependency_overrides[get_query_pipeline] = lambda: pipeline
        return pipeline

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def test_exact_match(client, use_pipeline):
    use_pipeline(build_pipeline("EXACT_MATCH::Q1"))

    response = client.post("/api/query", json={"question": "What about Q1?"})

    assert response.status_code == 200
    assert response.json() == {
        "answer": "A1",
        "imageUrl": "img1",
        "pdfUrl": None,
        "linkUrl": None,
        "linkText": None,
        "aiAssisted": True,
    }


def test_related_match_first_entry_attachments(client, use_pipeline):
    use_pipeline(build_pipeline("RELATED_MATCH::Q1|||Q2"))

    response = client.post("/api/query", json={"question": "Q1 and Q2?"})

    body = response.json()
    assert response.status_code == 200
    assert body["imageUrl"] == "img1"
    assert body["pdfUrl"] is None
    assert "**Q1**" in body["answer"] and "**Q2**" in body["answer"]


def test_no_match(client, use_pipeline):
    use_pipeline(build_pipeline("NO_MATCH"))

    response = client.post("/api/query", json={"question": "Unrelated?"})

    assert response.status_code == 200
    assert response.json()["answer"] == NO_ANSWER_MESSAGE
    assert response.json()["aiAssisted"] is True


def test_empty_knowledge_base(client, use_pipeline):
    use_pipeline(build_pipeline("EXACT_MATCH::Q1", records=[]))

    response = client.post("/api/query", json={"question": "Q1?"})

    assert response.status_code == 200
    assert response.json()["answer"] == NO_ANSWER_MESSAGE
    assert response.json()["imageUrl"] is None


def test_query_log_written_after_response(client, use_pipeline):
    pipeline = use_pipeline(build_pipeline("EXACT_MATCH::Q2"))

    response = client.post("/api/query", json={"question": "Q2?"})

    assert response.status_code == 200
    pipeline.audit_logger.notion_client.create_log_entry.assert_awaited_once_with(
        "Q2?", True, "Exact match: Q2"
    )


def test_query_log_failure_keeps_200(client, use_pipeline):
    use_pipeline(build_pipeline("EXACT_MATCH::Q2", log_side_effect=RuntimeError("down")))

    response = client.post("/api/query", json={"question": "Q2?"})

    assert response.status_code == 200
    assert response.json()["answer"] == "A2"


@pytest.mark.parametrize("payload", [{}, {"question": ""}, {"question": "   "}, {"question": None}])
def test_missing_question_is_400(client, use_pipeline, payload):
    use_pipeline(build_pipeline("NO_MATCH"))

    response = client.post("/api/query", json=payload)

    assert response.status_code == 400
    assert "error" in response.json()


def test_malformed_body_is_400(client, use_pipeline):
    use_pipeline(build_pipeline("NO_MATCH"))

    response = client.post(
        "/api/query", content="not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
def test_other_methods_are_405(client, method):
    response = client.request(method, "/api/query")

    assert response.status_code == 405
    assert response.json() == {"error": "Only POST requests are allowed"}
    assert response.headers["allow"] == "POST, OPTIONS"


def test_head_is_405(client):
    response = client.head("/api/query")

    assert response.status_code == 405
    assert response.headers["allow"] == "POST, OPTIONS"


def test_options_returns_empty_200(client):
    response = client.options("/api/query")

    assert response.status_code == 200
    assert response.content == b""


def test_cors_preflight_allows_any_origin(client):
    response = client.options(
        "/api/query",
        headers={
            "Origin": "https://faq.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.content == b""


@pytest.mark.parametrize(
    "request_method, request_headers",
    [("POST", "Authorization"), ("GET", None), ("POST", "Content-Type, X-Requested-With")],
)
def test_any_preflight_is_empty_200(client, request_method, request_headers):
    headers = {
        "Origin": "https://faq.example.com",
        "Access-Control-Request-Method": request_method,
    }
    if request_headers is not None:
        headers["Access-Control-Request-Headers"] = request_headers

    response = client.options("/api/query", headers=headers)

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_header_on_post(client, use_pipeline):
    use_pipeline(build_pipeline("EXACT_MATCH::Q1"))

    response = client.post(
        "/api/query",
        json={"question": "Q1?"},
        headers={"Origin": "https://faq.example.com"},
    )

    assert response.headers["access-control-allow-origin"] == "*"


def test_unexpected_error_is_500_without_detail(client, use_pipeline):
    pipeline = MagicMock()
    pipeline.answer = AsyncMock(side_effect=RuntimeError("secret internal detail"))
    use_pipeline(pipeline)

    response = client.post("/api/query", json={"question": "Q1?"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "secret internal detail" not in response.text


def test_kb_status_and_refresh(client, use_pipeline):
    use_pipeline(build_pipeline("NO_MATCH"))

    status = client.get("/api/kb/status").json()
    assert status["cached"] is False
    assert status["entries"] == 0

    refreshed = client.post("/api/kb/refresh").json()
    assert refreshed["cached"] is True
    assert refreshed["entries"] == 2
    assert refreshed["fresh"] is True


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
