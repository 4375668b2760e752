"""
Unit Tests for the Notion page parser
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from faqbot.integrations.notion import parse_page


def make_page(**properties):
    return {"object": "page", "id": "page-id", "properties": properties}


def test_parse_full_page():
    page = make_page(
        Question={"title": [{"plain_text": "How do I reset my password? "}]},
        Answer={"rich_text": [{"plain_text": "Open "}, {"plain_text": "Settings."}]},
        Image_URL={"url": "https://example.com/reset.png"},
        PDF_URL={"url": "https://example.com/guide.pdf"},
        Link_URL={"url": "https://example.com/help"},
        Link_Text={"rich_text": [{"plain_text": "Help "}, {"plain_text": "center"}]},
    )

    record = parse_page(page)

    assert record == {
        "question": "How do I reset my password? ",
        "answer": "Open Settings.",
        "image_url": "https://example.com/reset.png",
        "pdf_url": "https://example.com/guide.pdf",
        "link_url": "https://example.com/help",
        "link_text": "Help center",
    }


def test_parse_uses_first_title_fragment_only():
    page = make_page(
        Question={"title": [{"plain_text": "Part one"}, {"plain_text": " part two"}]}
    )

    assert parse_page(page)["question"] == "Part one"


def test_parse_missing_properties():
    record = parse_page(make_page(Question={"title": [{"plain_text": "Q"}]}))

    assert record["question"] == "Q"
    assert record["answer"] == ""
    assert record["image_url"] is None
    assert record["pdf_url"] is None
    assert record["link_url"] is None
    assert record["link_text"] is None


def test_parse_empty_values():
    page = make_page(
        Question={"title": []},
        Answer={"rich_text": []},
        Image_URL={"url": None},
        Link_Text={"rich_text": []},
    )

    record = parse_page(page)

    assert record["question"] == ""
    assert record["answer"] == ""
    assert record["image_url"] is None
    assert record["link_text"] is None


def test_parse_page_without_properties():
    record = parse_page({"object": "page"})

    assert record["question"] == ""
