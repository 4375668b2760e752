"""
Notion Page Parser

Flattens a page from the knowledge base database into a plain record.
"""

from typing import Any, Dict, Optional

from faqbot.utils import join_plain_text, first_plain_text, empty_to_none

# Database property names
QUESTION_PROPERTY = "Question"
ANSWER_PROPERTY = "Answer"
IMAGE_URL_PROPERTY = "Image_URL"
PDF_URL_PROPERTY = "PDF_URL"
LINK_URL_PROPERTY = "Link_URL"
LINK_TEXT_PROPERTY = "Link_Text"


def _url(properties: Dict[str, Any], name: str) -> Optional[str]:
    prop = properties.get(name) or {}
    return empty_to_none(prop.get("url"))


def parse_page(page: Dict[str, Any]) -> Dict[str, Optional[str]]:
    """
    Parse a Notion database page into a knowledge record.

    Example page properties:
        {
            "Question": {"title": [{"plain_text": "How do I reset my password?"}]},
            "Answer": {"rich_text": [{"plain_text": "Open "}, {"plain_text": "Settings."}]},
            "Image_URL": {"url": "https://example.com/reset.png"},
            "PDF_URL": {"url": null},
            "Link_URL": {"url": null},
            "Link_Text": {"rich_text": []}
        }

    Args:
        page: Page object from a database query

    Returns:
        Record with question, answer, image_url, pdf_url, link_url and
        link_text. The question is not trimmed or validated here.
    """
    properties = page.get("properties") or {}

    question = first_plain_text((properties.get(QUESTION_PROPERTY) or {}).get("title"))
    answer = join_plain_text((properties.get(ANSWER_PROPERTY) or {}).get("rich_text"))
    link_text = join_plain_text(
        (properties.get(LINK_TEXT_PROPERTY) or {}).get("rich_text")
    )

    return {
        "question": question,
        "answer": answer,
        "image_url": _url(properties, IMAGE_URL_PROPERTY),
        "pdf_url": _url(properties, PDF_URL_PROPERTY),
        "link_url": _url(properties, LINK_URL_PROPERTY),
        "link_text": empty_to_none(link_text),
    }
