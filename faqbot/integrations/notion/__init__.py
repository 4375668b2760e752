# Notion integration module
from faqbot.integrations.notion.client import NotionClient, SourceFetchError
from faqbot.integrations.notion.parser import parse_page

__all__ = ["NotionClient", "SourceFetchError", "parse_page"]
