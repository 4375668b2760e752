"""
Utility package exports
"""

from faqbot.utils.helpers import join_plain_text, first_plain_text, empty_to_none

__all__ = ["join_plain_text", "first_plain_text", "empty_to_none"]
