"""
Chat model factory.

The classifier talks to the model through the LangChain chat interface, so any
BaseChatModel can be injected; this builds the default gen_ai_hub proxy model.
"""

import logging

from langchain_core.language_models.chat_models import BaseChatModel

from faqbot.config import get_settings

logger = logging.getLogger(__name__)


def create_chat_model() -> BaseChatModel:
    """Create the gen_ai_hub proxied ChatOpenAI model from settings."""
    config = get_settings()
    from gen_ai_hub.proxy.langchain.openai import ChatOpenAI
    from gen_ai_hub.proxy.core.proxy_clients import get_proxy_client

    proxy_client = get_proxy_client("gen-ai-hub")
    llm = ChatOpenAI(
        proxy_model_name=config.openai_model,
        proxy_client=proxy_client,
        temperature=config.temperature,  # 0.0 keeps marker replies deterministic
    )
    logger.info(f"Chat model initialized: {config.openai_model}")
    return llm
