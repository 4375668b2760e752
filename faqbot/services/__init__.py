from faqbot.services.knowledge_store import KnowledgeStore, PageSequence
from faqbot.services.audit_log import AuditLogger, AuditLogError
from faqbot.services.query_pipeline import QueryPipeline, get_query_pipeline

__all__ = [
    "KnowledgeStore",
    "PageSequence",
    "AuditLogger",
    "AuditLogError",
    "QueryPipeline",
    "get_query_pipeline",
]
