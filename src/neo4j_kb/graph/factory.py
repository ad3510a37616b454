"""
Factory for creating an initialized KnowledgeBase from Neo4jSettings.
"""

import logging

from ..config import Neo4jSettings, settings
from .client import KnowledgeBase
from .transport import Neo4jTransport

logger = logging.getLogger(__name__)


async def create_knowledge_base(config: Neo4jSettings | None = None) -> KnowledgeBase:
    """
    Create a KnowledgeBase with an initialized transport.

    Args:
        config: Connection settings; defaults to the process settings.

    Raises:
        ValueError: If no credentials are configured (NEO4J_AUTH).
    """
    config = config or settings.neo4j

    if config.auth is None:
        raise ValueError("You must at least supply NEO4J_AUTH='<username>:<password>'.")

    transport = Neo4jTransport(
        url=config.url,
        auth=config.auth.get_secret_value(),
        transaction_path=config.transaction_path,
        timeout=config.timeout,
        max_connections=config.max_connections,
    )
    await transport.initialize()

    logger.info(f"Knowledge base ready: {config.url}")
    return KnowledgeBase(transport)
