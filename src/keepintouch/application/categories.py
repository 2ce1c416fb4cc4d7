"""Category bootstrap for a fresh dataset."""

import logging

from keepintouch.application.ports import CategoryRepository
from keepintouch.domain import CategoryCollection, create_default_categories

logger = logging.getLogger(__name__)


def ensure_default_categories(repository: CategoryRepository) -> CategoryCollection:
    """Save the starter categories when the repository holds none; return all categories."""
    existing = repository.find_all()
    if not existing.is_empty():
        return existing
    for category in create_default_categories():
        repository.save(category)
    logger.info("Seeded default categories")
    return repository.find_all()
