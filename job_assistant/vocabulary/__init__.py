"""Static domain vocabularies (skills, priority terms, denylists, role tables)."""

from .vocabulary import DEFAULT_VOCABULARY, Vocabulary, is_priority_keyword

__all__ = ["DEFAULT_VOCABULARY", "Vocabulary", "is_priority_keyword"]
