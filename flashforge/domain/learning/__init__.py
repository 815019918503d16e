"""
Learning bounded context - Domain layer.

This context handles flashcard-based learning features:
- Flashcard creation and curation
- AI generation attempts and their bookkeeping

Aggregates:
- Flashcard: A user's study card
- Generation: One request to produce flashcard proposals from source text
"""
