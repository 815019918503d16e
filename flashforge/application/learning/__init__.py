"""Learning application layer: flashcards and AI generations."""
