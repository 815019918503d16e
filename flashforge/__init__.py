"""flashforge: flashcard API with AI-assisted card generation."""
