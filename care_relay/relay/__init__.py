"""Real-time message relay between seekers and providers."""
