"""Avatar Arena: anonymous swipe voting for AI-generated avatar videos."""
