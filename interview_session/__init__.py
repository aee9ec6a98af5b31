"""Interview lifecycle engine and its aggregate models."""
