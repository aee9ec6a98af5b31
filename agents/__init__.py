"""Interview agents: question generation, answer scoring and summaries."""
