"""Tool-using chat assistant."""
