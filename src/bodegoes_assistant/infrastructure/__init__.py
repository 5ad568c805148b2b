"""Infrastructure adapters — SQLite store, LLM agent, places client."""
