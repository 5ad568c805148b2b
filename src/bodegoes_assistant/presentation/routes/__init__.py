"""Route modules mounted by ``bodegoes_assistant.main``."""
