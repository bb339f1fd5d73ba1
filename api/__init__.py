"""BotCheck HTTP API."""
