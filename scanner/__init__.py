"""BotCheck scan-and-score engine."""
