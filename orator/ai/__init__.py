"""AI integrations for the conversation engine."""
