"""Battle engine: models, rules and the turn resolver."""
