"""Feature packages (models, repository, service and router per feature)."""
