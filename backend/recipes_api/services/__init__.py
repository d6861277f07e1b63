"""Application services: orchestration between the API layer and adapters."""
