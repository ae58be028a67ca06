"""API layer: canonical read surface for the CLI and any other front end.

Key rules:

1. No SQLAlchemy imports - only talk to the RecordStore
2. Filtering goes through roster.filtering, never reimplemented here
3. Return Pydantic models only
"""
