"""Infrastructure Layer — durable storage surfaces and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - All storage failures surface as StorageError

Design Decisions:
    - Storage chosen by URL (memory:// or a SQLAlchemy URL) so the stores never know
      which surface backs them
"""
