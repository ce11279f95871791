"""Charts — the packaged artifact handled by the getter.

Provides:
- Models: chart metadata and in-memory chart contents
- Archive: canonical ``.tgz`` serializer and loader
"""
