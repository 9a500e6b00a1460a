"""
Persistence adapters.

The whole CMS lives in one JSON document. Services depend on
JsonDocumentStore rather than touching the file.
"""
