"""
Use cases for the CMS backend.

Each service orchestrates the JSON document store (and, for contact intake,
the notifier) to implement the business rules. Routers call these services
instead of manipulating the document directly.
"""
