"""
Core utilities shared across the CMS backend.

This package hosts configuration (env vars, paths), logging setup, the SMTP
mailer and password hashing. Routers and services depend on these primitives
instead of reading os.environ or talking to smtplib directly.
"""
