"""Creashift CMS backend: JSON-file resource store, contact intake and admin login."""
