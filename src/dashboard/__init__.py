"""Catalog administration client.

Talks to the dashboard REST backend and keeps product drafts consistent with
the category → subcategory → template cascade.
"""

__version__ = "0.1.0"
