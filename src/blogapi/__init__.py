"""Blog API — users, posts, and the auth layer that guards them.

Stateless bearer tokens identify callers; posts are owned by their
author and only the author may change or delete them.
"""

__version__ = "0.1.0"
