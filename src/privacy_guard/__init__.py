"""privacy-guard: privacy compliance decision engine.

Decides whether an application may process a user's data by checking the
application's declared attributes, purposes and retention period against the
user's privacy preference. Policy taxonomies are nested-set trees so that
allowing a category covers all of its sub-categories; decisions are cached
under a SHA-256 fingerprint of the (app, preference) pair.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
