"""experience-store: stateless, directory-backed experience records."""

__version__ = '0.1.0'
