"""User accounts, session tokens, password reset and BVN verification."""

__version__ = "0.1.0"
