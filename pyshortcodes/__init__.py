"""
PyShortcodes - bracket tag ("shortcode") expansion for document text.
"""

__version__ = "0.1.0"
