"""langtranslator: translate text through the Google Translate web endpoint."""

__version__ = "0.3.0"
