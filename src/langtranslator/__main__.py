"""Allow running as python -m langtranslator."""

from langtranslator.cli import app

app()
