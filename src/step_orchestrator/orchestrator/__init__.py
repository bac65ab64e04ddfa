"""Command-line surface around the step decision engine.

Provides:
- Settings loaded from .env
- Structured logging
- JSON plan loading
- A small CLI surface
"""
