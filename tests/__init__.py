"""
Test suite for the article distiller.

Provides tests for all modules:
- Unit tests for scoring, cleaning and metadata extraction
- Parser tests covering pagination against a fake fetcher
- Fixtures for common article HTML
"""
