"""tsguard: test-double and import-extension rules for JavaScript/TypeScript sources."""

__version__ = "0.1.0"
