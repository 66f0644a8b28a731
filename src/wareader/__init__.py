"""wareader: turn WhatsApp chat exports into typed message records."""

__version__ = "0.1.0"
