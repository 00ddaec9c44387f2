"""Core contracts (Protocols) implemented by adapters."""
