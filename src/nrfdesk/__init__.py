"""nrf-desk: admin back-end for NRF Europe 2025 exhibitor records."""

__version__ = "0.1.0"
