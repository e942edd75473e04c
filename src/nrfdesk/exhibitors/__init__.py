"""Exhibitor browsing and tagging for nrf-desk."""
