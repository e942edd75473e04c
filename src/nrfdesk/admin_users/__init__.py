"""Admin-user account management for nrf-desk."""
