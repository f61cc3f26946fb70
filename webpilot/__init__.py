"""webpilot - Selenium helpers for driver setup, locators, waits, alerts and screenshots."""

__version__ = "0.1.0"
