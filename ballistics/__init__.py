"""Core (UI-agnostic) ballistics logic.

This package contains:
- shot parameter defaults and validation
- trajectory calculation strategies (server model and offline approximation)
- trajectory sampling and chart helpers (Altair -> Vega-Lite spec dict)
- ammunition presets
- an HTTP client that falls back to the offline approximation
"""
