"""Top-level package for Django configuration.

This package holds the settings modules for each environment, the root
URL configuration and the WSGI and ASGI entry points of FitBuddy.
"""
