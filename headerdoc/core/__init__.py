"""Core services shared by every headerdoc layer.

Logging, the exception hierarchy, environment helpers and configuration.
"""
