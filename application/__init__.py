"""
Application layer for the mesocycle engine.

Part of AMA-512: Mesocycle generation engine

This package contains:
- ports/: Repository interfaces the services depend on
- exceptions.py: Errors raised to callers of the services
"""
