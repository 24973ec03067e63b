"""Game domain services: win detection and round timers.

This package contains pure(ish) domain logic that should be imported by
the socket gateway, keeping transport concerns separated from core game
mechanics.
"""
