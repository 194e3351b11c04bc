"""Game domain services: board geometry, legality engines, sessions and timers.

This package contains pure(ish) domain logic that should be imported by
socket handlers, keeping transport concerns separated from core game
mechanics.
"""
