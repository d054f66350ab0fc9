"""
A simulated world of air traffic, kept in sync with browser maps over websockets. Run with `python -m flightsim`.
"""
