"""
AI fitness suite: weekly workout plan, set logging, progress charts,
rest timer and an AI coach, from the terminal.
"""

__version__ = "0.1.0"
