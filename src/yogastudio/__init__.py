"""Yoga Studio: booking backend for yoga classes.

Users register and log in with JWT bearer tokens, browse teachers and
sessions, and join or leave sessions.
"""

__version__ = "0.1.0"
