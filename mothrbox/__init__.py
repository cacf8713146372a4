"""Mothrbox authentication backend.

Register, log in, and resolve bearer tokens to user profiles over a small
Flask API backed by MongoDB.
"""

__version__ = "2.0.0"
