"""
Gemini Relay: a thin HTTP proxy between a browser chat UI and the Gemini API.
"""

__version__ = "0.1.0"
