"""Memory storage, web search, reply tracking and agent profile tools for messaging AI agents."""

__version__ = "0.1.0"