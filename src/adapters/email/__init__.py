"""Email adapters - EmailSender implementations."""

from .http import HttpEmailSender
from .http_reliable import ReliableHttpEmailSender
from .memory import InMemoryEmailSender

__all__ = ["HttpEmailSender", "InMemoryEmailSender", "ReliableHttpEmailSender"]
