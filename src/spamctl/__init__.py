"""spamctl: referrer-spam filter synchronization."""

__version__ = "0.1.0"
