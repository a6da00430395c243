"""beatsync - install BEAT content into IDE integrations."""

__version__ = "0.1.0"
