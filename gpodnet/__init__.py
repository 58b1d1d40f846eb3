"""
gpodder.net synchronization client.

Typed access to the gpodder.net web service: device registry, subscription
sync, episode actions, directory, settings, favorites and suggestions.
"""

__version__ = "0.1.0"
