"""SUBRELAY

Subscription registry for a channel relay proxy. It records which users follow
which named channels and answers the fan-out question "who needs to hear about
new activity on this channel?" safely under concurrent access.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
