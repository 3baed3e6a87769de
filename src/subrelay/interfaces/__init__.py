"""Ports used by the SUBRELAY service layer.

Adapters in ``subrelay.adapters`` implement these; the service layer depends
only on the abstractions defined here.
"""
