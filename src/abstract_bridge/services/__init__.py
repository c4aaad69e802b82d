"""Service layer — named abstract-cli operations built on the bridge.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
