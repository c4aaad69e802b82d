"""Infrastructure layer — subprocess bridge and JSON stream decoding.

Infrastructure may import from domain and config models.
It must never import from services, commands, or output.
"""
