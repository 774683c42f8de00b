"""Infrastructure layer: snapshot files, domain sources, filter storage.

This layer depends on stdlib, third-party libs (requests), and the domain
layer's models and errors.  It must never import from services, commands,
or output.
"""
