"""Service layer — card pipeline, rendering, and delivery.

Services may import from domain, infrastructure, and plugins. Only the HTTP
delivery mode reaches into ``namebingo.web``, and it does so lazily.
They must never import from commands or output.
"""
