"""Infrastructure layer — name sources and template loading.

This layer does the I/O (files, subprocesses, template lookup).
It may import domain error types but never services, commands, or output.
"""
