"""
Application layer.

Use-case orchestration on top of the core components.
"""
