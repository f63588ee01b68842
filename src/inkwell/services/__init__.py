# src/inkwell/services/__init__.py
"""Business logic services for the Inkwell application.

Submodules are imported directly (``from inkwell.services.pagination import
paginate``) so that repositories can depend on the pagination primitives
without import cycles.
"""
