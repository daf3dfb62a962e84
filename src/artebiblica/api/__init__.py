"""Arte Bíblica - FastAPI REST API layer.

This package contains the FastAPI application, Pydantic request models, and
the style-aware prompt compilation.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request validation.
prompt_builder
    Drawing styles and style template interpolation.
"""
