"""Dreamizer — FastAPI REST API layer.

Modules
-------
main
    FastAPI application with the route handlers, error mapping and the
    ``main()`` CLI entry point.
models
    Pydantic models for API request and response validation.
prompt_builder
    Dream prompt template compilation.
"""
