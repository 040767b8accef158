"""
Application package.

``core`` holds configuration, logging, errors and the document store;
``schemas`` the pydantic models; ``services`` the mutation logic; and
``api`` the FastAPI routers that expose it over HTTP.
"""
