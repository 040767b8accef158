"""
Pydantic schema definitions.

``user``, ``gift_exchange``, ``drawing`` and ``participant`` describe the
nested user document as it is stored and returned to clients;
``requests`` holds the request payloads and ``results`` the update
acknowledgements.
"""
