from fastapi import Request

from taxpayer_registry.core.registry import TaxPayerRegistry


def get_registry(request: Request) -> TaxPayerRegistry:
    """The registry owned by the running app, built in ``create_app``."""
    return request.app.state.registry
