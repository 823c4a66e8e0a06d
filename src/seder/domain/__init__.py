"""Domain layer for seder application."""

_SERVICES = {
    "IncomeService": "seder.domain.income",
    "ClientService": "seder.domain.clients",
    "CategoryService": "seder.domain.category",
    "AnalyticsService": "seder.domain.analytics",
}

__all__ = list(_SERVICES)


# Services are resolved lazily so that utils can import domain errors
# without pulling in the database layer.
def __getattr__(name):
    module_name = _SERVICES.get(name)
    if module_name is None:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
    import importlib

    return getattr(importlib.import_module(module_name), name)
