"""Domain layer for ledgerkit.

Services are imported lazily so that the database layer can import
``ledgerkit.domain.entities`` without pulling the services (which import
the database layer) in a cycle.
"""

_SERVICES = {
    "MoneyMovementService": "ledgerkit.domain.movement",
    "TransactionQueryService": "ledgerkit.domain.transaction",
    "StatementService": "ledgerkit.domain.statement",
    "AccountService": "ledgerkit.domain.account",
    "UserService": "ledgerkit.domain.user",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
