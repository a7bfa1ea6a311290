"""Application ports - interfaces for external adapters."""

from grantkeeper.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory
from grantkeeper.application.ports.user_session import UserSession

__all__ = [
    "UnitOfWork",
    "UnitOfWorkFactory",
    "UserSession",
]
