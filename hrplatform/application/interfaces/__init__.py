"""
Application layer interfaces (ports).

These protocols define the contracts between the application layer
and the infrastructure layer, following the Dependency Inversion Principle.
"""

from hrplatform.application.interfaces.provisioning import (IDatabaseProvisioner,
                                                            IIdentityBootstrapper,
                                                            INotificationGateway,
                                                            ISchemaApplier)

__all__ = [
    "IDatabaseProvisioner",
    "ISchemaApplier",
    "IIdentityBootstrapper",
    "INotificationGateway",
]
