"""HR platform control plane: tenant catalog and tenant provisioning."""

__version__ = "1.0.0"
