from .bootstrap import BootstrapState, IdentityBootstrap

__all__ = ["BootstrapState", "IdentityBootstrap"]
