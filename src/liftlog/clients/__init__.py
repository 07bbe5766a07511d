"""Backend clients for liftlog."""

from .base import BaseRemoteGateway, RemoteGateway

__all__ = ["BaseRemoteGateway", "RemoteGateway"]
