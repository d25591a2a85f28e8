"""Core domain layer - entities, interfaces, services, and exceptions."""

from niklaus.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
