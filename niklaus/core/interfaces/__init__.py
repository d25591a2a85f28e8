"""Core interfaces (ports) for dependency injection."""

from niklaus.core.interfaces.auth import IAuthProvider
from niklaus.core.interfaces.inference import (
    HealthStatus,
    IInferenceProvider,
    InferenceProviderType,
)
from niklaus.core.interfaces.live import ILiveCollectionFeed, ILiveSubscription, RawSnapshot
from niklaus.core.interfaces.storage import ICatalogAdmin, IOrderWriter, IProfileStore

__all__ = [
    # Auth interfaces
    "IAuthProvider",
    # Inference interfaces
    "IInferenceProvider",
    "InferenceProviderType",
    "HealthStatus",
    # Live collection interfaces
    "ILiveCollectionFeed",
    "ILiveSubscription",
    "RawSnapshot",
    # Storage interfaces
    "IProfileStore",
    "IOrderWriter",
    "ICatalogAdmin",
]
