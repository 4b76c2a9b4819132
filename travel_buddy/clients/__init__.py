from travel_buddy.clients.ai_client import AiClient
from travel_buddy.clients.credentials import (
    CredentialResolver,
    CredentialSource,
    EnvironmentSource,
    ExternalBridgeSource,
    KeyBridge,
    ManualStorageSource,
    default_resolver,
)

__all__ = [
    "AiClient",
    "CredentialResolver",
    "CredentialSource",
    "EnvironmentSource",
    "ExternalBridgeSource",
    "KeyBridge",
    "ManualStorageSource",
    "default_resolver",
]
