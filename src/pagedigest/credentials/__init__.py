"""Credential storage for the generation service secret."""

from pagedigest.credentials.store import FileCredentialStore, InMemoryCredentialStore

__all__ = ["FileCredentialStore", "InMemoryCredentialStore"]
