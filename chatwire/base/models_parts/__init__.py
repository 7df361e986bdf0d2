"""Wire DTO implementations; import from ``chatwire.base.models``."""
