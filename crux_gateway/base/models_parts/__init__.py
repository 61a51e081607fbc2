"""Request-side model implementations; import from ``base.models``."""
