"""Engine: payload encode/resolve orchestration over storage backends."""

from payloadkit.engine.resolver import PayloadResolver

__all__ = ["PayloadResolver"]
