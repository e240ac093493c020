from .mixins import NamedModelMixin, TimestampedMixin

__all__ = [
    "TimestampedMixin",
    "NamedModelMixin",
]
