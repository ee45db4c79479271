from .all_models import Style

__all__ = ["Style"]
