from .nyse_provider import NyseProvider

__all__ = ["NyseProvider"]
