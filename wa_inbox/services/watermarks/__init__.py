from .store import InMemoryWatermarkStore, JsonWatermarkStore, WatermarkStore

__all__ = ["InMemoryWatermarkStore", "JsonWatermarkStore", "WatermarkStore"]
