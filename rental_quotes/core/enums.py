from enum import Enum


class Season(str, Enum):
    HIGH = "high"
    LOW = "low"

    def __str__(self):
        return self.value


class StoreBackend(str, Enum):
    REDIS = "redis"
    MEMORY = "memory"

    def __str__(self):
        return self.value


class ArtifactKind(str, Enum):
    DOCUMENT = "document"
    IMAGE = "image"

    def __str__(self):
        return self.value
