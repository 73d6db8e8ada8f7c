import math
from dataclasses import dataclass
from typing import List


@dataclass
class Embedding:
    """A dense vector produced by an embedding model."""
    vector: List[float]

    @property
    def dimension(self) -> int:
        return len(self.vector)

    def vector_as_list(self) -> List[float]:
        return list(self.vector)

    def normalize(self) -> "Embedding":
        """Scale the vector to unit length in place. A zero vector is left as is."""
        norm = math.sqrt(sum(x * x for x in self.vector))
        if norm > 0:
            self.vector = [x / norm for x in self.vector]
        return self

    @classmethod
    def from_list(cls, vector: List[float]) -> "Embedding":
        return cls(vector=[float(x) for x in vector])
