from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class RandomSource:
    engine: str

    def randint(self, a: int, b: int) -> int:
        raise NotImplementedError

    def choice(self, seq: Sequence[T]) -> T:
        raise NotImplementedError

    def shuffle(self, arr: List[T]) -> None:
        raise NotImplementedError

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        raise NotImplementedError

    def pick_index(self, size: int) -> int:
        """Uniform index into a small fixed list of options."""
        if size <= 0:
            raise ValueError("cannot pick from an empty option list")
        return self.randint(0, size - 1)


class PyRandomSource(RandomSource):
    def __init__(self, seed: Optional[int]):
        super().__init__(engine="py_random")
        self._rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(list(seq))

    def shuffle(self, arr: List[T]) -> None:
        self._rng.shuffle(arr)

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        return self._rng.sample(list(seq), k)


class NumpyPCG64Source(RandomSource):  # pragma: no cover - covered when numpy present
    def __init__(self, seed: Optional[int]):
        try:
            import numpy as np
        except ImportError as exc:
            raise RuntimeError("numpy is not installed; install tambola-gen[pcg]") from exc
        super().__init__(engine="numpy_pcg64")
        self._rng = np.random.Generator(np.random.PCG64(seed))

    def randint(self, a: int, b: int) -> int:
        return int(self._rng.integers(low=a, high=b + 1))

    def choice(self, seq: Sequence[T]) -> T:
        items = list(seq)
        return items[int(self._rng.integers(low=0, high=len(items)))]

    def shuffle(self, arr: List[T]) -> None:
        order = self._rng.permutation(len(arr))
        arr[:] = [arr[int(i)] for i in order]

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        items = list(seq)
        idxs = self._rng.choice(len(items), size=k, replace=False)
        return [items[int(i)] for i in idxs]


def create_rng(engine: str = "py_random", seed: Optional[int] = None) -> RandomSource:
    """Build a random source; seed None draws from OS entropy."""
    engine = (engine or "py_random").strip().lower()
    if engine == "py_random":
        return PyRandomSource(seed)
    if engine == "numpy_pcg64":
        return NumpyPCG64Source(seed)
    raise ValueError(f"Unsupported RNG engine: {engine}")


def derive_parallel_seed(base_seed: int, index: int, purpose: str) -> int:
    """Derive per-batch seed from base seed, index, and purpose using sha256.

    Returns a 63-bit positive integer suitable for seeding common RNGs.
    """
    s = f"{base_seed}|{index}|{purpose}".encode("utf-8")
    digest = hashlib.sha256(s).digest()
    return int.from_bytes(digest[:8], byteorder="big") & ((1 << 63) - 1)
