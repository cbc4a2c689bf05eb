"""
Allocator interposition for SAT engines.

Engines receive an allocator at construction time and obtain the tables they
own through it (for the Z3 engine: the per-variable value table and the
zero-terminated clause store). Memory held natively by the underlying solver
library is outside this interface and is not accounted here.
"""
from typing import Optional, Protocol


class Allocator(Protocol):
    """Three-operation allocator interface expected by engines.

    Every method reports failure by returning ``None``; callers turn that
    into :class:`~zuspec.be.sat.errors.OutOfMemory`.
    """

    def alloc(self, size: int) -> Optional[bytearray]:
        """Allocate a zero-filled block of ``size`` bytes."""
        ...

    def realloc(self, block: bytearray, old_size: int, new_size: int) -> Optional[bytearray]:
        """Resize ``block`` from ``old_size`` to ``new_size`` bytes.

        The first ``min(old_size, new_size)`` bytes are preserved.
        """
        ...

    def free(self, block: bytearray, size: int) -> None:
        """Release a block previously obtained with ``alloc``/``realloc``."""
        ...


class HostAllocator:
    """Allocator backed by Python ``bytearray`` objects.

    Keeps byte accounting so tests and callers can verify that sessions
    release everything they allocated.

    Attributes:
        limit: Optional cap on bytes in use; requests above it fail
        in_use: Bytes currently allocated
        peak: Highest value ``in_use`` has reached
        blocks: Number of live blocks
    """

    def __init__(self, limit: Optional[int] = None):
        self.limit = limit
        self.in_use = 0
        self.peak = 0
        self.blocks = 0

    def _fits(self, delta: int) -> bool:
        return self.limit is None or self.in_use + delta <= self.limit

    def _commit(self, delta: int) -> None:
        self.in_use += delta
        self.peak = max(self.peak, self.in_use)

    def alloc(self, size: int) -> Optional[bytearray]:
        if size < 0 or not self._fits(size):
            return None
        try:
            block = bytearray(size)
        except (MemoryError, OverflowError):
            return None
        self._commit(size)
        self.blocks += 1
        return block

    def realloc(self, block: bytearray, old_size: int, new_size: int) -> Optional[bytearray]:
        if new_size < 0:
            return None
        if len(block) != old_size:
            raise ValueError(f"realloc: block has {len(block)} bytes, caller claims {old_size}")
        if not self._fits(new_size - old_size):
            return None
        if new_size < old_size:
            del block[new_size:]
        else:
            try:
                block.extend(bytes(new_size - old_size))
            except (MemoryError, OverflowError):
                # the block is left as it was
                return None
        self._commit(new_size - old_size)
        return block

    def free(self, block: bytearray, size: int) -> None:
        if len(block) != size:
            raise ValueError(f"free: block has {len(block)} bytes, caller claims {size}")
        self.in_use -= size
        self.blocks -= 1
        # Drop contents so stale references cannot be read back as valid data.
        del block[:]

    def __repr__(self) -> str:
        return f"HostAllocator(in_use={self.in_use}, peak={self.peak}, blocks={self.blocks})"
