"""Abstract HashPrimitive interface shared by every supported algorithm."""

from __future__ import annotations

import abc
from typing import Any

from treedigest.errors import HashStateError


class HashPrimitive(abc.ABC):
    """A resettable, streaming cryptographic hash.

    Any sequence of :meth:`update` calls is equivalent to a single call over
    the concatenation of their chunks.  :meth:`final` returns the digest and
    invalidates the instance until :meth:`init` is called again.
    """

    def __init__(self) -> None:
        self._state: Any = None
        self._finalized = False
        self.init()

    @property
    @abc.abstractmethod
    def identifier(self) -> str:
        """Canonical upper-case algorithm name (e.g., 'SHA256')."""

    @property
    @abc.abstractmethod
    def digest_size(self) -> int:
        """Digest length in bytes."""

    @abc.abstractmethod
    def _new_state(self) -> Any:
        """Return a fresh underlying hash object."""

    def init(self) -> None:
        """Reset to the algorithm's initial state."""
        self._state = self._new_state()
        self._finalized = False

    def update(self, data: bytes | bytearray | memoryview) -> None:
        """Feed *data* into the running state."""
        if self._finalized:
            raise HashStateError(f"{self.identifier} primitive already finalized")
        self._state.update(data)

    def final(self) -> bytes:
        """Return the digest and invalidate the instance."""
        if self._finalized:
            raise HashStateError(f"{self.identifier} primitive already finalized")
        digest = self._state.digest()
        self._state = None
        self._finalized = True
        return digest

    @property
    def finalized(self) -> bool:
        return self._finalized

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.identifier} finalized={self._finalized}>"
