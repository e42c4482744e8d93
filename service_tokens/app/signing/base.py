"""
Base class for algorithm bindings.
"""

from abc import ABC, abstractmethod
from typing import ClassVar


class SigningBinding(ABC):
    """A fixed algorithm name paired with sign/verify over caller-supplied keys.

    The ``algorithm`` constant is what the engine writes into, and compares
    against, the token header. It is never looked up from token input.
    """

    algorithm: ClassVar[str]

    @property
    @abstractmethod
    def signature_size(self) -> int:
        """Length in bytes of every signature this binding produces."""

    @abstractmethod
    def sign(self, message: bytes) -> bytes:
        """Sign ``message`` and return the raw signature."""

    @abstractmethod
    def verify(self, message: bytes, signature: bytes) -> bool:
        """Return whether ``signature`` is valid for ``message``.

        Implementations must return False for a signature of the wrong
        length without handing it to the underlying primitive.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(algorithm={self.algorithm!r})"
