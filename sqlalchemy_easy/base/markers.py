import re
from collections import deque
from collections.abc import Mapping

from ..errors import UnresolvedBinding

NAMED_MARKER = re.compile(r":\w+")
POSITIONAL_MARKER = "?"


def is_named_marker(token):
    return isinstance(token, str) and NAMED_MARKER.fullmatch(token.strip()) is not None


def is_positional_marker(token):
    return isinstance(token, str) and token.strip() == POSITIONAL_MARKER


def normalize_marker(key):
    key = str(key)
    return key if key.startswith(":") else f":{key}"


class BindingSupply:
    """
    Values available while building one statement: a FIFO queue for ``?``
    markers and a lookup table for ``:name`` markers.
    """
    def __init__(self, positional=(), named=None):
        self.positional = deque(positional)
        self.named = {normalize_marker(k): v for k, v in (named or {}).items()}

    @classmethod
    def from_bindings(cls, bindings):
        if not bindings:
            return cls()

        if isinstance(bindings, Mapping):
            positional = [v for k, v in bindings.items() if isinstance(k, int)]
            named = {k: v for k, v in bindings.items() if not isinstance(k, int)}
            return cls(positional, named)

        return cls(bindings)

    def next_positional(self):
        if not self.positional:
            raise UnresolvedBinding("Not enough values for the positional markers")
        return self.positional.popleft()

    def lookup(self, marker):
        if marker not in self.named:
            raise UnresolvedBinding(f"No value bound to marker {marker}")
        return self.named[marker]


class BindingResolver:
    """
    Turns column values and WHERE values into (marker, value) pairs.

    Every resolved pair is recorded in ``bindings``, which becomes the final
    binding map of the statement being built.
    """
    def __init__(self, supply: BindingSupply):
        self.supply = supply
        self.bindings = {}

    def resolve(self, token, base):
        if is_named_marker(token):
            marker = token.strip()
            value = self.supply.lookup(marker)
        elif is_positional_marker(token):
            marker = self._synthesize(base)
            value = self.supply.next_positional()
        else:
            return self.bind(token, base)

        self.bindings[marker] = value
        return marker, value

    def bind(self, value, base):
        """Bind a literal to a fresh marker derived from ``base``."""
        marker = self._synthesize(base)
        self.bindings[marker] = value
        return marker, value

    def _synthesize(self, base):
        stem = ":" + re.sub(r"\W", "_", str(base))
        marker = stem
        suffix = 2
        while marker in self.bindings or marker in self.supply.named:
            marker = f"{stem}_{suffix}"
            suffix += 1
        return marker
