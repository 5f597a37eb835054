import re
from dataclasses import dataclass, field

from sqlcompose.expressions.models import MARKER

# ==================================================
# Placeholder Schemes
# ==================================================

# A "%" followed by one character, or a trailing "%" with nothing after it.
_DIRECTIVE = re.compile(r"%(.?)", re.DOTALL)


@dataclass(frozen=True)
class PlaceholderScheme:
    """
    How generic markers are written for a database driver.

    A token without a slot is static and reused for every parameter ("?", "%s").
    A token with one "%d" slot is positional and numbered from 1 ("$%d", "@p%d", ":%d").
    "%%" stands for a literal percent sign and "%s" is kept as-is for pyformat drivers.
    Any other "%" directive is rejected.
    """

    token: str
    positional: bool = field(init=False)
    _segments: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("Placeholder token must not be empty.")

        # Literal text on either side of each "%d" slot.
        pieces: list[list[str]] = [[]]
        position = 0
        for match in _DIRECTIVE.finditer(self.token):
            pieces[-1].append(self.token[position:match.start()])
            directive = match.group(1)
            if directive == "%":
                pieces[-1].append("%")
            elif directive == "s":
                pieces[-1].append("%s")
            elif directive == "d":
                pieces.append([])
            else:
                raise ValueError(f"Unsupported directive '%{directive}' in placeholder token {self.token!r}.")
            position = match.end()
        pieces[-1].append(self.token[position:])

        slots = len(pieces) - 1
        if slots > 1:
            raise ValueError(f"Placeholder token {self.token!r} must contain at most one '%d' slot, found {slots}.")

        object.__setattr__(self, "positional", slots == 1)
        object.__setattr__(self, "_segments", tuple("".join(piece) for piece in pieces))

    @classmethod
    def parse(cls, token: str) -> "PlaceholderScheme":
        return cls(token=token)

    def token_for(self, position: int) -> str:
        """
        Returns the token for the 1-based parameter position.
        """
        if not self.positional:
            return self._segments[0]
        prefix, suffix = self._segments
        return f"{prefix}{position}{suffix}"

    @property
    def escaped_marker(self) -> str:
        """
        The output for an escaped marker. It stays doubled when the driver itself uses the marker
        as its placeholder, so that it cannot be mistaken for a parameter.
        """
        if not self.positional and self._segments[0] == MARKER:
            return MARKER * 2
        return MARKER
