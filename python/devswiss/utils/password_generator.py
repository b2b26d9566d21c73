"""
Secure password generation utilities.

Generation runs in three steps: the raw options are validated into a
GenerationRequest, the request is turned into a character pool, and the
pool is sampled with a cryptographically secure random source.
"""

import logging
import secrets
import string
from typing import FrozenSet, Iterable, List, NamedTuple, Optional, Protocol, runtime_checkable

from ..exceptions import (
    EmptyCharacterPoolError,
    InvalidCountError,
    InvalidLengthError,
    NoCharacterSetEnabledError,
    RandomSourceError,
)

logger = logging.getLogger(__name__)

# Character sets
UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
NUMBERS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# Characters that look alike in many fonts
AMBIGUOUS_CHARS = frozenset("0O1lI")

DEFAULT_LENGTH = 16
DEFAULT_COUNT = 1


class GenerationRequest(NamedTuple):
    """Resolved password generation options."""
    length: int = DEFAULT_LENGTH
    count: int = DEFAULT_COUNT
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = True
    exclude_ambiguous: bool = False
    custom_exclusions: FrozenSet[str] = frozenset()

    def enabled_sets(self) -> List[str]:
        """Names of the enabled character sets, in pool order."""
        names = []
        if self.include_uppercase:
            names.append("uppercase")
        if self.include_lowercase:
            names.append("lowercase")
        if self.include_numbers:
            names.append("numbers")
        if self.include_symbols:
            names.append("symbols")
        return names


@runtime_checkable
class RandomSource(Protocol):
    """Anything that returns n uniformly distributed bytes."""

    def read(self, n: int) -> bytes:
        ...


class SystemRandomSource:
    """Random bytes from the operating system CSPRNG."""

    def read(self, n: int) -> bytes:
        try:
            return secrets.token_bytes(n)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceError(f"Secure random source unavailable: {e}") from e


_default_source = SystemRandomSource()


def validate(length: int = DEFAULT_LENGTH,
             count: int = DEFAULT_COUNT,
             no_uppercase: bool = False,
             no_lowercase: bool = False,
             no_numbers: bool = False,
             no_symbols: bool = False,
             no_ambiguous: bool = False,
             exclude: str = "") -> GenerationRequest:
    """
    Turn raw command line style options into a GenerationRequest.

    Args:
        length: Characters per password
        count: Number of passwords
        no_uppercase: Disable uppercase letters
        no_lowercase: Disable lowercase letters
        no_numbers: Disable digits
        no_symbols: Disable symbols
        no_ambiguous: Remove visually ambiguous characters (0, O, 1, l, I)
        exclude: Characters to remove from the pool

    Returns:
        Validated request

    Raises:
        NoCharacterSetEnabledError: If every character set is disabled
        InvalidLengthError: If length is below 1
        InvalidCountError: If count is below 1
    """
    request = GenerationRequest(
        length=length,
        count=count,
        include_uppercase=not no_uppercase,
        include_lowercase=not no_lowercase,
        include_numbers=not no_numbers,
        include_symbols=not no_symbols,
        exclude_ambiguous=no_ambiguous,
        custom_exclusions=frozenset(exclude or ""),
    )
    check_request(request)
    return request


def check_request(request: GenerationRequest) -> None:
    """Raise if the request breaks a precondition of pool construction."""
    if not request.enabled_sets():
        raise NoCharacterSetEnabledError(
            "At least one character set must be enabled "
            "(--no-uppercase, --no-lowercase, --no-numbers and --no-symbols were all given)"
        )

    if not isinstance(request.length, int) or request.length < 1:
        raise InvalidLengthError(f"Password length must be at least 1, got {request.length}")

    if not isinstance(request.count, int) or request.count < 1:
        raise InvalidCountError(f"Password count must be at least 1, got {request.count}")


def _unique(chars: Iterable[str]) -> str:
    """Drop repeated characters, keeping the first occurrence."""
    seen = set()
    result = []
    for c in chars:
        if c not in seen:
            seen.add(c)
            result.append(c)
    return "".join(result)


def build_pool(request: GenerationRequest) -> str:
    """
    Build the ordered character pool for a request.

    Sets are joined in the order uppercase, lowercase, numbers, symbols and
    deduplicated before exclusions are applied.

    Raises:
        NoCharacterSetEnabledError: If no set is enabled
        EmptyCharacterPoolError: If exclusions remove every character
    """
    parts = []
    if request.include_uppercase:
        parts.append(UPPERCASE)
    if request.include_lowercase:
        parts.append(LOWERCASE)
    if request.include_numbers:
        parts.append(NUMBERS)
    if request.include_symbols:
        parts.append(SYMBOLS)

    if not parts:
        raise NoCharacterSetEnabledError("At least one character set must be enabled")

    pool = _unique("".join(parts))

    if request.exclude_ambiguous:
        pool = "".join(c for c in pool if c not in AMBIGUOUS_CHARS)

    if request.custom_exclusions:
        pool = "".join(c for c in pool if c not in request.custom_exclusions)

    # Must stay after every exclusion
    if not pool:
        excluded = "".join(sorted(request.custom_exclusions))
        details = ", ".join(request.enabled_sets())
        if request.exclude_ambiguous:
            details += ", ambiguous characters excluded"
        if excluded:
            details += f", excluded {excluded!r}"
        raise EmptyCharacterPoolError(
            f"No characters available after applying exclusions ({details})"
        )

    logger.debug("Character pool has %d characters", len(pool))
    return pool


def random_index(n: int, source: Optional[RandomSource] = None) -> int:
    """
    Draw an integer uniformly from range(n).

    Reads just enough bytes to cover n - 1, masks the excess high bits and
    rejects out of range values, so every index is equally likely.

    Args:
        n: Size of the range, at least 1
        source: Object with a read(n) -> bytes method

    Returns:
        Index in [0, n)
    """
    if n < 1:
        raise ValueError("Range must contain at least one value")
    if n == 1:
        return 0

    source = source or _default_source
    bits = (n - 1).bit_length()
    num_bytes = (bits + 7) // 8
    mask = (1 << bits) - 1

    while True:
        try:
            data = source.read(num_bytes)
        except (OSError, NotImplementedError) as e:
            raise RandomSourceError(f"Secure random source unavailable: {e}") from e

        if len(data) != num_bytes:
            raise RandomSourceError(
                f"Secure random source returned {len(data)} bytes, expected {num_bytes}"
            )

        value = int.from_bytes(data, "big") & mask
        if value < n:
            return value


def generate(pool: str, length: int, count: int,
             source: Optional[RandomSource] = None) -> List[str]:
    """
    Sample passwords from a pool.

    Every character is drawn independently, uniformly and with replacement.

    Args:
        pool: Non-empty character pool
        length: Characters per password
        count: Number of passwords

    Returns:
        List of count passwords
    """
    if not pool:
        raise EmptyCharacterPoolError("No characters available for password generation")

    size = len(pool)
    return [
        "".join(pool[random_index(size, source)] for _ in range(length))
        for _ in range(count)
    ]


def generate_passwords(request: GenerationRequest,
                       source: Optional[RandomSource] = None) -> List[str]:
    """Validate, build the pool and sample every password of a request."""
    check_request(request)
    pool = build_pool(request)
    return generate(pool, request.length, request.count, source)


class PasswordGenerator:
    """Generate secure passwords with customizable character sets."""

    def __init__(self, request: Optional[GenerationRequest] = None,
                 source: Optional[RandomSource] = None):
        """
        Initialize password generator.

        Args:
            request: Generation options, defaults to every set enabled
            source: Random byte source, defaults to the OS CSPRNG
        """
        self.request = request or GenerationRequest()
        self.source = source

        check_request(self.request)
        self.charset = build_pool(self.request)

    def generate(self) -> str:
        """Generate a single password."""
        return generate(self.charset, self.request.length, 1, self.source)[0]

    def generate_many(self) -> List[str]:
        """Generate request.count passwords."""
        return generate(self.charset, self.request.length, self.request.count, self.source)

    def get_charset_info(self) -> str:
        """
        Get human-readable description of character set.

        Returns:
            Description of enabled character types
        """
        info = ", ".join(self.request.enabled_sets())

        if self.request.exclude_ambiguous:
            info += " (excluding ambiguous chars)"

        if self.request.custom_exclusions:
            info += f" (excluding {''.join(sorted(self.request.custom_exclusions))!r})"

        return f"{info} [{len(self.charset)} characters]"


def generate_password(length: int = DEFAULT_LENGTH,
                      no_uppercase: bool = False,
                      no_lowercase: bool = False,
                      no_numbers: bool = False,
                      no_symbols: bool = False,
                      no_ambiguous: bool = False,
                      exclude: str = "",
                      source: Optional[RandomSource] = None) -> str:
    """
    Convenience function to generate a password.

    Returns:
        Generated password string
    """
    request = validate(
        length=length,
        no_uppercase=no_uppercase,
        no_lowercase=no_lowercase,
        no_numbers=no_numbers,
        no_symbols=no_symbols,
        no_ambiguous=no_ambiguous,
        exclude=exclude,
    )
    return generate_passwords(request, source)[0]
