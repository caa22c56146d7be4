"""Short code generation utilities."""

import random
import string
from typing import AbstractSet, Optional


class ShortCodeGenerator:
    """Generate short codes for URLs.

    Codes are drawn uniformly from the Base62 alphabet. Uniqueness, not
    unpredictability, is the goal, so a plain ``random.Random`` is used and
    can be seeded for deterministic tests.
    """

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, default_length: int = 8, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Random source (a fresh unseeded one if not specified)
        """
        if default_length < 1:
            raise ValueError("Short code length must be positive")
        self.default_length = default_length
        self.rng = rng or random.Random()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self.rng.choices(self.BASE62_CHARS, k=length))

    def generate(self, existing_codes: AbstractSet[str], length: Optional[int] = None) -> str:
        """Generate a code that is not in ``existing_codes``.

        Redraws until a miss; with a sparse key space this almost always
        succeeds on the first draw.

        Args:
            existing_codes: Codes already in use
            length: Length of the code (uses default if not specified)

        Returns:
            Short code absent from ``existing_codes``
        """
        while True:
            code = self.generate_random(length)
            if code not in existing_codes:
                return code
