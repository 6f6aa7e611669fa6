"""Short code generation utilities."""

import random
import string
from typing import Awaitable, Callable, Optional


class ShortCodeGenerator:
    """Generate random fixed-length short codes."""
    
    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9
    
    def __init__(self, default_length: int = 6, rng: Optional[random.Random] = None):
        """Initialize short code generator.
        
        Args:
            default_length: Default length for generated codes
            rng: Optional random source (a seeded ``random.Random`` in tests)
        """
        if default_length < 1:
            raise ValueError("Short code length must be at least 1")
        self.default_length = default_length
        self._rng = rng or random.SystemRandom()
    
    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.
        
        Args:
            length: Length of the code (uses default if not specified)
            
        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self._rng.choices(self.BASE62_CHARS, k=length))
    
    async def allocate(
        self,
        claim: Callable[[str], Awaitable[bool]],
        max_attempts: int,
    ) -> Optional[str]:
        """Draw random codes until one is successfully claimed.
        
        Args:
            claim: Async callback that tries to take a candidate and returns
                True on success, False if the candidate is unavailable
            max_attempts: Upper bound on the number of candidates drawn
            
        Returns:
            The claimed short code, or None when every attempt collided
        """
        for _ in range(max_attempts):
            code = self.generate_random()
            if await claim(code):
                return code
        return None
