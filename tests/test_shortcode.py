"""Tests for short code generation."""

import random

import pytest
from shortlinks.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""
    
    def test_generate_random(self):
        """Random codes have the default length and base62 alphabet."""
        generator = ShortCodeGenerator(default_length=6)
        
        code = generator.generate_random()
        assert len(code) == 6
        assert all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
    
    def test_generate_random_custom_length(self):
        """Test random code with custom length."""
        generator = ShortCodeGenerator(default_length=6)
        
        code = generator.generate_random(length=10)
        assert len(code) == 10
        assert all(c in ShortCodeGenerator.BASE62_CHARS for c in code)
    
    def test_seeded_generator_is_reproducible(self):
        """Same seed, same codes."""
        first = ShortCodeGenerator(rng=random.Random(42))
        second = ShortCodeGenerator(rng=random.Random(42))
        
        assert [first.generate_random() for _ in range(5)] == [second.generate_random() for _ in range(5)]
    
    def test_codes_vary(self):
        """Many draws are not all the same code."""
        generator = ShortCodeGenerator(default_length=6)
        
        codes = {generator.generate_random() for _ in range(200)}
        assert len(codes) > 190
    
    def test_rejects_zero_length(self):
        with pytest.raises(ValueError):
            ShortCodeGenerator(default_length=0)


@pytest.mark.asyncio
class TestAllocate:
    """Bounded allocation loop."""
    
    async def test_first_free_candidate_wins(self):
        generator = ShortCodeGenerator(default_length=6)
        seen = []
        
        async def claim(code):
            seen.append(code)
            return True
        
        code = await generator.allocate(claim, max_attempts=5)
        
        assert code == seen[0]
        assert len(seen) == 1
    
    async def test_retries_until_claimed(self):
        generator = ShortCodeGenerator(default_length=6)
        seen = []
        
        async def claim(code):
            seen.append(code)
            return len(seen) == 3
        
        code = await generator.allocate(claim, max_attempts=5)
        
        assert code == seen[-1]
        assert len(seen) == 3
    
    async def test_exhaustion_returns_none(self):
        generator = ShortCodeGenerator(default_length=6)
        attempts = []
        
        async def claim(code):
            attempts.append(code)
            return False
        
        assert await generator.allocate(claim, max_attempts=4) is None
        assert len(attempts) == 4
