"""Short code generation utilities."""

import random
import re
from typing import Callable, List, Optional


ADJECTIVES = (
    "quick", "lazy", "sleepy", "noisy", "hungry", "brave", "bright", "calm", "eager", "fancy",
    "gentle", "happy", "jolly", "kind", "lively", "merry", "nice", "proud", "silly", "witty",
    "clever", "dizzy", "grumpy", "lucky", "mighty", "plucky", "shiny", "tiny", "zany", "breezy",
    "bubbly", "cheery", "comfy", "cozy", "crispy", "curly", "fluffy", "fuzzy", "gloomy", "groovy",
    "hazy", "icy", "jazzy", "jumpy", "quirky", "snappy", "sunny", "tasty", "vibey", "zippy",
)

NOUNS = (
    "fox", "dog", "cat", "mouse", "bird", "wolf", "lion", "tiger", "bear", "frog",
    "fish", "shark", "whale", "squid", "crab", "snake", "lizard", "gecko", "newt", "otter",
    "seal", "duck", "goose", "swan", "crow", "raven", "owl", "hawk", "eagle", "pigeon",
    "robin", "finch", "sparrow", "horse", "pony", "donkey", "mule", "cow", "bull", "pig",
    "sheep", "goat", "llama", "alpaca", "camel", "koala", "panda", "sloth", "lemur", "hippo",
)


class ShortCodeGenerator:
    """Generate human-readable ``adjective-noun`` short codes."""
    
    SEPARATOR = "-"
    CODE_PATTERN = re.compile(r"^[a-z]+-[a-z]+(-[0-9]+)?$")
    
    def __init__(
        self,
        max_attempts: int = 100,
        rng: Optional[random.Random] = None,
    ):
        """Initialize short code generator.
        
        Args:
            max_attempts: Random draws tried before falling back to the unused pairs
            rng: Optional random source (a private ``random.Random`` by default)
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()
    
    @property
    def keyspace_size(self) -> int:
        """Number of distinct adjective-noun pairs."""
        return len(ADJECTIVES) * len(NOUNS)
    
    def generate_random(self) -> str:
        """Draw one adjective and one noun uniformly at random.
        
        Returns:
            Random short code
        """
        adjective = self.rng.choice(ADJECTIVES)
        noun = self.rng.choice(NOUNS)
        return f"{adjective}{self.SEPARATOR}{noun}"
    
    def generate_unique(self, exists: Callable[[str], bool]) -> str:
        """Generate a short code for which ``exists`` returns False.
        
        Rejection sampling over the pairs, capped at ``max_attempts`` draws.
        Past the cap a random unused pair is picked, and once every pair is
        taken a numeric suffix is appended, so this always terminates.
        
        Args:
            exists: Callback reporting whether a code is already stored
            
        Returns:
            Unique short code
        """
        for _ in range(self.max_attempts):
            code = self.generate_random()
            if not exists(code):
                return code
        
        remaining = self._unused_pairs(exists)
        if remaining:
            return self.rng.choice(remaining)
        
        return self._generate_suffixed(exists)
    
    def _unused_pairs(self, exists: Callable[[str], bool]) -> List[str]:
        return [
            f"{adjective}{self.SEPARATOR}{noun}"
            for adjective in ADJECTIVES
            for noun in NOUNS
            if not exists(f"{adjective}{self.SEPARATOR}{noun}")
        ]
    
    def _generate_suffixed(self, exists: Callable[[str], bool]) -> str:
        base = self.generate_random()
        suffix = 2
        while exists(f"{base}{self.SEPARATOR}{suffix}"):
            suffix += 1
        return f"{base}{self.SEPARATOR}{suffix}"
    
    @classmethod
    def is_valid_format(cls, code: str) -> bool:
        """Check if code has the ``adjective-noun`` shape (optionally suffixed).
        
        Args:
            code: Code to validate
            
        Returns:
            True if valid format
        """
        return bool(cls.CODE_PATTERN.fullmatch(code))
