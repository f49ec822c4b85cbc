"""
Katsuyo

Japanese verb and adjective conjugation drills with spaced-repetition review.
"""

from . import structured
from . import conjugation
from . import scheduler
from . import validator
from . import policy
from . import db
from . import selector
from . import learning

__version__ = "0.1.0"
__all__ = ["structured", "conjugation", "scheduler", "validator", "policy", "db", "selector", "learning"]
