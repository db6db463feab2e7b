"""
meshcrypt Source Modules

Geometry obfuscation through deterministic vertex displacement, reversible
with blend targets keyed by decryption keys.
"""

from . import geometry
from . import encryption
from . import mesh
from . import animation
from . import pipeline
from . import utils

__version__ = "1.0.0"
__all__ = [
    'geometry',
    'encryption',
    'mesh',
    'animation',
    'pipeline',
    'utils'
]
