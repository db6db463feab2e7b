"""
Encryption Module

Displacement generation, reconstruction target building and key encoding.
"""

from .errors import EncryptionError, MissingGeometryError, InvalidKeyError
from .displacement import seed_from_code, DisplacementGenerator, generate_offsets, displace_positions
from .keys import normalize_key, clamp_target_count, resize_keys, MIN_TARGETS, MAX_TARGETS, DEFAULT_KEY
from .targets import ReconstructionTarget, build_target, compute_scale, target_name
from .settings import EncryptionConfig

__all__ = [
    'EncryptionError',
    'MissingGeometryError',
    'InvalidKeyError',
    'seed_from_code',
    'DisplacementGenerator',
    'generate_offsets',
    'displace_positions',
    'normalize_key',
    'clamp_target_count',
    'resize_keys',
    'MIN_TARGETS',
    'MAX_TARGETS',
    'DEFAULT_KEY',
    'ReconstructionTarget',
    'build_target',
    'compute_scale',
    'target_name',
    'EncryptionConfig'
]
