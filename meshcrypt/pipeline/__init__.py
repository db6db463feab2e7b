"""
Pipeline Module

Contains the mesh encryption orchestration.
"""

from .encrypt import encrypt_mesh, run_encryption_pass, EncryptionPass, EncryptionResult

__all__ = [
    'encrypt_mesh',
    'run_encryption_pass',
    'EncryptionPass',
    'EncryptionResult'
]
