"""
Animation Module

Clips and layered controller that play reconstruction targets back.
"""

from .clips import DecryptionClip, create_decryption_clip, blend_shape_property
from .controller import (
    AnimatorController,
    ControllerLayer,
    ControllerParameter,
    ControllerState,
    DecryptionLayerData,
    build_controller
)

__all__ = [
    'DecryptionClip',
    'create_decryption_clip',
    'blend_shape_property',
    'AnimatorController',
    'ControllerLayer',
    'ControllerParameter',
    'ControllerState',
    'DecryptionLayerData',
    'build_controller'
]
