"""
Decryption Clips

Constant animation clips that hold a blend target at its decryption key.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

DEFAULT_FRAME_RATE = 60.0
RENDERER_TYPE = "SkinnedMeshRenderer"


def blend_shape_property(target_name: str) -> str:
    """Animated property path of a blend target's weight"""
    return f"blendShape.{target_name}"


@dataclass
class DecryptionClip:
    """
    A single-curve clip driving one target weight.

    The curve has one keyframe at time 0 whose value is the raw key, so the
    target plays back at exactly the weight that restores the mesh.
    """
    target_name: str
    weight: float
    frame_rate: float = DEFAULT_FRAME_RATE
    path: str = ""
    component: str = RENDERER_TYPE
    keyframes: List[Tuple[float, float]] = field(default_factory=list)

    def __post_init__(self):
        self.weight = float(self.weight)
        if not self.keyframes:
            self.keyframes = [(0.0, self.weight)]

    @property
    def property_name(self) -> str:
        return blend_shape_property(self.target_name)

    def evaluate(self, time: float = 0.0) -> float:
        """Curve value at `time` (constant between and outside keyframes)"""
        value = self.keyframes[0][1]
        for key_time, key_value in self.keyframes:
            if key_time <= time:
                value = key_value
        return value

    def to_dict(self):
        return {
            'frame_rate': self.frame_rate,
            'curves': [
                {
                    'path': self.path,
                    'type': self.component,
                    'property': self.property_name,
                    'keyframes': [{'time': t, 'value': v} for t, v in self.keyframes]
                }
            ]
        }


def create_decryption_clip(target_name: str, key: float, frame_rate: float = DEFAULT_FRAME_RATE) -> DecryptionClip:
    """Clip that drives `target_name` to the weight `key`"""
    return DecryptionClip(target_name=target_name, weight=key, frame_rate=frame_rate)
