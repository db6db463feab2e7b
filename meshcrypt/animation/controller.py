"""
Decryption Controller

Builds the layered animation controller that plays every reconstruction
target back at its key. Each layer exposes a float parameter holding the
normalized key and a default state whose clip drives the target weight to
the raw key. The two values are set independently.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..encryption.keys import normalize_key
from .clips import DecryptionClip

DEFAULT_CONTROLLER_NAME = "CombinedDecryptionAnimator"


@dataclass
class DecryptionLayerData:
    """Target name, raw key and clip produced for one decryption layer"""
    target_name: str
    key: float
    clip: DecryptionClip


@dataclass
class ControllerParameter:
    name: str
    default: float
    type: str = "Float"


@dataclass
class ControllerState:
    name: str
    motion: DecryptionClip


@dataclass
class ControllerLayer:
    name: str
    default_weight: float
    states: List[ControllerState] = field(default_factory=list)
    default_state: Optional[str] = None

    def get_default_state(self) -> Optional[ControllerState]:
        for state in self.states:
            if state.name == self.default_state:
                return state
        return None


@dataclass
class AnimatorController:
    name: str
    parameters: List[ControllerParameter] = field(default_factory=list)
    layers: List[ControllerLayer] = field(default_factory=list)

    def get_parameter(self, name: str) -> ControllerParameter:
        for parameter in self.parameters:
            if parameter.name == name:
                return parameter
        raise KeyError(f"No controller parameter named {name!r}")

    def playback_weights(self, time: float = 0.0):
        """Target weights driven by each layer's default state at `time`"""
        weights = {}
        for layer in self.layers:
            state = layer.get_default_state()
            if state is not None:
                weights[state.motion.target_name] = state.motion.evaluate(time)
        return weights

    def to_dict(self):
        return {
            'name': self.name,
            'parameters': [
                {'name': p.name, 'type': p.type, 'default': p.default}
                for p in self.parameters
            ],
            'layers': [
                {
                    'name': layer.name,
                    'default_weight': layer.default_weight,
                    'default_state': layer.default_state,
                    'states': [
                        {
                            'name': state.name,
                            'target': state.motion.target_name,
                            'weight': state.motion.weight
                        }
                        for state in layer.states
                    ]
                }
                for layer in self.layers
            ]
        }


def build_controller(layers_data: List[DecryptionLayerData],
                     name: str = DEFAULT_CONTROLLER_NAME) -> AnimatorController:
    """
    Wire decryption layers into a controller.

    For layer i this adds parameter ``decrypt{i}`` (default: normalized key),
    layer ``Layer_{i}`` with full weight, and default state ``DecryptState_{i}``
    playing the layer's clip.

    Args:
        layers_data: One entry per reconstruction target, in creation order
        name: Controller name

    Returns:
        AnimatorController
    """
    controller = AnimatorController(name=name)

    for i, data in enumerate(layers_data):
        # normalized independently for each layer
        controller.parameters.append(
            ControllerParameter(name=f"decrypt{i}", default=normalize_key(data.key))
        )

        state = ControllerState(name=f"DecryptState_{i}", motion=data.clip)
        layer = ControllerLayer(
            name=f"Layer_{i}",
            default_weight=1.0,
            states=[state],
            default_state=state.name
        )
        controller.layers.append(layer)

    return controller
