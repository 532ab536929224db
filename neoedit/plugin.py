"""Descriptors and automation parameters for the audio plugin suite."""

import enum
from dataclasses import dataclass


class PluginFormat(enum.Enum):
    """Supported audio plugin formats."""

    VST3 = "vst3"
    CLAP = "clap"
    AUDIO_UNIT = "audio_unit"


class NeoPluginType(enum.Enum):
    """Kinds of plugin in the suite."""

    PLAYER = "player"
    ENCODER = "encoder"
    SPATIAL_PANNER = "spatial_panner"


@dataclass(frozen=True)
class PluginDescriptor:
    """Metadata a host needs to register a plugin."""

    id: str
    name: str
    vendor: str
    version: str
    format: PluginFormat
    plugin_type: NeoPluginType
    input_channels: int
    output_channels: int


@dataclass(frozen=True)
class PluginParameter:
    """An automatable plugin parameter."""

    id: int
    name: str
    min: float
    max: float
    default: float
    unit: str


_VENDOR = "NEO Audio Project"
_VERSION = "0.1.0"
_STEM_SLOTS = 8


def neo_plugin_descriptors():
    """Return the default descriptors: player, encoder and spatial panner."""
    return [
        PluginDescriptor(
            id="com.neo-audio.player",
            name="NEO Player",
            vendor=_VENDOR,
            version=_VERSION,
            format=PluginFormat.VST3,
            plugin_type=NeoPluginType.PLAYER,
            input_channels=0,
            output_channels=2,
        ),
        PluginDescriptor(
            id="com.neo-audio.encoder",
            name="NEO Encoder",
            vendor=_VENDOR,
            version=_VERSION,
            format=PluginFormat.VST3,
            plugin_type=NeoPluginType.ENCODER,
            input_channels=16,
            output_channels=0,
        ),
        PluginDescriptor(
            id="com.neo-audio.spatial",
            name="NEO Spatial Panner",
            vendor=_VENDOR,
            version=_VERSION,
            format=PluginFormat.VST3,
            plugin_type=NeoPluginType.SPATIAL_PANNER,
            input_channels=2,
            output_channels=2,
        ),
    ]


def _stem_parameters(stem):
    yield PluginParameter(100 + stem, f"Stem {stem} Volume", -96.0, 12.0, 0.0, "dB")
    yield PluginParameter(200 + stem, f"Stem {stem} Mute", 0.0, 1.0, 0.0, "")
    yield PluginParameter(300 + stem, f"Stem {stem} Solo", 0.0, 1.0, 0.0, "")
    yield PluginParameter(400 + stem, f"Stem {stem} Pan", -1.0, 1.0, 0.0, "")


def player_parameters():
    """Return the player's parameters: master volume, then four per stem slot."""
    params = [PluginParameter(0, "Master Volume", -96.0, 12.0, 0.0, "dB")]
    for stem in range(_STEM_SLOTS):
        params.extend(_stem_parameters(stem))
    return params