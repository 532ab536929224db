from neoedit.plugin import (
    NeoPluginType,
    PluginFormat,
    neo_plugin_descriptors,
    player_parameters,
)


def test_plugin_descriptors():
    descs = neo_plugin_descriptors()
    assert len(descs) == 3
    assert descs[0].plugin_type is NeoPluginType.PLAYER
    assert descs[1].plugin_type is NeoPluginType.ENCODER
    assert descs[2].plugin_type is NeoPluginType.SPATIAL_PANNER


def test_plugin_descriptor_channels_and_ids():
    descs = neo_plugin_descriptors()
    assert [(d.input_channels, d.output_channels) for d in descs] == [(0, 2), (16, 0), (2, 2)]
    assert [d.id for d in descs] == [
        "com.neo-audio.player",
        "com.neo-audio.encoder",
        "com.neo-audio.spatial",
    ]
    assert all(d.format is PluginFormat.VST3 for d in descs)
    assert all(d.version == "0.1.0" for d in descs)


def test_player_parameters():
    params = player_parameters()
    assert len(params) == 33
    assert params[0].name == "Master Volume"
    assert params[0].unit == "dB"


def test_player_parameter_ids_unique():
    ids = [p.id for p in player_parameters()]
    assert len(set(ids)) == len(ids)


def test_player_stem_parameters():
    by_id = {p.id: p for p in player_parameters()}
    assert by_id[100].name == "Stem 0 Volume"
    assert (by_id[100].min, by_id[100].max, by_id[100].unit) == (-96.0, 12.0, "dB")
    assert by_id[207].name == "Stem 7 Mute"
    assert (by_id[207].min, by_id[207].max, by_id[207].unit) == (0.0, 1.0, "")
    assert by_id[303].name == "Stem 3 Solo"
    assert (by_id[405].min, by_id[405].max) == (-1.0, 1.0)
    assert by_id[405].name == "Stem 5 Pan"
    assert all(p.default == 0.0 for p in by_id.values())