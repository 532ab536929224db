from neoedit.wasm import WasmConfig, WasmTarget


def test_wasm_config_default():
    config = WasmConfig()
    assert config.target is WasmTarget.BROWSER
    assert config.enable_simd is False
    assert config.enable_threads is False
    assert config.max_memory_pages == 256


def test_wasm_config_custom():
    config = WasmConfig(target=WasmTarget.WASI, enable_threads=True, max_memory_pages=512)
    assert config.target is WasmTarget.WASI
    assert config.enable_threads is True
    assert config.enable_simd is False
    assert config.max_memory_pages == 512
    assert config != WasmConfig()