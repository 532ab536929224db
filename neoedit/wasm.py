"""Build configuration for the WebAssembly decoder targets."""

import enum
from dataclasses import dataclass


class WasmTarget(enum.Enum):
    """Platforms a WebAssembly build can target."""

    BROWSER = "browser"
    NODE = "node"
    WASI = "wasi"


@dataclass
class WasmConfig:
    """WebAssembly build settings; memory is counted in 64 KiB pages."""

    target: WasmTarget = WasmTarget.BROWSER
    enable_simd: bool = False
    enable_threads: bool = False
    max_memory_pages: int = 256