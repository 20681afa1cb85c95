"""
StarterKit — Frontend Build Configuration
===========================================

What:  Declares how the SPA frontend is bundled, chunked and proxied during
       local development.
How:   A Pydantic model with the defaults below; `to_vite_options()` renders
       it in the camelCase shape the bundler reads, `load_build_config()`
       overlays a JSON file on the defaults.
Who:   The production server (bundle location), the dev proxy, and the
       frontend build.

Defaults:
    base           /
    out_dir        dist            (what production serves, see Settings.static_dir)
    assets_dir     assets
    sourcemap      off
    manual_chunks  vendor → react, react-dom
                   router → react-router-dom
    dev server     port 5173, /api proxied to http://localhost:3001
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ProxyRule(BaseModel):
    """Forward requests under a path prefix to another origin."""
    target: str
    change_origin: bool = True


def _default_manual_chunks() -> Dict[str, List[str]]:
    return {
        "vendor": ["react", "react-dom"],
        "router": ["react-router-dom"],
    }


def _default_proxy() -> Dict[str, ProxyRule]:
    return {"/api": ProxyRule(target="http://localhost:3001", change_origin=True)}


class DevServerConfig(BaseModel):
    port: int = Field(default=5173, ge=1, le=65535)
    proxy: Dict[str, ProxyRule] = Field(default_factory=_default_proxy)


class FrontendBuildConfig(BaseModel):
    """Bundling and dev-server settings for the SPA."""

    base: str = "/"
    out_dir: str = "dist"
    assets_dir: str = "assets"
    sourcemap: bool = False
    manual_chunks: Dict[str, List[str]] = Field(default_factory=_default_manual_chunks)
    dev_server: DevServerConfig = Field(default_factory=DevServerConfig)

    def chunk_for(self, module_id: str) -> Optional[str]:
        """Name of the manual chunk that owns `module_id`, or None for the entry chunk."""
        for chunk, modules in self.manual_chunks.items():
            if module_id in modules:
                return chunk
        return None

    def proxy_rule_for(self, path: str) -> Optional[ProxyRule]:
        """Longest proxy prefix matching `path` on a segment boundary."""
        best: Optional[str] = None
        for prefix in self.dev_server.proxy:
            stripped = prefix.rstrip("/")
            if path == stripped or path.startswith(stripped + "/"):
                if best is None or len(stripped) > len(best.rstrip("/")):
                    best = prefix
        return self.dev_server.proxy[best] if best is not None else None

    def to_vite_options(self) -> Dict[str, Any]:
        return {
            "base": self.base,
            "build": {
                "outDir": self.out_dir,
                "assetsDir": self.assets_dir,
                "sourcemap": self.sourcemap,
                "rollupOptions": {
                    "output": {"manualChunks": {k: list(v) for k, v in self.manual_chunks.items()}},
                },
            },
            "server": {
                "port": self.dev_server.port,
                "proxy": {
                    prefix: {"target": rule.target, "changeOrigin": rule.change_origin}
                    for prefix, rule in self.dev_server.proxy.items()
                },
            },
        }


def load_build_config(path: Optional[Union[str, Path]] = None) -> FrontendBuildConfig:
    """
    Return the build configuration.

    Without `path` the defaults are returned. With `path`, the JSON object in
    that file overrides the defaults field by field (snake_case keys).

    Raises:
        FileNotFoundError: `path` does not exist.
        pydantic.ValidationError: the file content does not fit the model.
    """
    if path is None:
        return FrontendBuildConfig()

    overrides = json.loads(Path(path).read_text(encoding="utf-8"))
    logger.debug("Loaded build config overrides from %s", path)
    return FrontendBuildConfig.model_validate(overrides)
