"""
Invitation asset bundles.

Templates ship ordered asset lists; events carry keyed overrides. Lists are
projected to ``default_<index>`` keys once, when the template is loaded, and
the event overrides are laid over them key by key.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence

ASSET_KINDS = ("images", "colors", "fonts")


@dataclass(frozen=True)
class AssetBundle:
    images: Dict[str, str] = field(default_factory=dict)
    colors: Dict[str, str] = field(default_factory=dict)
    fonts: Dict[str, str] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Dict[str, str]]:
        return {kind: dict(getattr(self, kind)) for kind in ASSET_KINDS}


def _positional(values: Optional[Sequence[str]]) -> Dict[str, str]:
    return {f"default_{idx}": value for idx, value in enumerate(values or [])}


def project_template_assets(assets: Optional[Mapping[str, Sequence[str]]]) -> AssetBundle:
    """Turn a template's ordered asset lists into keyed maps"""
    assets = assets or {}
    return AssetBundle(**{kind: _positional(assets.get(kind)) for kind in ASSET_KINDS})


def overrides_from_config(config: Optional[Mapping[str, Mapping[str, str]]]) -> AssetBundle:
    """Read an event's ``user_template_config`` as a bundle of overrides"""
    config = config or {}
    return AssetBundle(**{kind: dict(config.get(kind) or {}) for kind in ASSET_KINDS})


def merge_assets(base: AssetBundle, overrides: AssetBundle) -> AssetBundle:
    """Per key, the override wins; keys only in ``base`` are kept"""
    return AssetBundle(**{
        kind: {**getattr(base, kind), **getattr(overrides, kind)}
        for kind in ASSET_KINDS
    })
