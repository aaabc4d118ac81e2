from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .template.markers import Markers, DEFAULT_MARKERS
from .template.parser import DEFAULT_MAX_CHAIN_LENGTH

SCHEMA_VERSION = 1
DEFAULT_CFG_FILE = "sauce.yaml"

# --------------------------------------------------------------------------- #
# ДЕФОЛТЫ
# --------------------------------------------------------------------------- #
_DEFAULT_CFG: Dict[str, Any] = {
    "schema_version": SCHEMA_VERSION,
    "markers": {"open": DEFAULT_MARKERS.open, "close": DEFAULT_MARKERS.close},
    # защита от патологически длинных цепочек модификаторов
    "max_chain_length": DEFAULT_MAX_CHAIN_LENGTH,
}

# --------------------------------------------------------------------------- #
# YAML loader
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class SauceConfig:
    """Настройки синтаксиса шаблонов."""
    markers: Markers = field(default_factory=Markers)
    max_chain_length: int = DEFAULT_MAX_CHAIN_LENGTH

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> SauceConfig:
        """
        Строит конфиг из словаря (уже слитого с дефолтами).

        Raises:
            ConfigError: При неверных значениях
        """
        markers_raw = raw.get("markers") or {}
        if not isinstance(markers_raw, dict):
            raise ConfigError("'markers' must be a mapping with 'open' and 'close'")
        try:
            markers = Markers(
                open=str(markers_raw.get("open", DEFAULT_MARKERS.open)),
                close=str(markers_raw.get("close", DEFAULT_MARKERS.close)),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid markers: {e}") from e

        max_chain = raw.get("max_chain_length", DEFAULT_MAX_CHAIN_LENGTH)
        if isinstance(max_chain, bool) or not isinstance(max_chain, int) or max_chain < 1:
            raise ConfigError(f"'max_chain_length' must be a positive integer, got {max_chain!r}")

        return cls(markers=markers, max_chain_length=max_chain)


DEFAULT_CONFIG = SauceConfig()


# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _merge_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Накладываем значения пользователя поверх дефолтов."""
    cfg = dict(_DEFAULT_CFG)
    cfg.update(raw)                      # пользовательские ключи перекрывают
    markers = dict(_DEFAULT_CFG["markers"])
    if isinstance(raw.get("markers"), dict):
        markers.update(raw["markers"])
        cfg["markers"] = markers
    return cfg


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def load_config(path: Path = Path(DEFAULT_CFG_FILE)) -> SauceConfig:
    """
    Загрузить sauce.yaml.

    • Если файла нет — вернуть дефолты.
    • Если schema_version отсутствует — считаем, что это актуальная версия.
    • Проверяем несовместимость схем.
    """
    if not path.exists():
        return DEFAULT_CONFIG

    try:
        with path.open(encoding="utf-8") as f:
            raw = _yaml.load(f) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")

    if raw.get("schema_version", SCHEMA_VERSION) != SCHEMA_VERSION:
        raise ConfigError(
            f"Unsupported config schema {raw.get('schema_version')} "
            f"(tool expects {SCHEMA_VERSION})"
        )

    return SauceConfig.from_dict(_merge_defaults(raw))


__all__ = ["SauceConfig", "DEFAULT_CONFIG", "DEFAULT_CFG_FILE", "SCHEMA_VERSION", "load_config"]
