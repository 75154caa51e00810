# どこで: `src/genart/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 幾何の許容誤差や乱数 seed、出力先をユーザーが差し替えられるようにするため。

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

_logger = logging.getLogger(__name__)

_KNOWN_TOP_LEVEL_KEYS = frozenset({"version", "paths", "geometry", "random", "export"})


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """genart の実行時設定。"""

    config_path: Path | None
    output_dir: Path
    tolerance: float
    rng_seed: int
    max_attempts: int
    svg_decimals: int


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """明示 config パスを設定し、キャッシュを捨てる。None で既定の探索に戻る。"""

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _EXPLICIT_CONFIG_PATH = None if path is None else Path(path).expanduser()
    _CONFIG_CACHE = None


def _discover_config_path() -> Path | None:
    candidates = (
        Path.cwd() / ".genart" / "config.yaml",
        Path.home() / ".config" / "genart" / "config.yaml",
    )
    return next((p for p in candidates if p.is_file()), None)


def _parse_yaml(text: str, *, source: str) -> dict[str, Any]:
    """YAML を mapping として読み、未知のトップレベルキーを警告する。"""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    unknown = sorted(str(k) for k in data if k not in _KNOWN_TOP_LEVEL_KEYS)
    if unknown:
        _logger.warning("config.yaml の未知のキーを無視します: source=%s keys=%s", source, unknown)
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """mapping を再帰的にマージした新しい dict を返す（後勝ち）。"""
    out = dict(base)
    for key, value in override.items():
        current = out.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            out[key] = _merge(current, value)
        else:
            out[key] = value
    return out


def _lookup(payload: dict[str, Any], key: str) -> Any:
    """`geometry.tolerance` のようなドット区切りキーで値を引く。"""
    node: Any = payload
    parts = key.split(".")
    for depth, part in enumerate(parts):
        if not isinstance(node, dict):
            parent = ".".join(parts[:depth])
            raise RuntimeError(f"{parent} は mapping である必要があります: got={node!r}")
        node = node.get(part)
        if node is None:
            raise RuntimeError(
                f"{key} が未設定です（同梱 default_config.yaml を確認してください）"
            )
    return node


def _number(payload: dict[str, Any], key: str, kind: type) -> Any:
    value = _lookup(payload, key)
    # YAML の true/false は int として受け付けない。
    if not isinstance(value, (int, float, str)) or isinstance(value, bool):
        raise RuntimeError(f"{key} は {kind.__name__} である必要があります: got={value!r}")
    try:
        return kind(value)
    except ValueError as exc:
        raise RuntimeError(f"{key} は {kind.__name__} である必要があります: got={value!r}") from exc


def _load_payload(explicit: Path | None, discovered: Path | None) -> dict[str, Any]:
    try:
        blob = (
            resources.files("genart")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    payload = _parse_yaml(blob, source="genart/resource/default_config.yaml")
    for path in (discovered, explicit):
        if path is not None:
            override = _parse_yaml(path.read_text(encoding="utf-8"), source=str(path))
            payload = _merge(payload, override)
    return payload


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.genart/config.yaml` / `~/.config/genart/config.yaml`（先に見つかった方）
    3) `set_config_path(...)` で指定したパス

    Raises
    ------
    FileNotFoundError
        明示パスのファイルが存在しない場合。
    RuntimeError
        YAML の構造・型・version が不正な場合。
    ValueError
        値が許容範囲外の場合。
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit = _EXPLICIT_CONFIG_PATH
    if explicit is not None and not explicit.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit}")
    discovered = _discover_config_path()
    payload = _load_payload(explicit, discovered)

    version = _number(payload, "version", int)
    if version != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version}")

    output_text = str(_lookup(payload, "paths.output_dir")).strip()
    if not output_text:
        raise RuntimeError("paths.output_dir が空です")
    output_dir = Path(os.path.expandvars(os.path.expanduser(output_text)))

    tolerance = _number(payload, "geometry.tolerance", float)
    if not tolerance > 0.0:
        raise ValueError(f"geometry.tolerance は正の値である必要があります: got={tolerance}")

    seed = _number(payload, "random.seed", int)
    max_attempts = _number(payload, "random.max_attempts", int)
    decimals = _number(payload, "export.svg.decimals", int)
    for key, value, lower in (
        ("random.seed", seed, 0),
        ("random.max_attempts", max_attempts, 1),
        ("export.svg.decimals", decimals, 0),
    ):
        if value < lower:
            raise ValueError(f"{key} は {lower} 以上である必要があります: got={value}")

    _CONFIG_CACHE = RuntimeConfig(
        config_path=explicit or discovered,
        output_dir=output_dir,
        tolerance=tolerance,
        rng_seed=seed,
        max_attempts=max_attempts,
        svg_decimals=decimals,
    )
    return _CONFIG_CACHE


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""

    return runtime_config().output_dir


__all__ = ["RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
