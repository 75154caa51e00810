# どこで: `src/genart/core/output_paths.py`。
# 何を: 出力ファイル名（stem と run_id）から、config の出力ルート配下の保存先パスを決める。
# なぜ: seed 違いの試行を上書きせずに並べて残せるようにするため。

from __future__ import annotations

import re
from pathlib import Path

from genart.core.runtime_config import output_root_dir


def _sanitize(text: str) -> str:
    """ファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(text))


def _run_id_suffix(run_id: str | int | None) -> str:
    """run_id の接尾辞（例: `_69420`）を返す。未指定なら空文字を返す。"""

    if run_id is None:
        return ""
    sanitized = _sanitize(str(run_id).strip())
    if not sanitized:
        return ""
    return f"_{sanitized}"


def output_path(stem: str, *, ext: str = "svg", run_id: str | int | None = None) -> Path:
    """`output_root/<stem>[_run_id].<ext>` を返す。

    Raises
    ------
    ValueError
        stem または ext が空の場合。
    """

    stem_norm = _sanitize(str(stem).strip())
    if not stem_norm:
        raise ValueError("stem は空でない必要がある")
    ext_norm = str(ext).lstrip(".").strip()
    if not ext_norm:
        raise ValueError("ext は空でない必要がある")

    return output_root_dir() / f"{stem_norm}{_run_id_suffix(run_id)}.{ext_norm}"


__all__ = ["output_path"]
