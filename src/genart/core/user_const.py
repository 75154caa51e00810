# どこで: `src/genart/core/user_const.py`。
# 何を: 環境変数 `GENART_USER_CONST_<NAME>` で上書きできる「実行時定数」を提供する。
# なぜ: ライブリロード画面から渡された値を、スケッチ側が再ビルドなしで読めるようにするため。

from __future__ import annotations

import logging
import os
import re
from typing import Callable, TypeVar

_logger = logging.getLogger(__name__)

ENV_PREFIX = "GENART_USER_CONST_"

T = TypeVar("T")

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TRUE_TEXTS = frozenset({"1", "true", "yes", "on"})
_FALSE_TEXTS = frozenset({"0", "false", "no", "off"})


def env_var_name(name: str) -> str:
    """定数名に対応する環境変数名を返す。"""
    if not _NAME_RE.match(str(name)):
        raise ValueError(f"user const の名前が不正です: {name!r}")
    return f"{ENV_PREFIX}{name}"


def _parse_bool(text: str) -> bool:
    s = text.strip().lower()
    if s in _TRUE_TEXTS:
        return True
    if s in _FALSE_TEXTS:
        return False
    raise ValueError(f"bool として解釈できません: {text!r}")


def _parser_for(default: object) -> Callable[[str], object]:
    # bool は int のサブクラスなので先に判定する。
    if isinstance(default, bool):
        return _parse_bool
    if isinstance(default, int):
        return lambda s: int(s.strip())
    if isinstance(default, float):
        return lambda s: float(s.strip())
    if isinstance(default, str):
        return str
    raise TypeError(
        f"parse 未指定の user const は bool/int/float/str のみ対応: {type(default)!r}"
    )


def user_const(name: str, default: T, *, parse: Callable[[str], T] | None = None) -> T:
    """実行時定数を解決して返す。

    Parameters
    ----------
    name : str
        定数名（識別子）。環境変数名は `GENART_USER_CONST_<name>`。
    default : T
        環境変数が無いときの値。`parse` 省略時は型推定にも使う。
    parse : Callable[[str], T] or None, optional
        文字列から値への変換関数。

    Returns
    -------
    T
        解決済みの値。

    Raises
    ------
    ValueError
        環境変数の値を解釈できない場合。
    """
    key = env_var_name(name)
    raw = os.environ.get(key)
    if raw is None:
        value = default
    else:
        parser = parse if parse is not None else _parser_for(default)
        try:
            value = parser(raw)  # type: ignore[assignment]
        except Exception as exc:
            raise ValueError(f"user const `{name}` の解釈に失敗しました: {raw!r}") from exc

    _logger.info("genart: const %s: %s = %r", name, type(value).__name__, value)
    return value  # type: ignore[return-value]


__all__ = ["ENV_PREFIX", "env_var_name", "user_const"]
