# application/services/template_expander.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from application.ports.wire import TemplateExpanderPort
from domain.http_message import Headers


class TemplateExpandError(Exception):
    pass


class PlaceholderExpander(TemplateExpanderPort):
    """
    Header 値の ${...} を展開する。
    - ドット参照対応: ${auth.token}
    - 値全体が1つのテンプレートで list を返す場合は複数のヘッダ値に展開
      例: X-Forwarded-For: ${ips} with ips=["1.1.1.1", "2.2.2.2"]
          => ["1.1.1.1", "2.2.2.2"]
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    def expand(self, headers: Headers) -> Headers:
        out: Headers = {}
        for name, values in headers.items():
            expanded: List[str] = []
            for v in values:
                expanded.extend(self._expand_value(v))
            out[name] = expanded
        return out

    def _expand_value(self, s: str) -> List[str]:
        if s is None:
            return [""]
        if "${" not in s:
            return [s]

        # テンプレートが1つだけで、かつ全体がテンプレートの場合
        if s.startswith("${") and s.endswith("}") and s.count("${") == 1:
            value = self._eval(s[2:-1].strip())
            if isinstance(value, list):
                return ["" if x is None else str(x) for x in value]
            return ["" if value is None else str(value)]

        return [self._render_scalar(s)]

    def _render_scalar(self, s: str) -> str:
        result = ""
        i = 0
        while i < len(s):
            start = s.find("${", i)
            if start < 0:
                result += s[i:]
                break
            result += s[i:start]
            end = s.find("}", start + 2)
            if end < 0:
                raise TemplateExpandError(f"unclosed template: {s}")
            value = self._eval(s[start + 2 : end].strip())

            if isinstance(value, list):
                # 文字列コンテキストでは join
                value = ",".join("" if x is None else str(x) for x in value)

            result += "" if value is None else str(value)
            i = end + 1

        return result

    def _eval(self, expr: str) -> Any:
        root_name, _, rest = expr.partition(".")
        if root_name not in self._values:
            raise TemplateExpandError(f"unknown root: {root_name}")

        cur = self._values[root_name]
        if rest == "":
            return cur
        for part in rest.split("."):
            cur = self._resolve_part(cur, part)
        return cur

    def _resolve_part(self, cur: Any, part: str) -> Any:
        if part.isdigit():
            idx = int(part)
            if not isinstance(cur, list):
                raise TemplateExpandError(f"index access on non-list: {part}")
            if idx >= len(cur):
                return ""
            return cur[idx]
        if isinstance(cur, dict):
            return cur.get(part, "")
        return getattr(cur, part, "")
