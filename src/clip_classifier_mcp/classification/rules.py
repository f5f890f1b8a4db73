"""Static rule tables for the heuristic content classifier.

Both tables are ordered. Structural rules feed the code-likelihood score;
language rules are evaluated in order and the first language reaching the
highest score wins ties.
"""

import re
from typing import Tuple

from .models import LanguageRule, ScoringRule

_M = re.MULTILINE
_I = re.IGNORECASE


def _rule(pattern: str, weight: float, flags: int = 0) -> ScoringRule:
    return ScoringRule(re.compile(pattern, flags), weight)


def _language(language: str, *patterns: Tuple[str, int]) -> LanguageRule:
    return LanguageRule(
        language, tuple(re.compile(pattern, flags) for pattern, flags in patterns)
    )


STRUCTURAL_RULES: Tuple[ScoringRule, ...] = (
    # JavaScript / TypeScript
    _rule(r"\b(const|let|var|function|class|import|export|async|await|return)\s+\w+", 3),
    _rule(r"=>\s*[{(]", 3),
    _rule(r"\(\s*\)\s*=>", 3),
    _rule(r"\.(map|filter|reduce|forEach|find|some|every)\s*\(", 2),
    # Python
    _rule(r"\bdef\s+\w+\s*\(", 3),
    _rule(r"\bclass\s+\w+(\s*\(.*\))?\s*:", 3),
    _rule(r"\bimport\s+\w+(\s+as\s+\w+)?(\s+from\s+\w+)?", 2),
    _rule(r"\bif\s+.*:\s*$", 2, _M),
    _rule(r"^\s+(print|return|yield|raise|pass|break|continue)\b", 2, _M),
    # Java / C# / C++
    _rule(r"\b(public|private|protected|static|void|int|string|boolean|class|interface)\s+\w+", 3, _I),
    _rule(r"\bSystem\.(out\.println|Console\.WriteLine)", 3),
    # HTML / JSX
    _rule(r"<\w+(\s+\w+(=[\"'][^\"']*[\"'])?)*\s*/?>", 2),
    _rule(r"</\w+>", 2),
    _rule(r"className\s*=\s*[\"']", 3),
    # CSS
    _rule(r"\{[\s\S]*?:\s*[^;]+;[\s\S]*?\}", 2),
    _rule(r"\.([\w-]+)\s*\{", 2),
    _rule(r"@(media|keyframes|import|font-face)\s", 3),
    # SQL
    _rule(r"\b(SELECT|INSERT|UPDATE|DELETE|FROM|WHERE|JOIN|CREATE|ALTER|DROP)\b", 3, _I),
    # Upper-case only: prose such as "select one from the list" stays out.
    _rule(
        r"\b(SELECT\s+.+?\s+FROM|INSERT\s+INTO|UPDATE\s+\w+\s+SET|DELETE\s+FROM"
        r"|CREATE\s+(TABLE|DATABASE|INDEX|VIEW))\b",
        6,
    ),
    # Shell
    _rule(r"^#!", 3, _M),
    _rule(r"\$\([^)]+\)", 2),
    _rule(r"\b(echo|grep|sed|awk|curl|wget|npm|yarn|pip|git)\s+", 2),
    # JSON
    _rule(r"^\s*\{\s*\"[\w]+\"\s*:", 3, _M),
    _rule(r"^\s*\"[\w$@.-]+\"\s*:", 3, _M),
    _rule(r"^\s*\[\s*\{", 2, _M),
    # Generic structure
    _rule(r";\s*$", 1, _M),
    _rule(r"\{\s*\n", 1),
    _rule(r"^\s{2,}\w+", 0.5, _M),
    _rule(r"//.*$", 1, _M),
    _rule(r"/\*[\s\S]*?\*/", 1),
    _rule(r"#.*$", 0.5, _M),
)


LANGUAGE_RULES: Tuple[LanguageRule, ...] = (
    _language(
        "javascript",
        (r"\bfunction\s+\w+\s*\(", 0),
        (r"\bconst\s+\w+\s*=\s*(async\s*)?\(", 0),
        (r"\bimport\s+.*\s+from\s+['\"][^'\"]+['\"]", 0),
        (r"\bexport\s+(default\s+)?(function|class|const)", 0),
        (r"=>\s*\{", 0),
        (r"\.(then|catch|finally)\s*\(", 0),
    ),
    _language(
        "typescript",
        (r":\s*(string|number|boolean|any|void|never)\b", 0),
        (r"interface\s+\w+\s*\{", 0),
        (r"type\s+\w+\s*=", 0),
        (r"<\w+(\s*,\s*\w+)*>", 0),
        (r"as\s+(string|number|boolean|const)", 0),
    ),
    _language(
        "python",
        (r"\bdef\s+\w+\s*\([^)]*\)\s*(->\s*\w+)?:", 0),
        (r"\bclass\s+\w+(\([^)]*\))?:", 0),
        (r"\bimport\s+\w+|from\s+\w+\s+import", 0),
        (r"\bif\s+__name__\s*==\s*['\"]__main__['\"]\s*:", 0),
        (r"\bprint\s*\(", 0),
    ),
    _language(
        "html",
        (r"<!DOCTYPE\s+html>", _I),
        (r"<html[\s>]", _I),
        (r"</?(div|span|p|a|img|ul|li|table|form|input|button|head|body)\b", _I),
    ),
    _language(
        "css",
        (r"^\s*\.[a-zA-Z][\w-]*\s*\{", _M),
        (r"^\s*#[a-zA-Z][\w-]*\s*\{", _M),
        (r"@media\s*\([^)]+\)", 0),
        (r":\s*(flex|grid|block|inline|none|absolute|relative|fixed)\s*;", 0),
    ),
    _language(
        "json",
        (r"^\s*\{\s*\"[^\"]+\"\s*:", _M),
        (r"^\s*\[\s*\{?\s*\"?", _M),
    ),
    _language(
        "sql",
        (r"\bSELECT\s+[\w*,\s]+\s+FROM\b", _I),
        (r"\bCREATE\s+(TABLE|DATABASE|INDEX)\b", _I),
        (r"\bINSERT\s+INTO\b", _I),
    ),
    _language(
        "bash",
        (r"^#!", _M),
        (r"\$\{?\w+\}?", 0),
        (r"\b(echo|export|source|alias)\s+", 0),
    ),
)
