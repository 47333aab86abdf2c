#!/usr/bin/env python
"""
i18n 一致性检查脚本

检查内容：
1. zh_CN.json 和 en_US.json 的 key 一致
2. 同一个 key 在两种语言中的占位符一致
3. 代码中通过 t() / *_i18n() / translate_exception() 引用的 key 都存在

用法：
    python scripts/check_i18n.py
"""

import json
import re
import string
import sys
from pathlib import Path

ROOT = Path(__file__).parent.parent
LOCALES_DIR = ROOT / "core" / "i18n" / "locales"
SOURCE_DIRS = ("config", "core", "ui", "cli")

# t("key") / tn("a", "b") / logger.info_i18n("key") / translate_exception("exception.key")
_KEY_PATTERNS = (
    (re.compile(r"""\bt\(\s*["']([\w.]+)["']"""), ""),
    (re.compile(r"""\btn\(\s*["']([\w.]+)["']\s*,\s*["']([\w.]+)["']"""), ""),
    (re.compile(r"""_i18n\(\s*["']([\w.]+)["']"""), "log."),
    (re.compile(r"""translate_log\(\s*["']([\w.]+)["']"""), "log."),
    (re.compile(r"""translate_exception\(\s*["']([\w.]+)["']"""), ""),
)


def _placeholders(text: str) -> set:
    return {field for _, field, _, _ in string.Formatter().parse(text) if field}


def _referenced_keys() -> dict:
    """扫描源码中引用的翻译 key -> 首次出现的位置"""
    keys = {}
    for source_dir in SOURCE_DIRS:
        for path in sorted((ROOT / source_dir).rglob("*.py")):
            text = path.read_text(encoding="utf-8")
            for pattern, prefix in _KEY_PATTERNS:
                for match in pattern.finditer(text):
                    for key in match.groups():
                        if prefix and not key.startswith(prefix):
                            key = prefix + key
                        keys.setdefault(key, f"{path.relative_to(ROOT)}")
    return keys


def main():
    zh_data = json.loads((LOCALES_DIR / "zh_CN.json").read_text(encoding="utf-8"))
    en_data = json.loads((LOCALES_DIR / "en_US.json").read_text(encoding="utf-8"))
    problems = []

    for key in sorted(set(zh_data) ^ set(en_data)):
        where = "zh_CN.json" if key in zh_data else "en_US.json"
        problems.append(f"仅在 {where} 中: {key}")

    for key in sorted(set(zh_data) & set(en_data)):
        if _placeholders(zh_data[key]) != _placeholders(en_data[key]):
            problems.append(f"占位符不一致: {key}")

    # f-string 拼出来的 key（如 language_selected_{slot}）扫描不到，由测试覆盖
    for key, location in sorted(_referenced_keys().items()):
        if key not in en_data:
            problems.append(f"缺少翻译: {key}（{location}）")

    for problem in problems:
        print(f"  - {problem}")

    print(f"en_US.json: {len(en_data)} 个 key, zh_CN.json: {len(zh_data)} 个 key")
    if problems:
        print(f"i18n 检查未通过，共 {len(problems)} 个问题")
        return 1
    print("i18n 检查通过")
    return 0


if __name__ == "__main__":
    sys.exit(main())
