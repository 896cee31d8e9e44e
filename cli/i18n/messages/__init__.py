"""
cli/i18n/messages/__init__.py - 메시지 카탈로그

네임스페이스별 메시지 모듈을 "namespace.key" 평면 딕셔너리로 합친다.

    MESSAGES["browser.loading"] == {"ko": "불러오는 중...", "en": "Loading..."}
"""

from __future__ import annotations

from cli.i18n.messages.browser import BROWSER_MESSAGES
from cli.i18n.messages.cli_commands import CLI_MESSAGES

# 키 -> {언어 코드: 템플릿}
Catalog = dict[str, dict[str, str]]

NAMESPACES: dict[str, Catalog] = {
    "browser": BROWSER_MESSAGES,
    "cli": CLI_MESSAGES,
}


def flatten(namespaces: dict[str, Catalog]) -> Catalog:
    """네임스페이스 접두어를 붙여 하나의 카탈로그로 병합

    Raises:
        ValueError: 병합 결과 키가 중복되는 경우
    """
    merged: Catalog = {}
    for namespace, catalog in namespaces.items():
        for key, translations in catalog.items():
            full_key = f"{namespace}.{key}"
            if full_key in merged:
                raise ValueError(f"duplicate message key: {full_key}")
            merged[full_key] = translations
    return merged


MESSAGES: Catalog = flatten(NAMESPACES)

__all__ = ["MESSAGES", "NAMESPACES", "Catalog", "flatten"]
