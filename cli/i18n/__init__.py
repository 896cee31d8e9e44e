"""
cli/i18n/__init__.py - 다국어 메시지

한국어(ko)가 기본, 영어(en) 선택 가능.

- CLI는 시작 시 set_lang()으로 컨텍스트 기본 언어를 한 번 정한다
- 컨트롤러/화면은 자기 lang을 t()에 직접 넘긴다

    t("browser.loading")                        # "불러오는 중..."
    t("browser.item_count", lang="en", name="S3 Buckets", count=3)
                                                # "S3 Buckets: 3 items"
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any

SUPPORTED_LANGS: tuple[str, ...] = ("ko", "en")
DEFAULT_LANG = "ko"

_lang: ContextVar[str] = ContextVar("a9s_lang", default=DEFAULT_LANG)


def resolve_lang(lang: str | None) -> str:
    """None이면 컨텍스트 언어, 미지원 코드면 기본 언어"""
    if lang is None:
        lang = _lang.get()
    return lang if lang in SUPPORTED_LANGS else DEFAULT_LANG


def get_lang() -> str:
    return _lang.get()


def set_lang(lang: str) -> None:
    """컨텍스트 기본 언어 설정 (미지원 코드는 기본 언어로)"""
    _lang.set(resolve_lang(lang))


def t(key: str, /, lang: str | None = None, **kwargs: Any) -> str:
    """메시지 키 번역

    등록되지 않은 키는 키 자체를, 치환 인자가 부족하면
    치환 전 템플릿을 그대로 반환한다.
    """
    from cli.i18n.messages import MESSAGES

    translations = MESSAGES.get(key)
    if not translations:
        return key

    template = translations.get(resolve_lang(lang)) or translations.get(DEFAULT_LANG, key)
    if not kwargs:
        return template
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        return template


__all__ = [
    "DEFAULT_LANG",
    "SUPPORTED_LANGS",
    "get_lang",
    "resolve_lang",
    "set_lang",
    "t",
]
