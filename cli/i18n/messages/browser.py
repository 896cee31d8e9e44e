"""
cli/i18n/messages/browser.py - Browser Messages

Contains translations for the resource browser: header, status bar,
quick actions, profile/region switching, and modal dialogs.
"""

from __future__ import annotations

BROWSER_MESSAGES = {
    # =========================================================================
    # Header
    # =========================================================================
    "header_title": {
        "ko": "a9s - AWS 리소스 브라우저",
        "en": "a9s - AWS Resource Browser",
    },
    "header_context": {
        "ko": "리전: {region} | 프로파일: {profile}",
        "en": "Region: {region} | Profile: {profile}",
    },
    "not_configured": {
        "ko": "설정되지 않음",
        "en": "not configured",
    },
    # =========================================================================
    # Status Bar
    # =========================================================================
    "welcome": {
        "ko": "':' 리소스 선택 | 1: EC2 | 2: S3 | q: 종료",
        "en": "':' select resource | 1: EC2 | 2: S3 | q: quit",
    },
    "loading": {
        "ko": "불러오는 중...",
        "en": "Loading...",
    },
    "error": {
        "ko": "오류: {detail}",
        "en": "Error: {detail}",
    },
    "auto_on": {
        "ko": "auto:on",
        "en": "auto:on",
    },
    "auto_off": {
        "ko": "auto:off",
        "en": "auto:off",
    },
    "auto_enabled": {
        "ko": "자동 새로고침 켜짐",
        "en": "Auto-refresh enabled",
    },
    "auto_disabled": {
        "ko": "자동 새로고침 꺼짐",
        "en": "Auto-refresh disabled",
    },
    "item_count": {
        "ko": "{name}: {count}개 항목",
        "en": "{name}: {count} items",
    },
    "key_help": {
        "ko": "f: 새로고침 | a: 자동 | p: 프로파일 | r: 리전 | :: 메뉴 | q: 종료",
        "en": "f: refresh | a: auto | p: profile | r: region | :: menu | q: quit",
    },
    "unknown_resource": {
        "ko": "알 수 없는 리소스: {key}",
        "en": "Unknown resource: {key}",
    },
    "no_resource": {
        "ko": "선택된 리소스가 없습니다",
        "en": "No resource selected",
    },
    "busy": {
        "ko": "다른 작업이 진행 중입니다",
        "en": "Another operation is in progress",
    },
    "cancelled": {
        "ko": "취소됨",
        "en": "Cancelled",
    },
    # =========================================================================
    # Quick Actions
    # =========================================================================
    "action_unavailable": {
        "ko": "'{key}' 작업은 {name}에서 사용할 수 없습니다",
        "en": "'{key}' is not available for {name}",
    },
    "no_selection": {
        "ko": "먼저 행을 선택하세요",
        "en": "Please select a row first",
    },
    "no_identifier": {
        "ko": "{index}번 행의 ID를 가져올 수 없습니다",
        "en": "Could not get ID for row {index}",
    },
    "action_running": {
        "ko": "{label} 진행 중: {id}...",
        "en": "Running {label}: {id}...",
    },
    "action_done": {
        "ko": "{label} 요청 완료: {id}",
        "en": "Successfully initiated {label} for {id}",
    },
    "action_failed": {
        "ko": "{label} 실패 ({id}): {detail}",
        "en": "Failed to {label} {id}: {detail}",
    },
    # =========================================================================
    # Profile / Region
    # =========================================================================
    "profile_label": {
        "ko": "프로파일",
        "en": "Profile",
    },
    "region_label": {
        "ko": "리전",
        "en": "Region",
    },
    "switching_profile": {
        "ko": "프로파일 전환 중: {name}...",
        "en": "Switching to profile: {name}...",
    },
    "switching_region": {
        "ko": "리전 전환 중: {name}...",
        "en": "Switching to region: {name}...",
    },
    "switched_profile": {
        "ko": "프로파일 전환 완료: {name}",
        "en": "Switched to profile: {name}",
    },
    "switched_region": {
        "ko": "리전 전환 완료: {name}",
        "en": "Switched to region: {name}",
    },
    "switch_profile_failed": {
        "ko": "프로파일 전환 실패: {detail}",
        "en": "Failed to switch profile: {detail}",
    },
    "switch_region_failed": {
        "ko": "리전 전환 실패: {detail}",
        "en": "Failed to switch region: {detail}",
    },
    # =========================================================================
    # Modals
    # =========================================================================
    "menu_title": {
        "ko": "리소스 선택",
        "en": "Select Resource",
    },
    "search_label": {
        "ko": "검색: ",
        "en": "Search: ",
    },
    "no_match": {
        "ko": "일치하는 리소스가 없습니다",
        "en": "No matching resources",
    },
    "confirm_title": {
        "ko": "확인",
        "en": "Confirm",
    },
    "confirm_hint": {
        "ko": "y: 예 | n/Esc: 아니오",
        "en": "y: Yes | n/Esc: No",
    },
    "input_hint": {
        "ko": "Enter: 확인 | Esc: 취소",
        "en": "Enter: confirm | Esc: cancel",
    },
    "menu_hint": {
        "ko": "↑/↓: 이동 | Enter: 선택 | Esc: 닫기",
        "en": "↑/↓: move | Enter: select | Esc: close",
    },
}
