"""
cli/i18n/messages/cli_commands.py - CLI Command Messages

Contains translations for Click CLI commands, help text, and error messages.
"""

from __future__ import annotations

CLI_MESSAGES = {
    # =========================================================================
    # CLI Help Text
    # =========================================================================
    "help_intro": {
        "ko": "AWS 리소스를 터미널에서 탐색하고 간단한 작업을 실행합니다.",
        "en": "Browse AWS resources in the terminal and run quick actions.",
    },
    "help_profile": {
        "ko": "사용할 AWS 프로파일",
        "en": "AWS profile to use",
    },
    "help_region": {
        "ko": "사용할 AWS 리전",
        "en": "AWS region to use",
    },
    "help_resource": {
        "ko": "시작 시 표시할 리소스 키 (예: ec2)",
        "en": "Resource key to open on start (e.g. ec2)",
    },
    "help_no_auto_refresh": {
        "ko": "자동 새로고침 끄고 시작",
        "en": "Start with auto-refresh disabled",
    },
    "help_lang": {
        "ko": "표시 언어 (ko, en)",
        "en": "Display language (ko, en)",
    },
    "help_select_profile": {
        "ko": "시작 전에 프로파일을 대화형으로 선택",
        "en": "Pick a profile interactively before starting",
    },
    "help_debug": {
        "ko": "디버그 로그 활성화",
        "en": "Enable debug logging",
    },
    "help_version": {
        "ko": "버전 정보 출력",
        "en": "Print version information",
    },
    "help_resources": {
        "ko": "사용 가능한 리소스 목록 출력",
        "en": "List available resources",
    },
    # =========================================================================
    # Commands
    # =========================================================================
    "version_line": {
        "ko": "a9s 버전 {version}",
        "en": "a9s version {version}",
    },
    "resources_title": {
        "ko": "사용 가능한 리소스",
        "en": "Available Resources",
    },
    "col_key": {
        "ko": "키",
        "en": "Key",
    },
    "col_name": {
        "ko": "이름",
        "en": "Name",
    },
    "col_actions": {
        "ko": "빠른 작업",
        "en": "Quick Actions",
    },
    "select_profile_prompt": {
        "ko": "AWS 프로파일을 선택하세요",
        "en": "Select an AWS profile",
    },
    "no_profiles": {
        "ko": "설정된 AWS 프로파일이 없습니다. 기본 자격 증명을 사용합니다.",
        "en": "No AWS profiles configured. Using default credentials.",
    },
    # =========================================================================
    # Errors
    # =========================================================================
    "client_init_failed": {
        "ko": "AWS 클라이언트 초기화 실패: {error}",
        "en": "Failed to initialize AWS client: {error}",
    },
    "config_error": {
        "ko": "설정 파일 오류: {error}",
        "en": "Configuration error: {error}",
    },
    "unknown_resource": {
        "ko": "알 수 없는 리소스: {key} ('a9s resources'로 목록 확인)",
        "en": "Unknown resource: {key} (see 'a9s resources')",
    },
    "log_file": {
        "ko": "로그 파일: {path}",
        "en": "Log file: {path}",
    },
}
