# core/__init__.py
"""
core - a9s 브라우저 코어

터미널 UI와 무관한 브라우저 로직 전체를 포함하는 최상위 패키지입니다.

아키텍처:
    core/
    ├── browser/        # 컨트롤러, 자동 새로고침 타이머, 호출 게이트
    ├── client/         # AWS Provider Client (프로파일/리전 스코프 boto3)
    ├── resources/      # 리소스 종류, 레지스트리, 빠른 작업
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.browser import BrowserController, RESERVED_KEYS
    from core.client import AWSClient
    from core.resources import default_registry

    controller = BrowserController(default_registry(RESERVED_KEYS), AWSClient(), view)
    controller.select("ec2")
"""

from core import browser, client, config, exceptions, resources

__all__: list[str] = [
    # 서브패키지
    "browser",
    "client",
    "resources",
    # 모듈
    "config",
    "exceptions",
]
